"""Buffered notifier used by the server and tests."""

from .config import CELEBRATION_COLORS
from .interfaces import Notifier


def screen_origin(left: float, top: float, width: float, height: float,
                  viewport_width: float, viewport_height: float) -> tuple[float, float]:
    """Centre of an on-screen element as fractions of the viewport."""
    if viewport_width <= 0 or viewport_height <= 0:
        raise ValueError("Viewport dimensions must be positive")
    x = (left + width / 2) / viewport_width
    y = (top + height / 2) / viewport_height
    return min(max(x, 0.0), 1.0), min(max(y, 0.0), 1.0)


class MessageQueue(Notifier):
    """Collects messages and celebrations until a client drains them."""

    def __init__(self):
        self.messages = []
        self.celebrations = []

    def notify(self, title: str, description: str, variant: str = 'default') -> None:
        self.messages.append({
            'title': title,
            'description': description,
            'variant': variant
        })

    def celebrate(self, particle_count: int, origin: tuple = (0.5, 0.5)) -> None:
        self.celebrations.append({
            'particle_count': particle_count,
            'spread': 70,
            'origin': {'x': origin[0], 'y': origin[1]},
            'colors': list(CELEBRATION_COLORS)
        })

    def drain(self) -> dict:
        """Return everything buffered so far and clear the buffers."""
        drained = {'messages': self.messages, 'celebrations': self.celebrations}
        self.messages = []
        self.celebrations = []
        return drained

    @property
    def last_error(self) -> str | None:
        for message in reversed(self.messages):
            if message['variant'] == 'destructive':
                return message['description']
        return None
