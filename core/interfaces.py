"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class VocabularyRepository(ABC):
    """Abstract base class for the vocabulary set store."""

    @abstractmethod
    def load_sets(self) -> list:
        """Load all vocabulary sets. Returns list of VocabularySet (normalized)."""
        pass

    @abstractmethod
    def save_sets(self, sets: list) -> None:
        """Replace the stored collection with the given VocabularySet list."""
        pass

    def get_set(self, set_id: str):
        """Look up a single set by id. Returns VocabularySet or None."""
        for vocab_set in self.load_sets():
            if vocab_set.id == set_id:
                return vocab_set
        return None


class Scheduler(ABC):
    """Abstract base class for time-deferred callbacks."""

    @abstractmethod
    def call_later(self, delay: float, callback):
        """Run callback after delay seconds. Returns a handle for cancel()."""
        pass

    @abstractmethod
    def cancel(self, handle) -> None:
        """Cancel a callback returned by call_later. Unknown handles are ignored."""
        pass


class Notifier(ABC):
    """Abstract base class for user-facing messages and cosmetic effects."""

    @abstractmethod
    def notify(self, title: str, description: str, variant: str = 'default') -> None:
        """Show a message. variant is 'default' or 'destructive'."""
        pass

    @abstractmethod
    def celebrate(self, particle_count: int, origin: tuple = (0.5, 0.5)) -> None:
        """Trigger a particle burst anchored at origin (fractions of the viewport)."""
        pass
