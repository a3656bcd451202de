"""Memory-matching game: pair single-language cards that share a word."""

import random

from .config import (
    MAX_MATCHING_WORDS, CARDS_PER_WORD,
    RESOLVE_DELAY, MATCH_FEEDBACK_DELAY, MISMATCH_FEEDBACK_DELAY, CLOCK_INTERVAL,
    BIG_CELEBRATION, CELEBRATION_ORIGIN
)
from .interfaces import Notifier, Scheduler, VocabularyRepository
from .notifications import MessageQueue
from .scheduler import DelayedTransitions
from .vocabulary import resolve_set

IDLE = 'idle'
PLAYING = 'playing'
COMPLETED = 'completed'


def format_time(seconds: int) -> str:
    """Format elapsed seconds as m:ss."""
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}:{secs:02d}"


class MatchCard:
    """One side of a pair: a word's text in a single language."""

    def __init__(self, word_id: str, text: str, language: str):
        self.id = f"{word_id}-{language}"
        self.word_id = word_id
        self.text = text
        self.language = language
        self.is_selected = False
        self.is_matched = False
        self.is_correct_match = False
        self.is_incorrect_match = False

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'word_id': self.word_id,
            'text': self.text,
            'language': self.language,
            'is_selected': self.is_selected,
            'is_matched': self.is_matched,
            'is_correct_match': self.is_correct_match,
            'is_incorrect_match': self.is_incorrect_match
        }


class MatchingGame:
    """Matching engine for one player.

    All mutations happen in response to discrete commands or to callbacks
    from the injected scheduler. reset(), start() and close() drop every
    callback still in flight.
    """

    def __init__(self, repository: VocabularyRepository, scheduler: Scheduler,
                 notifier: Notifier = None, rng: random.Random = None):
        self.repository = repository
        self.notifier = notifier or MessageQueue()
        self.rng = rng or random.Random()
        self._transitions = DelayedTransitions(scheduler)
        self._clock = DelayedTransitions(scheduler)

        self.selected_set_id = None
        self.state = IDLE
        self.cards = []
        self.selected_cards = []  # pending card ids, at most 2
        self.matched_pairs = 0
        self.total_pairs = 0
        self.moves = 0
        self.elapsed = 0
        self.result = None
        self.celebration_origin = CELEBRATION_ORIGIN

    @property
    def is_playing(self) -> bool:
        return self.state == PLAYING

    @property
    def is_completed(self) -> bool:
        return self.state == COMPLETED

    def get_card(self, card_id: str) -> MatchCard | None:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def select_set(self, set_id: str) -> None:
        self.selected_set_id = set_id
        self.reset()

    def anchor_celebrations(self, x: float, y: float) -> None:
        """Burst celebrations from (x, y), given as fractions of the viewport."""
        if not (0 <= x <= 1 and 0 <= y <= 1):
            raise ValueError(f"Celebration origin must be within the viewport, got ({x}, {y})")
        self.celebration_origin = (x, y)

    def start(self, set_id: str = None) -> bool:
        """Deal a new deck from the given or selected set.

        Returns False on precondition errors, leaving the current game untouched.
        """
        if set_id is None:
            set_id = self.selected_set_id
        resolved = resolve_set(self.repository, set_id, self.notifier)
        if resolved is None:
            return False
        _, usable = resolved
        self.selected_set_id = set_id

        words = list(usable)
        self.rng.shuffle(words)
        words = words[:MAX_MATCHING_WORDS]

        cards = []
        for word in words:
            languages = self.rng.sample(word.languages, CARDS_PER_WORD)
            for language in languages:
                cards.append(MatchCard(word.id, word.translations[language], language))
        self.rng.shuffle(cards)

        self._cancel_pending()
        self.cards = cards
        self.selected_cards = []
        self.total_pairs = len(words)
        self.matched_pairs = 0
        self.moves = 0
        self.elapsed = 0
        self.result = None
        self.state = PLAYING
        self._start_clock()
        return True

    def reset(self) -> None:
        self._cancel_pending()
        self.cards = []
        self.selected_cards = []
        self.matched_pairs = 0
        self.total_pairs = 0
        self.moves = 0
        self.elapsed = 0
        self.result = None
        self.state = IDLE

    def close(self) -> None:
        """Tear down: nothing scheduled by this game may run afterwards."""
        self._cancel_pending()

    def select_card(self, card_id: str) -> bool:
        """Select a card. Returns False when the click is ignored."""
        if not self.is_playing or len(self.selected_cards) >= 2:
            return False
        card = self.get_card(card_id)
        if card is None or card.is_selected or card.is_matched:
            return False

        card.is_selected = True
        self.selected_cards.append(card_id)
        if len(self.selected_cards) == 2:
            self._transitions.schedule(RESOLVE_DELAY, self._resolve)
        return True

    def _resolve(self) -> None:
        self.moves += 1
        first_id, second_id = self.selected_cards
        first, second = self.get_card(first_id), self.get_card(second_id)

        if first and second and first.word_id == second.word_id and first_id != second_id:
            first.is_correct_match = second.is_correct_match = True
            self._transitions.schedule(MATCH_FEEDBACK_DELAY, lambda: self._commit_match(first, second))
        else:
            for card in (first, second):
                if card:
                    card.is_incorrect_match = True
            self._transitions.schedule(MISMATCH_FEEDBACK_DELAY, lambda: self._commit_mismatch(first, second))

    def _commit_match(self, first: MatchCard, second: MatchCard) -> None:
        for card in (first, second):
            card.is_matched = True
            card.is_correct_match = False
            card.is_selected = False
        self.matched_pairs += 1
        self.selected_cards = []
        self.check_completion()

    def _commit_mismatch(self, first: MatchCard | None, second: MatchCard | None) -> None:
        for card in (first, second):
            if card:
                card.is_selected = False
                card.is_incorrect_match = False
        self.selected_cards = []

    def check_completion(self) -> bool:
        """Finish the game once every pair is matched. Safe to call repeatedly."""
        if self.state != PLAYING:
            return self.is_completed
        if self.total_pairs == 0 or self.matched_pairs != self.total_pairs:
            return False

        self.state = COMPLETED
        self._clock.cancel_all()
        self.result = {
            'elapsed_time': self.elapsed,
            'moves': self.moves,
            'matched_pairs': self.matched_pairs
        }
        self.notifier.notify(
            'Congratulations!',
            f"You finished the game in {format_time(self.elapsed)} with {self.moves} moves!"
        )
        self.notifier.celebrate(BIG_CELEBRATION, self.celebration_origin)
        return True

    def _start_clock(self) -> None:
        self._clock.cancel_all()
        self._clock.schedule(CLOCK_INTERVAL, self._tick)

    def _tick(self) -> None:
        if not self.is_playing:
            return
        self.elapsed += 1
        self._clock.schedule(CLOCK_INTERVAL, self._tick)

    def _cancel_pending(self) -> None:
        self._transitions.cancel_all()
        self._clock.cancel_all()

    def snapshot(self) -> dict:
        return {
            'state': self.state,
            'set_id': self.selected_set_id,
            'cards': [card.to_dict() for card in self.cards],
            'selected_cards': list(self.selected_cards),
            'matched_pairs': self.matched_pairs,
            'total_pairs': self.total_pairs,
            'moves': self.moves,
            'elapsed': self.elapsed,
            'elapsed_display': format_time(self.elapsed),
            'result': self.result
        }
