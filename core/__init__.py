from .models import VocabWord, VocabularySet
from .interfaces import VocabularyRepository, Scheduler, Notifier
from .scheduler import ManualScheduler, AsyncioScheduler, DelayedTransitions
from .notifications import MessageQueue
from .matching import MatchingGame, MatchCard
from .puzzle import PuzzleGame, PuzzleGrid, PuzzlePiece, DragTracker, BoardRect
from .vocabulary import WordChallenge
from .config import (
    GRID_SIZE, MAX_ATTEMPTS, POINTS_PER_LINE, PIECES_PER_REWARD,
    MAX_MATCHING_WORDS, STORAGE_KEY
)

__all__ = [
    'VocabWord', 'VocabularySet',
    'VocabularyRepository', 'Scheduler', 'Notifier',
    'ManualScheduler', 'AsyncioScheduler', 'DelayedTransitions',
    'MessageQueue',
    'MatchingGame', 'MatchCard',
    'PuzzleGame', 'PuzzleGrid', 'PuzzlePiece', 'DragTracker', 'BoardRect',
    'WordChallenge',
    'GRID_SIZE', 'MAX_ATTEMPTS', 'POINTS_PER_LINE', 'PIECES_PER_REWARD',
    'MAX_MATCHING_WORDS', 'STORAGE_KEY'
]
