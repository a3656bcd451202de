"""Block puzzle game: pieces are earned by answering vocabulary questions."""

import random

from .config import (
    GRID_SIZE, MAX_ATTEMPTS, POINTS_PER_LINE, PIECES_PER_REWARD, REVEAL_DELAY,
    COLORS, PIECE_SHAPES, BIG_CELEBRATION, SMALL_CELEBRATION, CELEBRATION_ORIGIN
)
from .interfaces import Notifier, Scheduler, VocabularyRepository
from .models import new_id
from .notifications import MessageQueue, screen_origin
from .scheduler import DelayedTransitions
from .vocabulary import WordChallenge, make_challenge, resolve_set, ERROR_TITLE, NO_USABLE_WORDS

ANSWERING = 'answering'
PLACING = 'placing'
GAME_OVER = 'game_over'


class PuzzlePiece:
    """A polyomino with a color. Shapes are never mutated."""

    def __init__(self, piece_id: str, shape: list[list[bool]], color: str):
        self.id = piece_id
        self.shape = tuple(tuple(bool(cell) for cell in row) for row in shape)
        self.color = color

    @property
    def height(self) -> int:
        return len(self.shape)

    @property
    def width(self) -> int:
        return len(self.shape[0]) if self.shape else 0

    def filled_cells(self):
        """Yield (row, col) offsets of filled cells."""
        for r, row in enumerate(self.shape):
            for c, filled in enumerate(row):
                if filled:
                    yield r, c

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'shape': [list(row) for row in self.shape],
            'color': self.color
        }


class PuzzleGrid:
    """Square occupancy grid. Each cell is None or the color of a placed piece."""

    def __init__(self, size: int = GRID_SIZE):
        self.size = size
        self.cells = [[None] * size for _ in range(size)]

    def reset(self) -> None:
        self.cells = [[None] * self.size for _ in range(self.size)]

    def fits(self, piece: PuzzlePiece, row: int, col: int) -> bool:
        if row < 0 or col < 0:
            return False
        if row + piece.height > self.size or col + piece.width > self.size:
            return False
        return all(self.cells[row + r][col + c] is None for r, c in piece.filled_cells())

    def fill(self, piece: PuzzlePiece, row: int, col: int) -> None:
        for r, c in piece.filled_cells():
            self.cells[row + r][col + c] = piece.color

    def full_rows(self) -> list[int]:
        return [r for r in range(self.size) if all(cell is not None for cell in self.cells[r])]

    def full_columns(self) -> list[int]:
        return [c for c in range(self.size)
                if all(self.cells[r][c] is not None for r in range(self.size))]

    def clear_lines(self) -> int:
        """Clear every full row and column at once. Returns the number of lines cleared."""
        rows, columns = self.full_rows(), self.full_columns()
        for r in rows:
            self.cells[r] = [None] * self.size
        for c in columns:
            for r in range(self.size):
                self.cells[r][c] = None
        return len(rows) + len(columns)

    def is_empty(self) -> bool:
        return all(cell is None for row in self.cells for cell in row)

    def to_list(self) -> list[list]:
        return [list(row) for row in self.cells]


def random_pieces(rng: random.Random, count: int = PIECES_PER_REWARD) -> list[PuzzlePiece]:
    """Draw pieces with random shapes from the catalog and random colors."""
    return [PuzzlePiece(new_id(), rng.choice(PIECE_SHAPES), rng.choice(COLORS))
            for _ in range(count)]


class PuzzleGame:
    """Puzzle engine for one player."""

    def __init__(self, repository: VocabularyRepository, scheduler: Scheduler,
                 notifier: Notifier = None, rng: random.Random = None):
        self.repository = repository
        self.notifier = notifier or MessageQueue()
        self.rng = rng or random.Random()
        self._transitions = DelayedTransitions(scheduler)

        self.selected_set_id = None
        self.is_playing = False
        self.state = ANSWERING
        self.grid = PuzzleGrid()
        self.pieces = []
        self.challenge = None
        self.showing_answer = False
        self.score = 0
        self.correct_words = 0
        self.result = None
        self.celebration_origin = CELEBRATION_ORIGIN
        self._words = []

    def select_set(self, set_id: str) -> None:
        self.selected_set_id = set_id
        self.reset()

    def anchor_celebrations(self, x: float, y: float) -> None:
        """Burst celebrations from (x, y), given as fractions of the viewport."""
        if not (0 <= x <= 1 and 0 <= y <= 1):
            raise ValueError(f"Celebration origin must be within the viewport, got ({x}, {y})")
        self.celebration_origin = (x, y)

    def start(self, set_id: str = None) -> bool:
        """Start a fresh game on the given or selected set.

        Returns False on precondition errors, leaving the current game untouched.
        """
        if set_id is None:
            set_id = self.selected_set_id
        resolved = resolve_set(self.repository, set_id, self.notifier)
        if resolved is None:
            return False
        _, self._words = resolved
        self.selected_set_id = set_id

        self._reset_board()
        self.is_playing = True
        self.request_challenge()
        return True

    def reset(self) -> None:
        self._reset_board()
        self.is_playing = False
        self._words = []

    def close(self) -> None:
        self._transitions.cancel_all()

    def _reset_board(self) -> None:
        self._transitions.cancel_all()
        self.grid.reset()
        self.pieces = []
        self.challenge = None
        self.showing_answer = False
        self.score = 0
        self.correct_words = 0
        self.result = None
        self.state = ANSWERING

    # Challenges

    def request_challenge(self) -> WordChallenge | None:
        """Pick a new question from the set's usable words."""
        if not self.is_playing:
            return None
        if not self._words:
            self.notifier.notify(ERROR_TITLE, NO_USABLE_WORDS, 'destructive')
            self.end_game()
            return None
        word = self.rng.choice(self._words)
        self.challenge = make_challenge(word, self.rng)
        self.showing_answer = False
        return self.challenge

    def check_answer(self, answer: str) -> dict | None:
        """Grade an answer. Returns None when there is nothing to answer."""
        if not self.is_playing or self.state != ANSWERING:
            return None
        if self.challenge is None or self.showing_answer:
            return None

        if self.challenge.is_correct(answer):
            self.correct_words += 1
            self.challenge = None
            self.notifier.notify('Correct!', f"You earned {PIECES_PER_REWARD} new pieces!")
            self.notifier.celebrate(SMALL_CELEBRATION, self.celebration_origin)
            self.deal_pieces()
            return {'correct': True, 'attempts_left': 0, 'revealed': False}

        self.challenge.attempts += 1
        attempts_left = MAX_ATTEMPTS - self.challenge.attempts
        if attempts_left <= 0:
            self.showing_answer = True
            self._transitions.schedule(REVEAL_DELAY, self._finish_reveal)
            self.notifier.notify('Out of attempts', 'The correct answers are shown', 'destructive')
            return {
                'correct': False,
                'attempts_left': 0,
                'revealed': True,
                'correct_answers': [dict(a) for a in self.challenge.correct_answers]
            }

        self.notifier.notify('Wrong answer', f"{attempts_left} attempts left", 'destructive')
        return {'correct': False, 'attempts_left': attempts_left, 'revealed': False}

    def _finish_reveal(self) -> None:
        self.challenge = None
        self.showing_answer = False
        self.request_challenge()

    def skip(self) -> bool:
        if not self.is_playing or self.state != ANSWERING:
            return False
        self._transitions.cancel_all()
        self.challenge = None
        self.showing_answer = False
        self.notifier.notify('Skipped', 'Picking a new word...')
        self.request_challenge()
        return True

    # Pieces

    def deal_pieces(self) -> list[PuzzlePiece]:
        """Replace leftovers with a fresh batch and switch to placing."""
        self.pieces = random_pieces(self.rng)
        self.state = PLACING
        self.check_game_over()
        return self.pieces

    def can_place(self, piece: PuzzlePiece, row: int, col: int) -> bool:
        return self.grid.fits(piece, row, col)

    def can_place_anywhere(self, piece: PuzzlePiece) -> bool:
        size = self.grid.size
        return any(self.can_place(piece, row, col) for row in range(size) for col in range(size))

    def can_place_any_piece(self) -> bool:
        return any(self.can_place_anywhere(piece) for piece in self.pieces)

    def place(self, piece_index: int, row: int, col: int) -> bool:
        """Drop a piece at (row, col). Illegal moves leave everything unchanged."""
        if not self.is_playing or self.state != PLACING:
            return False
        if piece_index is None or not 0 <= piece_index < len(self.pieces):
            return False
        piece = self.pieces[piece_index]
        if not self.can_place(piece, row, col):
            return False

        self.grid.fill(piece, row, col)
        del self.pieces[piece_index]
        self._clear_lines()

        if not self.pieces:
            self.state = ANSWERING
            self.request_challenge()
        else:
            self.check_game_over()
        return True

    def _clear_lines(self) -> int:
        cleared = self.grid.clear_lines()
        if cleared:
            points = cleared * POINTS_PER_LINE
            self.score += points
            self.notifier.notify('Lines cleared!', f"+{points} points for {cleared} rows/columns")
            self.notifier.celebrate(SMALL_CELEBRATION, self.celebration_origin)
        return cleared

    def check_game_over(self) -> bool:
        if self.state == GAME_OVER:
            return True
        if not self.is_playing or self.state != PLACING or not self.pieces:
            return False
        if self.can_place_any_piece():
            return False
        self.end_game()
        return True

    def end_game(self) -> None:
        self._transitions.cancel_all()
        self.state = GAME_OVER
        self.is_playing = False
        self.showing_answer = False
        self.result = {'score': self.score, 'correct_words': self.correct_words}
        self.notifier.notify('Game Over!', f"Score: {self.score}, correct words: {self.correct_words}")
        self.notifier.celebrate(BIG_CELEBRATION, self.celebration_origin)

    def snapshot(self) -> dict:
        challenge = None
        if self.challenge:
            challenge = self.challenge.to_dict()
            if not self.showing_answer:
                # Answers stay hidden until revealed
                del challenge['correct_answers']
            challenge['attempts_left'] = MAX_ATTEMPTS - self.challenge.attempts
        return {
            'state': self.state,
            'is_playing': self.is_playing,
            'set_id': self.selected_set_id,
            'grid': self.grid.to_list(),
            'pieces': [piece.to_dict() for piece in self.pieces],
            'challenge': challenge,
            'showing_answer': self.showing_answer,
            'score': self.score,
            'correct_words': self.correct_words,
            'result': self.result
        }


class BoardRect:
    """On-screen bounds of the grid, in pointer coordinates."""

    def __init__(self, left: float, top: float, width: float, height: float):
        self.left = left
        self.top = top
        self.width = width
        self.height = height

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def viewport_origin(self, viewport_width: float, viewport_height: float) -> tuple[float, float]:
        """Board centre as viewport fractions, for anchoring celebrations."""
        return screen_origin(self.left, self.top, self.width, self.height,
                             viewport_width, viewport_height)


class DragTracker:
    """Pointer drag state for dropping pieces onto the grid."""

    def __init__(self, game: PuzzleGame):
        self.game = game
        self.piece_index = None
        self.position = None   # (x, y)
        self.drop_cell = None  # (row, col)

    @property
    def is_dragging(self) -> bool:
        return self.piece_index is not None

    def pick_up(self, piece_index: int, x: float, y: float) -> bool:
        if piece_index is None or not 0 <= piece_index < len(self.game.pieces):
            return False
        self.piece_index = piece_index
        self.position = (x, y)
        self.drop_cell = None
        return True

    def move(self, x: float, y: float, board: BoardRect) -> tuple[int, int] | None:
        """Track the pointer and return the grid cell under it, if any."""
        if not self.is_dragging:
            return None
        self.position = (x, y)
        self.drop_cell = self.cell_at(x, y, board)
        return self.drop_cell

    def cell_at(self, x: float, y: float, board: BoardRect) -> tuple[int, int] | None:
        size = self.game.grid.size
        if board.width <= 0 or not board.contains(x, y):
            return None
        # Cells are square; the board's width sets their size
        cell_size = board.width / size
        col = int((x - board.left) // cell_size)
        row = int((y - board.top) // cell_size)
        if 0 <= row < size and 0 <= col < size:
            return row, col
        return None

    def release(self) -> bool:
        """Try to place at the last cell, then always drop the drag state."""
        placed = False
        if self.is_dragging and self.drop_cell is not None:
            row, col = self.drop_cell
            placed = self.game.place(self.piece_index, row, col)
        self.piece_index = None
        self.position = None
        self.drop_cell = None
        return placed

    def to_dict(self) -> dict:
        return {
            'piece_index': self.piece_index,
            'position': list(self.position) if self.position else None,
            'drop_cell': list(self.drop_cell) if self.drop_cell else None
        }
