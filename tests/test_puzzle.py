"""Unit tests for the puzzle game."""

import random
import unittest
from unittest import mock

from core.config import GRID_SIZE, MAX_ATTEMPTS, POINTS_PER_LINE, PIECES_PER_REWARD, REVEAL_DELAY, PIECE_SHAPES, COLORS
from core.notifications import MessageQueue
from core.puzzle import (
    PuzzleGame, PuzzleGrid, PuzzlePiece, DragTracker, BoardRect, random_pieces,
    ANSWERING, PLACING, GAME_OVER
)
from core.scheduler import ManualScheduler
from core.vocabulary import WordChallenge, NO_SET_SELECTED, SET_HAS_NO_WORDS, NO_USABLE_WORDS

from mocks import MockRepository, make_set, cat_dog_set

SINGLE = [[True]]
SQUARE = [[True, True], [True, True]]
ROW = [[True] * GRID_SIZE]


def piece(shape, color='red', piece_id='p'):
    return PuzzlePiece(piece_id, shape, color)


def checkerboard(grid: PuzzleGrid) -> None:
    """Fill every other cell: no line is full and no 2x2 block is free."""
    for r in range(grid.size):
        for c in range(grid.size):
            if (r + c) % 2 == 0:
                grid.cells[r][c] = 'gray'


class PuzzleTestCase(unittest.TestCase):

    def setUp(self):
        self.scheduler = ManualScheduler()
        self.notifier = MessageQueue()
        self.repo = MockRepository([cat_dog_set(), make_set('empty', {}),
                                    make_set('thin', {'x': {'en': 'only'}})])
        self.game = PuzzleGame(self.repo, self.scheduler, self.notifier, random.Random(7))

    def start_placing(self, *pieces):
        """Start a game and jump straight to placing the given pieces."""
        self.assertTrue(self.game.start('pets'))
        self.game.challenge = None
        self.game.pieces = list(pieces)
        self.game.state = PLACING

    def set_cat_challenge(self):
        self.game.challenge = WordChallenge('A', 'cat', 'en', [{'language': 'vi', 'text': 'mèo'}])


class TestPuzzleGrid(unittest.TestCase):
    """Tests for PuzzleGrid."""

    def test_new_grid_is_empty(self):
        grid = PuzzleGrid()
        self.assertEqual(grid.size, GRID_SIZE)
        self.assertTrue(grid.is_empty())

    def test_fits_within_bounds(self):
        grid = PuzzleGrid()
        self.assertTrue(grid.fits(piece(SQUARE), 7, 7))
        self.assertFalse(grid.fits(piece(SQUARE), 8, 8))
        self.assertFalse(grid.fits(piece(SQUARE), 0, 8))
        self.assertFalse(grid.fits(piece(SINGLE), -1, 0))

    def test_only_filled_cells_must_be_empty(self):
        grid = PuzzleGrid()
        grid.cells[0][1] = 'blue'
        l_shape = piece([[True, False], [True, True]])
        self.assertTrue(grid.fits(l_shape, 0, 0))
        grid.cells[1][1] = 'blue'
        self.assertFalse(grid.fits(l_shape, 0, 0))

    def test_clear_lines_row_and_column_together(self):
        grid = PuzzleGrid()
        for i in range(GRID_SIZE):
            grid.cells[4][i] = 'red'
            grid.cells[i][4] = 'red'
        self.assertEqual(grid.full_rows(), [4])
        self.assertEqual(grid.full_columns(), [4])
        self.assertEqual(grid.clear_lines(), 2)
        self.assertTrue(grid.is_empty())


class TestPuzzleStart(PuzzleTestCase):
    """Tests for starting a game."""

    def test_start(self):
        self.assertTrue(self.game.start('pets'))
        self.assertTrue(self.game.is_playing)
        self.assertEqual(self.game.state, ANSWERING)
        self.assertTrue(self.game.grid.is_empty())
        self.assertEqual(self.game.score, 0)
        self.assertEqual(self.game.correct_words, 0)
        self.assertEqual(self.game.pieces, [])
        self.assertIsNotNone(self.game.challenge)

    def test_restart_resets_everything(self):
        self.start_placing(piece(SINGLE))
        self.game.place(0, 3, 3)
        self.game.score = 40
        self.game.correct_words = 5
        self.assertTrue(self.game.start('pets'))
        self.assertTrue(self.game.grid.is_empty())
        self.assertEqual(self.game.score, 0)
        self.assertEqual(self.game.correct_words, 0)
        self.assertEqual(self.game.state, ANSWERING)

    def test_no_set_selected(self):
        self.assertFalse(self.game.start())
        self.assertFalse(self.game.is_playing)
        self.assertEqual(self.notifier.last_error, NO_SET_SELECTED)

    def test_empty_set(self):
        self.assertFalse(self.game.start('empty'))
        self.assertEqual(self.notifier.last_error, SET_HAS_NO_WORDS)

    def test_no_usable_words(self):
        self.assertFalse(self.game.start('thin'))
        self.assertEqual(self.notifier.last_error, NO_USABLE_WORDS)
        self.assertIsNone(self.game.challenge)

    def test_failed_start_keeps_current_game(self):
        self.start_placing(piece(SINGLE), piece(SQUARE))
        self.game.place(0, 2, 2)
        self.game.score = 20
        for set_id in ('thin', 'empty', 'missing'):
            self.assertFalse(self.game.start(set_id))
            self.assertEqual(self.game.selected_set_id, 'pets')
            self.assertTrue(self.game.is_playing)
            self.assertEqual(self.game.state, PLACING)
            self.assertEqual(self.game.score, 20)
            self.assertEqual(self.game.grid.cells[2][2], 'red')
            self.assertEqual(len(self.game.pieces), 1)

    def test_start_with_selected_set(self):
        self.game.select_set('pets')
        self.assertTrue(self.game.start())
        self.assertEqual(self.game.selected_set_id, 'pets')

    def test_challenge_comes_from_set(self):
        self.game.start('pets')
        challenge = self.game.challenge
        self.assertIn(challenge.word_id, ('A', 'B'))
        self.assertEqual(len(challenge.correct_answers), 1)
        self.assertNotEqual(challenge.correct_answers[0]['language'], challenge.question_language)


class TestPuzzleAnswers(PuzzleTestCase):
    """Tests for the challenge lifecycle."""

    def setUp(self):
        super().setUp()
        self.game.start('pets')
        self.set_cat_challenge()

    def test_correct_answer_rewards_pieces(self):
        result = self.game.check_answer('MÈO')
        self.assertTrue(result['correct'])
        self.assertEqual(len(self.game.pieces), PIECES_PER_REWARD)
        self.assertEqual(self.game.state, PLACING)
        self.assertEqual(self.game.correct_words, 1)
        self.assertIsNone(self.game.challenge)
        for p in self.game.pieces:
            self.assertIn([list(row) for row in p.shape], PIECE_SHAPES)
            self.assertIn(p.color, COLORS)

    def test_reward_replaces_leftovers(self):
        self.game.pieces = [piece(SINGLE, piece_id='old')]
        self.game.check_answer('mèo')
        self.assertEqual(len(self.game.pieces), PIECES_PER_REWARD)
        self.assertNotIn('old', [p.id for p in self.game.pieces])

    def test_wrong_answer_counts_attempts(self):
        result = self.game.check_answer('dog')
        self.assertFalse(result['correct'])
        self.assertEqual(result['attempts_left'], MAX_ATTEMPTS - 1)
        self.assertEqual(self.game.challenge.attempts, 1)
        self.assertEqual(self.game.challenge.question_text, 'cat')

    def test_three_wrong_answers_reveal_then_clear(self):
        first = self.game.challenge
        self.game.check_answer('dog')
        self.game.check_answer('dog')
        result = self.game.check_answer('dog')
        self.assertTrue(result['revealed'])
        self.assertEqual(result['correct_answers'], [{'language': 'vi', 'text': 'mèo'}])
        self.assertTrue(self.game.showing_answer)
        self.assertIs(self.game.challenge, first)

        # Answers are ignored while revealed
        self.assertIsNone(self.game.check_answer('mèo'))

        self.scheduler.advance(REVEAL_DELAY)
        self.assertFalse(self.game.showing_answer)
        self.assertIsNotNone(self.game.challenge)
        self.assertIsNot(self.game.challenge, first)
        self.assertEqual(self.game.challenge.attempts, 0)
        self.assertEqual(self.game.correct_words, 0)
        self.assertEqual(self.game.pieces, [])
        self.assertEqual(self.game.state, ANSWERING)

    def test_snapshot_hides_answers_until_revealed(self):
        snapshot = self.game.snapshot()
        self.assertNotIn('correct_answers', snapshot['challenge'])
        for _ in range(MAX_ATTEMPTS):
            self.game.check_answer('dog')
        snapshot = self.game.snapshot()
        self.assertEqual(snapshot['challenge']['correct_answers'], [{'language': 'vi', 'text': 'mèo'}])

    def test_skip(self):
        first = self.game.challenge
        self.assertTrue(self.game.skip())
        self.assertIsNot(self.game.challenge, first)
        self.assertEqual(self.game.correct_words, 0)
        self.assertEqual(self.game.score, 0)

    def test_skip_cancels_reveal(self):
        for _ in range(MAX_ATTEMPTS):
            self.game.check_answer('dog')
        self.game.skip()
        fresh = self.game.challenge
        self.scheduler.advance(REVEAL_DELAY * 2)
        self.assertIs(self.game.challenge, fresh)

    def test_restart_cancels_reveal(self):
        for _ in range(MAX_ATTEMPTS):
            self.game.check_answer('dog')
        self.game.start('pets')
        fresh = self.game.challenge
        self.scheduler.advance(REVEAL_DELAY * 2)
        self.assertIs(self.game.challenge, fresh)
        self.assertFalse(self.game.showing_answer)

    def test_answer_without_challenge_ignored(self):
        self.game.challenge = None
        self.assertIsNone(self.game.check_answer('mèo'))
        self.assertEqual(self.game.correct_words, 0)

    def test_answer_while_placing_ignored(self):
        self.game.check_answer('mèo')
        self.set_cat_challenge()
        self.assertIsNone(self.game.check_answer('mèo'))
        self.assertEqual(self.game.correct_words, 1)


class TestPuzzlePlacement(PuzzleTestCase):
    """Tests for placing pieces and clearing lines."""

    def test_place_writes_color(self):
        self.start_placing(piece(SQUARE, 'blue'), piece(SINGLE))
        self.assertTrue(self.game.place(0, 2, 3))
        for r, c in [(2, 3), (2, 4), (3, 3), (3, 4)]:
            self.assertEqual(self.game.grid.cells[r][c], 'blue')
        self.assertEqual(len(self.game.pieces), 1)
        self.assertEqual(self.game.state, PLACING)

    def test_illegal_place_leaves_grid_unchanged(self):
        self.start_placing(piece(SQUARE), piece(SINGLE))
        self.game.grid.cells[5][5] = 'green'
        before = self.game.grid.to_list()
        self.assertFalse(self.game.place(0, 8, 8))
        self.assertFalse(self.game.place(0, 4, 4))
        self.assertFalse(self.game.place(5, 0, 0))
        self.assertEqual(self.game.grid.to_list(), before)
        self.assertEqual(len(self.game.pieces), 2)

    def test_place_ignored_while_answering(self):
        self.game.start('pets')
        self.game.pieces = [piece(SINGLE)]
        self.assertFalse(self.game.place(0, 0, 0))
        self.assertTrue(self.game.grid.is_empty())

    def test_single_row_clear(self):
        self.start_placing(piece(ROW), piece(SINGLE))
        self.assertTrue(self.game.place(0, 0, 0))
        self.assertEqual(self.game.grid.cells[0], [None] * GRID_SIZE)
        self.assertEqual(self.game.score, POINTS_PER_LINE)
        self.assertTrue(self.game.grid.is_empty())

    def test_row_and_column_clear_together(self):
        self.start_placing(piece(SINGLE), piece(SINGLE))
        grid = self.game.grid
        for i in range(GRID_SIZE):
            if i != 4:
                grid.cells[4][i] = 'red'
                grid.cells[i][4] = 'red'
        grid.cells[0][0] = 'teal'
        self.assertTrue(self.game.place(0, 4, 4))
        self.assertEqual(self.game.score, 2 * POINTS_PER_LINE)
        for i in range(GRID_SIZE):
            self.assertIsNone(grid.cells[4][i])
            self.assertIsNone(grid.cells[i][4])
        self.assertEqual(grid.cells[0][0], 'teal')

    def test_last_piece_returns_to_answering(self):
        self.start_placing(piece(SINGLE))
        self.assertTrue(self.game.place(0, 0, 0))
        self.assertEqual(self.game.pieces, [])
        self.assertEqual(self.game.state, ANSWERING)
        self.assertIsNotNone(self.game.challenge)

    def test_can_place(self):
        self.start_placing(piece(SQUARE))
        self.assertTrue(self.game.can_place(piece(SQUARE), 0, 0))
        self.assertFalse(self.game.can_place(piece(SQUARE), GRID_SIZE - 1, 0))


class TestPuzzleGameOver(PuzzleTestCase):
    """Tests for game over detection."""

    def test_game_over_after_placement(self):
        self.start_placing(piece(SINGLE), piece(SQUARE))
        checkerboard(self.game.grid)
        self.assertTrue(self.game.place(0, 0, 1))
        self.assertEqual(self.game.state, GAME_OVER)
        self.assertFalse(self.game.is_playing)
        self.assertEqual(self.game.result, {'score': 0, 'correct_words': 0})
        self.assertEqual(len(self.notifier.celebrations), 1)

    def test_game_over_on_new_batch(self):
        self.game.start('pets')
        checkerboard(self.game.grid)
        # Every multi-row, multi-column shape has two adjacent filled cells
        big_only = [s for s in PIECE_SHAPES if sum(map(sum, s)) > 1 and len(s) > 1 and len(s[0]) > 1]
        self.set_cat_challenge()
        with mock.patch('core.puzzle.PIECE_SHAPES', big_only):
            self.game.check_answer('mèo')
        self.assertEqual(self.game.state, GAME_OVER)
        self.assertEqual(self.game.result['correct_words'], 1)

    def test_game_over_is_terminal(self):
        self.start_placing(piece(SINGLE), piece(SQUARE))
        checkerboard(self.game.grid)
        self.game.place(0, 0, 1)
        self.assertFalse(self.game.place(0, 0, 3))
        self.assertFalse(self.game.skip())
        self.assertIsNone(self.game.check_answer('mèo'))
        self.assertTrue(self.game.start('pets'))
        self.assertEqual(self.game.state, ANSWERING)

    def test_no_game_over_when_something_fits(self):
        self.start_placing(piece(SINGLE), piece(SINGLE))
        checkerboard(self.game.grid)
        self.assertTrue(self.game.place(0, 0, 1))
        self.assertEqual(self.game.state, PLACING)

    def test_random_pieces(self):
        pieces = random_pieces(random.Random(5))
        self.assertEqual(len(pieces), PIECES_PER_REWARD)
        self.assertEqual(len({p.id for p in pieces}), PIECES_PER_REWARD)


class TestDragTracker(PuzzleTestCase):
    """Tests for pointer drag tracking."""

    def setUp(self):
        super().setUp()
        self.start_placing(piece(SINGLE, 'pink'), piece(SINGLE))
        self.drag = DragTracker(self.game)
        # 50px cells
        self.board = BoardRect(100, 200, 450, 450)

    def test_cell_under_pointer(self):
        self.assertTrue(self.drag.pick_up(0, 10, 10))
        self.assertEqual(self.drag.move(125, 275, self.board), (1, 0))
        self.assertEqual(self.drag.position, (125, 275))
        self.assertEqual(self.drag.move(549, 649, self.board), (8, 8))

    def test_outside_board(self):
        self.drag.pick_up(0, 10, 10)
        self.assertIsNone(self.drag.move(99, 300, self.board))
        self.assertIsNone(self.drag.move(300, 651, self.board))
        # Right edge belongs to no cell
        self.assertIsNone(self.drag.move(550, 300, self.board))

    def test_release_places_piece(self):
        self.drag.pick_up(0, 10, 10)
        self.drag.move(260, 410, self.board)
        self.assertTrue(self.drag.release())
        self.assertEqual(self.game.grid.cells[4][3], 'pink')
        self.assertFalse(self.drag.is_dragging)

    def test_release_outside_clears_state(self):
        self.drag.pick_up(0, 10, 10)
        self.drag.move(10, 10, self.board)
        self.assertFalse(self.drag.release())
        self.assertTrue(self.game.grid.is_empty())
        self.assertFalse(self.drag.is_dragging)
        self.assertIsNone(self.drag.position)
        self.assertIsNone(self.drag.drop_cell)

    def test_failed_placement_still_clears_state(self):
        self.game.grid.cells[0][0] = 'red'
        self.drag.pick_up(0, 10, 10)
        self.drag.move(110, 210, self.board)
        self.assertFalse(self.drag.release())
        self.assertFalse(self.drag.is_dragging)
        self.assertEqual(len(self.game.pieces), 2)

    def test_move_without_pick_up(self):
        self.assertIsNone(self.drag.move(125, 275, self.board))
        self.assertFalse(self.drag.pick_up(7, 0, 0))

    def test_pick_up_nothing(self):
        self.assertFalse(self.drag.pick_up(None, 0, 0))
        self.assertFalse(self.drag.is_dragging)
        self.assertFalse(self.drag.release())


class TestCelebrationAnchor(PuzzleTestCase):
    """Tests for where celebrations burst from."""

    def test_default_origin(self):
        self.game.start('pets')
        self.set_cat_challenge()
        self.game.check_answer('mèo')
        self.assertEqual(self.notifier.celebrations[-1]['origin'], {'x': 0.5, 'y': 0.5})

    def test_anchored_on_board(self):
        board = BoardRect(100, 200, 450, 450)
        self.game.anchor_celebrations(*board.viewport_origin(1000, 850))
        self.start_placing(piece(ROW), piece(SINGLE))
        self.game.place(0, 0, 0)
        self.assertEqual(self.notifier.celebrations[-1]['origin'], {'x': 0.325, 'y': 0.5})

    def test_origin_outside_viewport(self):
        with self.assertRaises(ValueError):
            self.game.anchor_celebrations(1.5, 0.5)
        self.assertEqual(self.game.celebration_origin, (0.5, 0.5))


if __name__ == '__main__':
    unittest.main()
