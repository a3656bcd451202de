"""Configuration constants for wordplay application."""

# Local storage
STORAGE_KEY = 'vocabSets'           # Key of the vocabulary blob in the data file
DEFAULT_DATA_FILENAME = 'wordplay_data.json'

# Usable words need at least this many translations
MIN_TRANSLATIONS = 2

# Matching game
MAX_MATCHING_WORDS = 10             # Words sampled per game (2 cards each)
CARDS_PER_WORD = 2
RESOLVE_DELAY = 0.3                 # seconds before a pending pair is judged
MATCH_FEEDBACK_DELAY = 0.4          # green highlight before cards disappear
MISMATCH_FEEDBACK_DELAY = 0.6       # red highlight before cards flip back
CLOCK_INTERVAL = 1.0

# Puzzle game
GRID_SIZE = 9
MAX_ATTEMPTS = 3
POINTS_PER_LINE = 10
PIECES_PER_REWARD = 3
REVEAL_DELAY = 3.0                  # seconds the correct answers stay visible

COLORS = [
    'pink',
    'purple',
    'blue',
    'green',
    'yellow',
    'orange',
    'red',
    'indigo',
    'teal',
]

# Shapes are rectangular boolean matrices (True = filled)
PIECE_SHAPES = [
    # 1x1
    [[True]],

    # 2x1
    [[True, True]],

    # 1x2
    [[True], [True]],

    # 2x2
    [[True, True],
     [True, True]],

    # L shapes
    [[True, False],
     [True, True]],
    [[False, True],
     [True, True]],
    [[True, True],
     [True, False]],
    [[True, True],
     [False, True]],

    # T shapes
    [[True, True, True],
     [False, True, False]],
    [[False, True],
     [True, True],
     [False, True]],
    [[False, True, False],
     [True, True, True]],
    [[True, False],
     [True, True],
     [True, False]],

    # Z shapes
    [[True, True, False],
     [False, True, True]],
    [[False, True],
     [True, True],
     [True, False]],

    # Lines
    [[True, True, True]],
    [[True], [True], [True]],

    # Corners
    [[True, True, True],
     [True, False, False],
     [True, False, False]],
    [[True, True, True],
     [False, False, True],
     [False, False, True]],
    [[True, False, False],
     [True, False, False],
     [True, True, True]],
    [[False, False, True],
     [False, False, True],
     [True, True, True]],
]

# Celebrations
CELEBRATION_COLORS = ['#9c27b0', '#ba68c8', '#e1bee7', '#8e24aa', '#7b1fa2']
BIG_CELEBRATION = 100               # particles on completion / game over
SMALL_CELEBRATION = 50              # particles on correct answer / line clear
CELEBRATION_ORIGIN = (0.5, 0.5)     # viewport fractions, centre of the screen

# Display names for the language codes the sets usually carry
LANGUAGE_LABELS = {
    'english': 'English',
    'vietnamese': 'Vietnamese',
    'japanese': 'Japanese',
    'french': 'French',
    'spanish': 'Spanish',
    'german': 'German',
    'chinese': 'Chinese',
    'korean': 'Korean',
    'russian': 'Russian',
}
