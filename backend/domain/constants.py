"""
Game constants for the letter snake engine.
"""

# Board
BOARD_SIZE = 32
INITIAL_SNAKE_LENGTH = 4

# Tick timing (milliseconds)
BASE_DELAY_MS = 200
MIN_DELAY_MS = 50
DELAY_DECREASE_PER_FOOD_MS = 5
IDLE_POLL_MS = 100

# Movement directions as (dx, dy); y grows downward like screen coordinates
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

DIRECTION_NAMES = {
    "UP": UP,
    "DOWN": DOWN,
    "LEFT": LEFT,
    "RIGHT": RIGHT,
}

# Letters the target cycles through
LETTERS = "abcdefghijklmnopqrstuvwxyz"
FIRST_LETTER = LETTERS[0]

# Colors are stored as hex strings so snapshots stay JSON-friendly
FOOD_RED = "#FF0000"
FOOD_BLUE = "#007BFF"
FOOD_YELLOW = "#FFFF00"
FOOD_MAGENTA = "#FF00FF"
FOOD_WHITE = "#FFFFFF"
FOOD_ORANGE = "#FFA500"
FOOD_CYAN = "#00FFFF"

FOOD_COLORS = (
    FOOD_RED,
    FOOD_BLUE,
    FOOD_YELLOW,
    FOOD_MAGENTA,
    FOOD_WHITE,
    FOOD_ORANGE,
    FOOD_CYAN,
)

SNAKE_HEAD_COLOR = "#00FFEE"

# Fresh rounds start here, heading right
START_HEAD = (7, 7)
START_DIRECTION = RIGHT

# Score deltas
CORRECT_EAT_POINTS = 5
WRONG_EAT_PENALTY = 5
