"""Global constants for the application."""

# Board settings
DEFAULT_BOARD_SIZE = 640  # Pixels per side of the board, must be a multiple of 8
MIN_BOARD_SIZE = 64  # Smallest board that still fits coordinate labels
BOARD_FILES = 8

# Square colors (RGB)
DEFAULT_DARK_COLOR = (118, 150, 86)
DEFAULT_LIGHT_COLOR = (238, 238, 210)

# Delays in milliseconds
DEFAULT_FRAME_DELAY = 1000  # Delay between interior frames
DEFAULT_FIRST_FRAME_DELAY = 1000  # Clocks only start with the first move
DEFAULT_LAST_FRAME_DELAY = 5000  # Time to digest the final position before looping
MAX_FRAME_DELAY_CENTISECONDS = 65535  # GIF stores frame delays as unsigned 16-bit centiseconds

# Assets
DEFAULT_PIECES_FAMILY = "cburnett"
TERMINATIONS_DIRECTORY = "terminations"

# Output
DEFAULT_OUTPUT_PATH = "chess.gif"

# Player bars
ANONYMOUS_PLAYER = "Anonymous"

# Fractions of a square used for overlays
COORDINATE_FONT_RATIO = 1 / 4  # Coordinate label height relative to a square
PLAYER_FONT_RATIO = 1 / 2  # Player name height relative to a bar
TERMINATION_BADGE_RATIO = 3 / 8  # Termination badge side relative to a square

# Check highlight colors (inner, outer) used by the built-in check asset
CHECK_GRADIENT_COLORS = ("#ff0000", "#9e0000")
