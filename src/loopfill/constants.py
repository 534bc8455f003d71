WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
WINDOW_TITLE = "Loopfill"
BOTTOM_MARGIN = 20

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.90
# Smallest tile size the layout will shrink to on tiny windows.
MIN_TILE_SIZE = 12

# Colors
BACKGROUND_COLOR = (16, 16, 24)
TRACK_COLOR = (120, 120, 140)
DOT_COLOR = (240, 220, 90)
FILL_COLOR = (200, 40, 40)
TRACK_WIDTH = 4
DOT_RADIUS_PCT = 0.18

# Demo level: '-' and '|' are straight track, '+' joins neighbours, '*' carries a dot.
DEMO_LEVEL = (
    "*-+-*   +---*",
    "| | |   |   |",
    "+-*-+-+-+   |",
    "|     |     |",
    "|   +-*-+   |",
    "|   |   |   |",
    "*---+---+---+",
)
