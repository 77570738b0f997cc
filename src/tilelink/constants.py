GRID_ROWS = 8
GRID_COLS = 8
GRID_SIZE = 60   # one grid cell, in pixels
TILE_SIZE = 50   # drawn tile, smaller than the grid cell
EMPTY = 0

# Routes may bend at most this many times.
MAX_TURNS = 2

# Reshuffles granted per board.
SHUFFLE_ALLOWANCE = 3

# Seconds between "route found" and the tiles leaving the board.
REMOVAL_DELAY = 0.5

# Board maximum footprint relative to window (percentage of window width/height),
# padding ring included.
BOARD_MAX_WIDTH_PCT = 0.9
BOARD_MAX_HEIGHT_PCT = 0.9
MIN_GRID_SIZE = 20

TILE_IMAGES = [f"warplet{i}.png" for i in range(1, 22)]
