GRID_COLS = 8
GRID_ROWS = 8
STARTING_MOVES = 20

# Tile type name -> background colour used by the renderer.
DEFAULT_TILE_TYPES = {
    'apple':      (196, 48, 48),
    'orange':     (232, 140, 36),
    'banana':     (236, 214, 74),
    'pear':       (128, 186, 62),
    'blueberry':  (72, 96, 196),
    'grape':      (142, 68, 168),
}

TILE_SIZE = 64
BOTTOM_MARGIN = 20
# Space above the board reserved for the score / moves bar.
HUD_HEIGHT = 48

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.80
BOARD_MAX_HEIGHT_PCT = 0.85
MIN_TILE_SIZE = 20

DISABLED_CELL_COLOR = (40, 40, 48)
EMPTY_CELL_COLOR = (24, 24, 28)
SELECTED_OUTLINE_COLOR = (255, 255, 255)

DEFAULT_SCORE_FILE = "score.json"
