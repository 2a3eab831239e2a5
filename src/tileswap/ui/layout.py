from typing import Optional, Tuple

from tileswap.constants import (BOTTOM_MARGIN, BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT,
                                HUD_HEIGHT, MIN_TILE_SIZE)


def compute_board_geometry(window_width: int, window_height: int, cols: int, rows: int):
    """Return (tile_size, start_x, start_y) for a board centred horizontally above the bottom margin.

    Shared by rendering and input so clicks map to the tiles that were drawn.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < MIN_TILE_SIZE:
        tile_size = MIN_TILE_SIZE
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_at_point(x: float, y: float, window_width: int, window_height: int,
                  cols: int, rows: int) -> Optional[Tuple[int, int]]:
    """Map a window point to ``(col, row)``; row 0 is drawn at the bottom."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, cols, rows)
    if x < start_x or y < start_y:
        return None
    col = int((x - start_x) // tile_size)
    row = int((y - start_y) // tile_size)
    if col >= cols or row >= rows:
        return None
    return col, row


def cell_center(col: int, row: int, window_width: int, window_height: int,
                cols: int, rows: int) -> Tuple[float, float]:
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, cols, rows)
    return start_x + (col + 0.5) * tile_size, start_y + (row + 0.5) * tile_size
