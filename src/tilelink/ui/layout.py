"""Pixel geometry for the board.

All coordinates here use a y-down frame whose origin is the top-left corner of
the padded board area. The padding ring is one grid cell wide, the same ring
the path finder may route through.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from tilelink.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    GRID_SIZE,
    MIN_GRID_SIZE,
)

Position = Tuple[int, int]
Pixel = Tuple[float, float]


def cell_center(row: int, col: int, cell_size: float = GRID_SIZE, padding: float | None = None) -> Pixel:
    if padding is None:
        padding = cell_size
    x = col * cell_size + cell_size / 2 + padding
    y = row * cell_size + cell_size / 2 + padding
    return x, y


def point_from_pixel(
    px: float,
    py: float,
    origin: Optional[Tuple[float, float]],
    rows: int,
    cols: int,
    cell_size: float = GRID_SIZE,
    padding: float | None = None,
) -> Optional[Position]:
    """Map a pixel to the board cell under it, or None outside the board.

    ``origin`` is the (left, top) corner of the padded board area in the same
    frame as ``px``/``py``.
    """
    if origin is None:
        return None
    if padding is None:
        padding = cell_size
    x = px - origin[0] - padding
    y = py - origin[1] - padding
    col = int(x // cell_size)
    row = int(y // cell_size)
    if 0 <= row < rows and 0 <= col < cols:
        return row, col
    return None


def route_to_pixels(
    route: Sequence[Position],
    rows: int,
    cols: int,
    cell_size: float = GRID_SIZE,
    padding: float | None = None,
) -> List[Pixel]:
    """Pixel polyline for a route; off-board points hug the board edge."""
    if padding is None:
        padding = cell_size
    half = cell_size / 2
    min_x = padding - half
    min_y = padding - half
    max_x = cols * cell_size + half + padding
    max_y = rows * cell_size + half + padding
    points: List[Pixel] = []
    for row, col in route:
        x, y = cell_center(row, col, cell_size, padding)
        if not (0 <= row < rows and 0 <= col < cols):
            x = max(min_x, min(x, max_x))
            y = max(min_y, min(y, max_y))
        points.append((x, y))
    return points


def board_pixel_size(rows: int, cols: int, cell_size: float = GRID_SIZE) -> Tuple[float, float]:
    """Width and height of the board plus its padding ring on every side."""
    return cols * cell_size + cell_size * 2, rows * cell_size + cell_size * 2


def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int):
    """Return (cell_size, left, top) fitting the padded board in the window.

    The board is centred; it may not exceed the configured fraction of either
    window dimension and never shrinks below MIN_GRID_SIZE per cell.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = window_height * BOARD_MAX_HEIGHT_PCT
    cell_by_w = max_board_w / (cols + 2)
    cell_by_h = max_board_h / (rows + 2)
    cell_size = int(min(cell_by_w, cell_by_h, GRID_SIZE))
    if cell_size < MIN_GRID_SIZE:
        cell_size = MIN_GRID_SIZE
    total_w, total_h = board_pixel_size(rows, cols, cell_size)
    left = (window_width - total_w) / 2
    top = (window_height - total_h) / 2
    return cell_size, left, top
