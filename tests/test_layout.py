import pytest

from tilelink.constants import GRID_SIZE
from tilelink.ui.layout import (
    board_pixel_size,
    cell_center,
    compute_board_geometry,
    point_from_pixel,
    route_to_pixels,
)


def test_cell_center_includes_padding_ring():
    assert cell_center(0, 0) == (GRID_SIZE * 1.5, GRID_SIZE * 1.5)
    assert cell_center(2, 3, cell_size=10) == (45, 35)
    assert cell_center(0, 0, cell_size=10, padding=0) == (5, 5)


def test_pixel_round_trip_for_every_cell():
    for row in range(8):
        for col in range(8):
            x, y = cell_center(row, col)
            assert point_from_pixel(x, y, (0, 0), 8, 8) == (row, col)


def test_point_from_pixel_respects_origin():
    x, y = cell_center(1, 2, cell_size=20)
    assert point_from_pixel(x + 100, y + 50, (100, 50), 4, 4, cell_size=20) == (1, 2)


@pytest.mark.parametrize("px,py", [(10, 10), (GRID_SIZE * 9 + 5, 100), (100, GRID_SIZE * 9 + 5), (-5, -5)])
def test_point_outside_board_is_none(px, py):
    assert point_from_pixel(px, py, (0, 0), 8, 8) is None


def test_missing_origin_is_none():
    assert point_from_pixel(90, 90, None, 8, 8) is None


def test_route_pixels_clamp_to_border_ring():
    route = [(0, 0), (-1, 0), (-1, 1), (0, 1)]
    points = route_to_pixels(route, 2, 2, cell_size=10)
    assert points == [(15, 15), (15, 5), (25, 5), (25, 15)]


def test_board_pixel_size():
    assert board_pixel_size(8, 8) == (GRID_SIZE * 10, GRID_SIZE * 10)
    assert board_pixel_size(2, 3, cell_size=10) == (50, 40)


def test_geometry_fits_and_centres_board():
    cell_size, left, top = compute_board_geometry(800, 600, 8, 8)
    assert cell_size == 54
    assert left == 130
    assert top == 30


def test_geometry_caps_cell_size():
    cell_size, left, top = compute_board_geometry(4000, 4000, 8, 8)
    assert cell_size == GRID_SIZE


def test_geometry_enforces_minimum_cell():
    cell_size, _, _ = compute_board_geometry(50, 50, 8, 8)
    assert cell_size == 20
