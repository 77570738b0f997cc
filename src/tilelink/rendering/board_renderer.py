from __future__ import annotations

import colorsys
from typing import TYPE_CHECKING, Dict, List, Tuple

from tilelink.constants import EMPTY, GRID_SIZE, TILE_SIZE
from tilelink.ui.layout import cell_center, route_to_pixels

if TYPE_CHECKING:
    from tilelink.components.board import Board
    from tilelink.components.tile_catalog import TileCatalog
    from tilelink.rendering.sprite_cache import SpriteCache
    from tilelink.systems.render import RenderSystem

GRID_COLOR = (221, 221, 221)
SELECTION_COLOR = (121, 89, 255)
HINT_COLOR = (255, 200, 60)
OUTLINE_COLOR = (0, 0, 0)


def color_for_type(tile_type: int) -> Tuple[int, int, int]:
    """Golden-ratio hue steps so neighbouring types stay distinguishable."""
    hue = ((tile_type - 1) * 0.618033988749895) % 1.0
    r, g, b = colorsys.hsv_to_rgb(hue, 0.55, 0.85)
    return int(r * 255), int(g * 255), int(b * 255)


class BoardRenderer:
    def __init__(self, render_system: RenderSystem, sprite_cache: SpriteCache):
        self._rs = render_system
        self._sprites = sprite_cache

    def render(
        self,
        arcade,
        board: Board,
        catalog: TileCatalog,
        cell_size: float,
        left: float,
        top: float,
        headless: bool,
    ) -> None:
        rs = self._rs
        sprites = self._sprites
        height = rs.window.height
        tile_size = cell_size * TILE_SIZE / GRID_SIZE
        half = tile_size / 2

        def to_screen(x: float, y: float) -> Tuple[float, float]:
            # Layout is y-down from the board origin; arcade is y-up from the window bottom.
            return left + x, height - (top + y)

        layout: Dict[Tuple[int, int], Tuple[float, float]] = {}
        for row, col in board.positions():
            layout[(row, col)] = to_screen(*cell_center(row, col, cell_size))
        rs._last_tile_layout = layout
        if headless:
            return

        padding = cell_size
        for col in range(board.cols + 1):
            x0, y0 = to_screen(col * cell_size + padding, padding)
            x1, y1 = to_screen(col * cell_size + padding, board.rows * cell_size + padding)
            arcade.draw_line(x0, y0, x1, y1, GRID_COLOR, 1)
        for row in range(board.rows + 1):
            x0, y0 = to_screen(padding, row * cell_size + padding)
            x1, y1 = to_screen(board.cols * cell_size + padding, row * cell_size + padding)
            arcade.draw_line(x0, y0, x1, y1, GRID_COLOR, 1)

        active = set()
        for (pos, tile) in board.occupied():
            cx, cy = layout[pos]
            active.add(pos)
            sprite = sprites.ensure_tile_sprite(arcade, pos, catalog.identifier_for(tile))
            if sprite is not None:
                sprites.update_sprite_visuals(sprite, cx, cy, tile_size)
                continue
            # No texture for this type: numbered swatch instead.
            fill = color_for_type(tile)
            arcade.draw_lrbt_rectangle_filled(cx - half, cx + half, cy - half, cy + half, fill)
            arcade.draw_lrbt_rectangle_outline(cx - half, cx + half, cy - half, cy + half, OUTLINE_COLOR, 1)
            arcade.draw_text(
                str(tile), cx, cy, OUTLINE_COLOR, max(8, int(tile_size / 3)),
                anchor_x="center", anchor_y="center",
            )
        sprites.cleanup_tile_sprites(active)
        sprites.draw_tile_sprites()

        for pos, color in ((rs.hint_a, HINT_COLOR), (rs.hint_b, HINT_COLOR), (rs.selected, SELECTION_COLOR)):
            if pos is None or pos not in layout:
                continue
            if board.get(*pos) == EMPTY:
                continue
            cx, cy = layout[pos]
            arcade.draw_lrbt_rectangle_outline(cx - half - 3, cx + half + 3, cy - half - 3, cy + half + 3, color, 3)

        if rs.route and len(rs.route) >= 2:
            points: List[Tuple[float, float]] = [
                to_screen(x, y) for x, y in route_to_pixels(rs.route, board.rows, board.cols, cell_size)
            ]
            arcade.draw_line_strip(points, SELECTION_COLOR, 4)
