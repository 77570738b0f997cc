from pathlib import Path
from typing import Dict, List, Optional, Tuple

from esper import World

from tilelink.events.bus import (
    EventBus,
    EVENT_TILE_SELECTED,
    EVENT_TILE_DESELECTED,
    EVENT_ROUTE_FOUND,
    EVENT_TILES_REMOVED,
    EVENT_BOARD_RESET,
    EVENT_BOARD_SHUFFLED,
)
from tilelink.rendering.board_renderer import BoardRenderer
from tilelink.rendering.sprite_cache import SpriteCache
from tilelink.systems.board_ops import find_hint, get_board, get_tile_catalog
from tilelink.ui.layout import compute_board_geometry

Position = Tuple[int, int]


class RenderSystem:
    """Keeps the visual state (selection, route, hint) in step with match events."""

    def __init__(self, world: World, event_bus: EventBus, window, texture_dir: Path | None = None):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TILE_SELECTED, self.on_tile_selected)
        self.event_bus.subscribe(EVENT_TILE_DESELECTED, self.on_tile_deselected)
        self.event_bus.subscribe(EVENT_ROUTE_FOUND, self.on_route_found)
        self.event_bus.subscribe(EVENT_TILES_REMOVED, self.on_tiles_removed)
        self.event_bus.subscribe(EVENT_BOARD_RESET, self.on_board_changed)
        self.event_bus.subscribe(EVENT_BOARD_SHUFFLED, self.on_board_changed)
        self.selected: Optional[Position] = None
        self.route: Optional[List[Position]] = None
        self.hint_a: Optional[Position] = None
        self.hint_b: Optional[Position] = None
        self._last_tile_layout: Dict[Position, Tuple[float, float]] = {}
        if texture_dir is None:
            texture_dir = Path(__file__).resolve().parents[3] / "graphics" / "tiles"
        self.sprite_cache = SpriteCache(texture_dir)
        self._board_renderer = BoardRenderer(self, self.sprite_cache)

    def on_tile_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))
        self.route = None

    def on_tile_deselected(self, sender, **kwargs):
        self.selected = None

    def on_route_found(self, sender, **kwargs):
        self.selected = None
        self.route = kwargs.get('route')

    def on_tiles_removed(self, sender, **kwargs):
        self.route = None
        self._clear_hint()

    def on_board_changed(self, sender, **kwargs):
        self.selected = None
        self.route = None
        self._clear_hint()

    def show_hint(self) -> bool:
        hint = find_hint(get_board(self.world))
        if hint is None:
            self._clear_hint()
            return False
        self.hint_a, self.hint_b, _ = hint
        return True

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        board = get_board(self.world)
        cell_size, left, top = compute_board_geometry(self.window.width, self.window.height, board.rows, board.cols)
        self._board_renderer.render(
            arcade, board, get_tile_catalog(self.world), cell_size, left, top, headless=headless)

    def _clear_hint(self) -> None:
        self.hint_a = None
        self.hint_b = None
