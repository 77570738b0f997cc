import logging

from esper import World

from tilelink.components.board import Board
from tilelink.errors import GenerationError
from tilelink.events.bus import (
    EventBus,
    EVENT_NEW_BOARD_REQUEST,
    EVENT_SHUFFLE_REQUEST,
    EVENT_BOARD_GENERATION_FAILED,
)
from tilelink.systems.board_ops import board_dimensions, generate_for_world
from tilelink.systems.match import MatchSystem

logger = logging.getLogger(__name__)


class BoardSystem:
    """Turns board lifecycle requests from the bus into controller calls."""

    def __init__(self, world: World, event_bus: EventBus, match_system: MatchSystem):
        self.world = world
        self.event_bus = event_bus
        self.match_system = match_system
        self.event_bus.subscribe(EVENT_NEW_BOARD_REQUEST, self.on_new_board_request)
        self.event_bus.subscribe(EVENT_SHUFFLE_REQUEST, self.on_shuffle_request)

    def new_board(self, rows: int | None = None, cols: int | None = None, tile_type_count: int | None = None) -> Board:
        """Generate and install a board; GenerationError propagates to the caller."""
        dims = board_dimensions(self.world)
        if dims is not None:
            rows = dims[0] if rows is None else rows
            cols = dims[1] if cols is None else cols
        if rows is None or cols is None:
            raise GenerationError("board dimensions unknown")
        board = generate_for_world(self.world, rows, cols, tile_type_count)
        self.match_system.reset(board)
        return board

    def on_new_board_request(self, sender, **kwargs):
        try:
            self.new_board(
                rows=kwargs.get('rows'),
                cols=kwargs.get('cols'),
                tile_type_count=kwargs.get('tile_type_count'),
            )
        except GenerationError as exc:
            logger.warning("board generation failed: %s", exc)
            self.event_bus.emit(EVENT_BOARD_GENERATION_FAILED, reason=str(exc))

    def on_shuffle_request(self, sender, **kwargs):
        self.match_system.shuffle()
