import random
from typing import Sequence

from esper import World

from tilelink.components.board import Board
from tilelink.components.selection import Selection
from tilelink.components.shuffle_allowance import ShuffleAllowance
from tilelink.components.tile_catalog import TileCatalog
from tilelink.constants import GRID_COLS, GRID_ROWS, SHUFFLE_ALLOWANCE, TILE_IMAGES
from tilelink.systems.board_ops import generate_board


def create_world(
    *,
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    tile_images: Sequence[str] | None = None,
    board: Board | None = None,
    shuffle_allowance: int = SHUFFLE_ALLOWANCE,
    rng: random.Random | None = None,
) -> World:
    """Build the world for one play session.

    Entities: the board, the controller state (selection + shuffle budget) and
    the tile catalog. When no board is given a fresh one is generated with the
    world's RNG, which later generations and reshuffles share.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    catalog = TileCatalog(identifiers=list(tile_images if tile_images is not None else TILE_IMAGES))
    world.create_entity(catalog)

    if board is None:
        board = generate_board(rows, cols, catalog.count, rng=world.random)
    world.create_entity(board)

    world.create_entity(
        Selection(),
        ShuffleAllowance(remaining=shuffle_allowance, per_board=shuffle_allowance),
    )
    return world
