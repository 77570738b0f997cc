from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Dict, List, Optional, Tuple

from esper import World

from tilelink.components.board import Board
from tilelink.components.tile_catalog import TileCatalog
from tilelink.constants import EMPTY
from tilelink.errors import GenerationError
from tilelink.systems.path_finder import Route, find_path

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Pair = Tuple[Position, Position]


def _resolve_rng(rng: random.Random | None) -> random.Random:
    return rng if isinstance(rng, random.Random) else random.Random()


def fisher_yates(values: List[int], rng: random.Random) -> List[int]:
    """Unbiased in-place shuffle driven by the supplied generator."""
    for i in range(len(values) - 1, 0, -1):
        j = rng.randint(0, i)
        values[i], values[j] = values[j], values[i]
    return values


def generate_board(
    rows: int,
    cols: int,
    tile_type_count: int,
    *,
    rng: random.Random | None = None,
) -> Board:
    """Build a fresh board where every tile type is dealt in pairs.

    Pairs are spread evenly across types 1..tile_type_count; the first
    ``pairs % types`` types get one extra pair. An odd cell count gets one extra
    tile of a randomly chosen type, so that type alone ends up odd.
    """
    if tile_type_count <= 0:
        raise GenerationError("no tile types available")
    if rows <= 0 or cols <= 0:
        raise GenerationError(f"board dimensions must be positive, got {rows}x{cols}")
    rng = _resolve_rng(rng)

    total_slots = rows * cols
    pairs_needed = total_slots // 2
    base_pairs, remainder = divmod(pairs_needed, tile_type_count)

    entries: List[int] = []
    for index in range(tile_type_count):
        tile_type = index + 1
        pairs_for_type = base_pairs + (1 if index < remainder else 0)
        for _ in range(pairs_for_type):
            entries.extend((tile_type, tile_type))

    if len(entries) < total_slots:
        entries.append(rng.randint(1, tile_type_count))

    if len(entries) < total_slots:
        raise GenerationError(f"cannot fill {total_slots} cells from {len(entries)} tiles")
    del entries[total_slots:]

    fisher_yates(entries, rng)

    cells = [entries[row * cols:(row + 1) * cols] for row in range(rows)]
    board = Board(rows=rows, cols=cols, cells=cells)
    logger.debug(
        "generated %dx%d board: %d pairs over %d types, counts=%s",
        rows, cols, pairs_needed, tile_type_count, dict(sorted(tile_counts(board).items())),
    )
    return board


def generate_for_world(
    world: World,
    rows: int,
    cols: int,
    tile_type_count: int | None = None,
) -> Board:
    """Generate using the world's RNG and, by default, its tile catalog size."""
    if tile_type_count is None:
        tile_type_count = get_tile_catalog(world).count
    return generate_board(rows, cols, tile_type_count, rng=getattr(world, "random", None))


def shuffle_remaining(board: Board, *, rng: random.Random | None = None) -> Board:
    """Permute the non-empty tiles among the non-empty cells, in place."""
    rng = _resolve_rng(rng)
    positions = [pos for pos, _ in board.occupied()]
    values = fisher_yates([value for _, value in board.occupied()], rng)
    for (row, col), value in zip(positions, values):
        board.cells[row][col] = value
    return board


def tile_counts(board: Board) -> Dict[int, int]:
    return dict(Counter(value for _, value in board.occupied()))


def remaining_tiles(board: Board) -> int:
    return sum(1 for _ in board.occupied())


def is_cleared(board: Board) -> bool:
    return all(board.get(*pos) == EMPTY for pos in board.positions())


def find_matchable_pairs(board: Board, *, limit: Optional[int] = None) -> List[Pair]:
    """Enumerate same-type cell pairs that currently have a legal route."""
    by_type: Dict[int, List[Position]] = {}
    for pos, value in board.occupied():
        by_type.setdefault(value, []).append(pos)
    pairs: List[Pair] = []
    for tile_type in sorted(by_type):
        cells = by_type[tile_type]
        for i, first in enumerate(cells):
            for second in cells[i + 1:]:
                if find_path(board, first, second) is None:
                    continue
                pairs.append((first, second))
                if limit is not None and len(pairs) >= limit:
                    return pairs
    return pairs


def find_hint(board: Board) -> Optional[Tuple[Position, Position, Route]]:
    """First connectable pair together with its route, or None at a stalemate."""
    pairs = find_matchable_pairs(board, limit=1)
    if not pairs:
        return None
    first, second = pairs[0]
    route = find_path(board, first, second)
    if route is None:
        return None
    return first, second, route


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def get_tile_catalog(world: World) -> TileCatalog:
    for _, catalog in world.get_component(TileCatalog):
        return catalog
    raise RuntimeError("TileCatalog not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None
