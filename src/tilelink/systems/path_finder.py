from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Sequence, Set, Tuple, Union

from tilelink.components.board import Board
from tilelink.constants import EMPTY, MAX_TURNS
from tilelink.errors import MalformedBoardError

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Route = List[Position]
Grid = Sequence[Sequence[int]]

# Fixed exploration order: up, down, left, right.
DIRECTIONS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
OPPOSITE = {0: 1, 1: 0, 2: 3, 3: 2}


@dataclass(slots=True)
class SearchState:
    point: Position
    path: Route
    turns: int
    last_dir: int


def _grid_of(board: Union[Board, Grid]) -> Grid:
    cells = board.cells if isinstance(board, Board) else board
    if cells:
        width = len(cells[0])
        if any(len(row) != width for row in cells):
            raise MalformedBoardError("board rows have inconsistent lengths")
    return cells


def _arrival_direction(path: Sequence[Position]) -> Optional[int]:
    if len(path) < 2:
        return None
    (r0, c0), (r1, c1) = path[-2], path[-1]
    return DIRECTIONS.index((r1 - r0, c1 - c0))


def find_path(board: Union[Board, Grid], start: Position, end: Position) -> Optional[Route]:
    """Return the unit-step route from start to end, or None when no route exists.

    A route is a chain of straight runs with at most ``MAX_TURNS`` direction
    changes. Runs pass through empty cells and may use the ring of cells one
    step outside the board; they stop at any occupied cell other than ``end``.
    Tile equality between start and end is the caller's concern.

    Breadth-first over (cell, direction, turns) states, so a cell can be
    revisited with a different heading or a different turn count.
    """
    if start == end:
        return None
    grid = _grid_of(board)
    rows = len(grid)
    cols = len(grid[0]) if rows else 0

    def traversable(row: int, col: int) -> bool:
        if (row, col) == end:
            return True
        if -1 <= row <= rows and -1 <= col <= cols:
            if 0 <= row < rows and 0 <= col < cols:
                return grid[row][col] == EMPTY
            # One-cell corridor around the board.
            return True
        return False

    visited: Set[Tuple[int, int, int, int]] = set()
    queue: Deque[SearchState] = deque()
    for direction in range(len(DIRECTIONS)):
        visited.add((start[0], start[1], direction, 0))
        queue.append(SearchState(point=start, path=[start], turns=0, last_dir=direction))

    while queue:
        state = queue.popleft()
        arrival = _arrival_direction(state.path)
        for direction, (dr, dc) in enumerate(DIRECTIONS):
            if arrival is not None and direction == OPPOSITE[arrival]:
                continue
            new_turns = state.turns if direction == state.last_dir else state.turns + 1
            if new_turns > MAX_TURNS:
                continue
            path = list(state.path)
            row, col = state.point[0] + dr, state.point[1] + dc
            while traversable(row, col):
                current = (row, col)
                path.append(current)
                if current == end:
                    logger.debug("route %s -> %s found with %d cells", start, end, len(path))
                    return path
                for next_dir in range(len(DIRECTIONS)):
                    if next_dir == OPPOSITE[direction]:
                        continue
                    next_turns = new_turns if next_dir == direction else new_turns + 1
                    if next_turns > MAX_TURNS:
                        continue
                    key = (row, col, next_dir, next_turns)
                    if key in visited:
                        continue
                    visited.add(key)
                    queue.append(SearchState(point=current, path=list(path), turns=next_turns, last_dir=next_dir))
                row += dr
                col += dc
    return None


def count_turns(route: Sequence[Position]) -> int:
    """Number of direction changes along a unit-step route."""
    turns = 0
    previous: Optional[Position] = None
    for (r0, c0), (r1, c1) in zip(route, route[1:]):
        step = (r1 - r0, c1 - c0)
        if previous is not None and step != previous:
            turns += 1
        previous = step
    return turns
