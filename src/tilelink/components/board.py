from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from tilelink.constants import EMPTY
from tilelink.errors import MalformedBoardError

Position = Tuple[int, int]


@dataclass(slots=True)
class Board:
    """Rectangular grid of tile types; ``EMPTY`` marks a cleared cell.

    Owned by the single board entity. Generation and reset replace ``cells``
    wholesale; only the match controller clears individual cells.
    """
    rows: int
    cols: int
    cells: List[List[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[EMPTY] * self.cols for _ in range(self.rows)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Board:
        cells = [list(row) for row in rows]
        width = len(cells[0]) if cells else 0
        if any(len(row) != width for row in cells):
            raise MalformedBoardError("board rows have inconsistent lengths")
        return cls(rows=len(cells), cols=width, cells=cells)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> int:
        return self.cells[row][col]

    def clear(self, row: int, col: int) -> None:
        self.cells[row][col] = EMPTY

    def replace(self, cells: Sequence[Sequence[int]]) -> None:
        other = Board.from_rows(cells)
        self.rows = other.rows
        self.cols = other.cols
        self.cells = other.cells

    def positions(self) -> Iterator[Position]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def occupied(self) -> Iterator[Tuple[Position, int]]:
        for row, col in self.positions():
            value = self.cells[row][col]
            if value != EMPTY:
                yield (row, col), value

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(row) for row in self.cells)
