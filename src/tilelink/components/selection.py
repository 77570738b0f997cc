from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

Position = Tuple[int, int]


class MatchPhase(Enum):
    """Where the match controller stands within a turn."""
    IDLE = auto()
    ONE_SELECTED = auto()
    REMOVING = auto()


@dataclass(slots=True)
class PendingRemoval:
    route: List[Position]
    cell_a: Position
    cell_b: Position
    elapsed: float = 0.0


@dataclass(slots=True)
class Selection:
    """Singleton component holding the controller's turn state.

    completion_latched: set once ``level_complete`` has fired for the current
    board; only a board reset clears it.
    """
    phase: MatchPhase = MatchPhase.IDLE
    selected: Optional[Position] = None
    pending: Optional[PendingRemoval] = None
    completion_latched: bool = False
    history: List[Tuple[Position, Position]] = field(default_factory=list)
