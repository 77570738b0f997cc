from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple, Union

from esper import World

from tilelink.components.board import Board
from tilelink.components.selection import MatchPhase, PendingRemoval, Selection
from tilelink.components.shuffle_allowance import ShuffleAllowance
from tilelink.constants import EMPTY
from tilelink.events.bus import (
    EventBus,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EVENT_TILE_SELECTED,
    EVENT_TILE_DESELECTED,
    EVENT_SELECTION_IGNORED,
    EVENT_ROUTE_FOUND,
    EVENT_NO_ROUTE,
    EVENT_TILES_REMOVED,
    EVENT_LEVEL_COMPLETE,
    EVENT_BOARD_RESET,
    EVENT_BOARD_SHUFFLED,
    EVENT_SHUFFLE_DENIED,
    EVENT_BOARD_STALEMATE,
)
from tilelink.systems.board_ops import (
    find_matchable_pairs,
    get_board,
    is_cleared,
    remaining_tiles,
    shuffle_remaining,
)
from tilelink.systems.path_finder import Route, find_path

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class OutcomeKind(Enum):
    SELECTED = auto()
    DESELECTED = auto()
    MISMATCH = auto()
    NO_ROUTE = auto()
    MATCHED = auto()
    MATCHED_AND_CLEARED = auto()
    IGNORED = auto()
    BUSY = auto()


@dataclass(slots=True)
class MatchOutcome:
    """Result of one ``select`` call, mirrored by the events it emitted."""
    kind: OutcomeKind
    cell: Position
    cell_a: Optional[Position] = None
    cell_b: Optional[Position] = None
    route: Optional[Route] = None
    reason: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.kind in (OutcomeKind.MATCHED, OutcomeKind.MATCHED_AND_CLEARED)


class MatchSystem:
    """Selection state machine for one board.

    Idle -> one selected -> idle on every resolved attempt. A found route is
    emitted before the board changes; with ``removal_delay`` > 0 the two cells
    stay on the board until enough ticks elapse (or ``flush`` is called) and
    any selection made in between is rejected as BUSY.
    """

    def __init__(self, world: World, event_bus: EventBus, *, removal_delay: float = 0.0):
        self.world = world
        self.event_bus = event_bus
        self.removal_delay = max(0.0, float(removal_delay))
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    # -- state accessors -------------------------------------------------

    @property
    def board(self) -> Board:
        return get_board(self.world)

    @property
    def state(self) -> Selection:
        for _, selection in self.world.get_component(Selection):
            return selection
        raise RuntimeError("Selection component not found")

    @property
    def allowance(self) -> ShuffleAllowance:
        for _, allowance in self.world.get_component(ShuffleAllowance):
            return allowance
        raise RuntimeError("ShuffleAllowance component not found")

    @property
    def selected(self) -> Optional[Position]:
        return self.state.selected

    @property
    def phase(self) -> MatchPhase:
        return self.state.phase

    # -- event handlers --------------------------------------------------

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.select((row, col))

    def on_tick(self, sender, **kwargs):
        try:
            dt = float(kwargs.get('dt', 0.0))
        except (TypeError, ValueError):
            return
        self.tick(dt)

    # -- transitions -----------------------------------------------------

    def select(self, cell: Position) -> MatchOutcome:
        state = self.state
        board = self.board
        cell = (int(cell[0]), int(cell[1]))

        if state.phase == MatchPhase.REMOVING:
            return MatchOutcome(OutcomeKind.BUSY, cell, reason="removal_pending")

        if not board.in_bounds(*cell):
            return self._ignore(cell, "out_of_bounds")

        if state.selected is None:
            tile = board.get(*cell)
            if tile == EMPTY:
                return self._ignore(cell, "empty_cell")
            state.selected = cell
            state.phase = MatchPhase.ONE_SELECTED
            self.event_bus.emit(EVENT_TILE_SELECTED, row=cell[0], col=cell[1], tile=tile)
            return MatchOutcome(OutcomeKind.SELECTED, cell)

        first = state.selected
        if cell == first:
            self._clear_selection("cancel")
            return MatchOutcome(OutcomeKind.DESELECTED, cell, cell_a=first)

        if not board.in_bounds(*first) or board.get(*first) == EMPTY:
            # Stale selection from a board that has since changed under it.
            self._clear_selection("stale")
            return self._ignore(cell, "stale_selection")

        if board.get(*cell) == EMPTY:
            return self._ignore(cell, "empty_cell")

        if board.get(*cell) != board.get(*first):
            self._clear_selection("mismatch")
            return MatchOutcome(OutcomeKind.MISMATCH, cell, cell_a=first, cell_b=cell)

        route = find_path(board, first, cell)
        if route is None:
            self._clear_selection("no_route")
            self.event_bus.emit(EVENT_NO_ROUTE, cell_a=first, cell_b=cell)
            return MatchOutcome(OutcomeKind.NO_ROUTE, cell, cell_a=first, cell_b=cell)

        clears_board = remaining_tiles(board) == 2
        state.selected = None
        state.phase = MatchPhase.REMOVING
        state.pending = PendingRemoval(route=route, cell_a=first, cell_b=cell)
        self.event_bus.emit(EVENT_ROUTE_FOUND, route=list(route), cell_a=first, cell_b=cell)
        if self.removal_delay <= 0.0:
            self.flush()
        kind = OutcomeKind.MATCHED_AND_CLEARED if clears_board else OutcomeKind.MATCHED
        return MatchOutcome(kind, cell, cell_a=first, cell_b=cell, route=route)

    def tick(self, dt: float) -> None:
        pending = self.state.pending
        if pending is None:
            return
        pending.elapsed += max(0.0, dt)
        if pending.elapsed >= self.removal_delay:
            self.flush()

    def flush(self) -> bool:
        """Apply a pending removal now. Returns False when nothing was pending."""
        state = self.state
        pending = state.pending
        if pending is None:
            return False
        board = self.board
        board.clear(*pending.cell_a)
        board.clear(*pending.cell_b)
        state.pending = None
        state.phase = MatchPhase.IDLE
        state.history.append((pending.cell_a, pending.cell_b))
        remaining = remaining_tiles(board)
        self.event_bus.emit(
            EVENT_TILES_REMOVED, cell_a=pending.cell_a, cell_b=pending.cell_b, remaining=remaining
        )
        if not self.check_cleared() and not find_matchable_pairs(board, limit=1):
            self.event_bus.emit(
                EVENT_BOARD_STALEMATE,
                remaining=remaining,
                remaining_shuffles=self.allowance.remaining,
            )
        return True

    def check_cleared(self) -> bool:
        """True when the board is empty; fires ``level_complete`` once per board."""
        if not is_cleared(self.board):
            return False
        state = self.state
        if not state.completion_latched:
            state.completion_latched = True
            logger.info("board cleared after %d matches", len(state.history))
            self.event_bus.emit(EVENT_LEVEL_COMPLETE)
        return True

    def reset(self, board: Union[Board, Sequence[Sequence[int]]]) -> None:
        """Install a new board; legal from any state."""
        cells = board.cells if isinstance(board, Board) else board
        current = self.board
        current.replace(cells)
        state = self.state
        state.selected = None
        state.pending = None
        state.phase = MatchPhase.IDLE
        state.completion_latched = False
        state.history.clear()
        self.allowance.restore()
        logger.info("installed %dx%d board", current.rows, current.cols)
        self.event_bus.emit(
            EVENT_BOARD_RESET, rows=current.rows, cols=current.cols, remaining=remaining_tiles(current)
        )

    def shuffle(self) -> bool:
        """Reshuffle the remaining tiles, spending one unit of the allowance."""
        allowance = self.allowance
        state = self.state
        reason = None
        if state.phase == MatchPhase.REMOVING:
            reason = "removal_pending"
        elif allowance.remaining <= 0:
            reason = "exhausted"
        if reason is not None:
            self.event_bus.emit(EVENT_SHUFFLE_DENIED, reason=reason, remaining_shuffles=allowance.remaining)
            return False
        if state.selected is not None:
            self._clear_selection("shuffle")
        shuffle_remaining(self.board, rng=getattr(self.world, "random", None))
        allowance.remaining -= 1
        self.event_bus.emit(EVENT_BOARD_SHUFFLED, remaining_shuffles=allowance.remaining)
        return True

    # -- helpers ---------------------------------------------------------

    def _clear_selection(self, reason: str) -> None:
        state = self.state
        prev = state.selected
        state.selected = None
        state.phase = MatchPhase.IDLE
        if prev is not None:
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])

    def _ignore(self, cell: Position, reason: str) -> MatchOutcome:
        self.event_bus.emit(EVENT_SELECTION_IGNORED, row=cell[0], col=cell[1], reason=reason)
        return MatchOutcome(OutcomeKind.IGNORED, cell, reason=reason)


def attempt_match(controller: MatchSystem, cell: Position) -> MatchOutcome:
    return controller.select(cell)


def reset_board(controller: MatchSystem, board: Union[Board, Sequence[Sequence[int]]]) -> None:
    controller.reset(board)


def board_snapshot(controller: MatchSystem) -> Tuple[Tuple[int, ...], ...]:
    return controller.board.snapshot()


def recent_matches(controller: MatchSystem) -> List[Tuple[Position, Position]]:
    return list(controller.state.history)
