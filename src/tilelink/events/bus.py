from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody else references alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col


# ============================================================================
# SELECTION & MATCHING
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col, tile=int
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, prev_row, prev_col
EVENT_SELECTION_IGNORED = "selection_ignored"      # payload: row, col, reason=str
EVENT_ROUTE_FOUND = "route_found"                  # payload: route=list[(r,c)], cell_a=(r,c), cell_b=(r,c)
EVENT_NO_ROUTE = "no_route"                        # payload: cell_a=(r,c), cell_b=(r,c)
EVENT_TILES_REMOVED = "tiles_removed"              # payload: cell_a=(r,c), cell_b=(r,c), remaining=int
EVENT_LEVEL_COMPLETE = "level_complete"            # payload: None


# ============================================================================
# BOARD LIFECYCLE
# ============================================================================
EVENT_NEW_BOARD_REQUEST = "new_board_request"                # payload: rows=int|None, cols=int|None, tile_type_count=int|None
EVENT_BOARD_GENERATION_FAILED = "board_generation_failed"    # payload: reason=str
EVENT_BOARD_RESET = "board_reset"                            # payload: rows=int, cols=int, remaining=int
EVENT_SHUFFLE_REQUEST = "shuffle_request"                    # payload: None
EVENT_BOARD_SHUFFLED = "board_shuffled"                      # payload: remaining_shuffles=int
EVENT_SHUFFLE_DENIED = "shuffle_denied"                      # payload: reason=str, remaining_shuffles=int
EVENT_BOARD_STALEMATE = "board_stalemate"                    # payload: remaining=int, remaining_shuffles=int
