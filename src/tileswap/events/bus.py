from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps lambdas and bound methods of unreferenced systems alive.
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
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"                    # payload: col, row
EVENT_TILE_SELECTED = "tile_selected"              # payload: col, row
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, prev_col, prev_row


# ============================================================================
# SWAPS
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(c,r), dst=(c,r)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(c,r), dst=(c,r)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(c,r), dst=(c,r)
EVENT_TILE_SWAP_REJECTED = "tile_swap_rejected"    # payload: src=(c,r), dst=(c,r), reason=str


# ============================================================================
# MATCHES & CASCADES
# ============================================================================
EVENT_MATCH_FOUND = "match_found"                  # payload: groups=[[(c,r),...]], positions=[(c,r),...], size=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(c,r),...], types=[(c,r,type_name),...]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove,...]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(c,r),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(c,r),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, cleared=int
EVENT_BOARD_READY = "board_ready"                  # payload: cols=int, rows=int


# ============================================================================
# SCORE, MOVES & GAME FLOW
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_MOVES_CHANGED = "moves_changed"              # payload: remaining=int
EVENT_GAME_OVER = "game_over"                      # payload: score=int
