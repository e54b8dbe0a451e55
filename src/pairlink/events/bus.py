from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
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
EVENT_TICK = "tick"                        # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"            # payload: row, col


# ============================================================================
# SELECTION
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"      # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"  # payload: row, col, reason=str


# ============================================================================
# MATCHING & REMOVAL
# ============================================================================
EVENT_MATCH_FOUND = "match_found"          # payload: a=(r,c), b=(r,c), path=tuple[(r,c),...]
EVENT_TILE_REMOVED = "tile_removed"        # payload: row, col, kind=int
EVENT_PAIR_REMOVED = "pair_removed"        # payload: a=(r,c), b=(r,c), kind=int, path=tuple|None


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, items=list/positions
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, items=list/positions


# ============================================================================
# GAME LIFECYCLE
# ============================================================================
EVENT_GAME_STARTED = "game_started"            # payload: snapshot=GridSnapshot, restart=bool
EVENT_BOARD_SHUFFLED = "board_shuffled"        # payload: snapshot=GridSnapshot, reason=str
EVENT_DEADLOCK_DETECTED = "deadlock_detected"  # payload: remaining=int
EVENT_GAME_COMPLETE = "game_complete"          # payload: None
