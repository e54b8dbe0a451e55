import logging
from typing import Optional, Tuple

from esper import World

from pairlink.components.game_state import GameMode
from pairlink.components.pending_resolution import PendingResolution
from pairlink.components.selection_state import SelectionPhase, SelectionState
from pairlink.events.bus import (
    EventBus,
    EVENT_MATCH_FOUND,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
)
from pairlink.systems.connectivity import can_connect, find_path
from pairlink.systems.grid import GridModel
from pairlink.world import get_game_state

logger = logging.getLogger(__name__)


class SelectionSystem:
    """Tile-click state machine: Idle -> Armed(cell) -> match or switch.

    A successful match is handed over as EVENT_MATCH_FOUND and the selection is
    cleared at once; the lifecycle decides when the pair actually disappears.
    Clicks are ignored while a match is still resolving or once the game is over.
    """
    def __init__(self, world: World, event_bus: EventBus, grid: Optional[GridModel] = None):
        self.world = world
        self.event_bus = event_bus
        self.grid = grid or GridModel(world)
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)

    @property
    def state(self) -> SelectionState:
        return self.world.component_for_entity(self.grid.board_entity, SelectionState)

    @property
    def selected(self) -> Optional[Tuple[int, int]]:
        return self.state.armed

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.on_tile_activated(row, col)

    def on_tile_activated(self, row: int, col: int) -> None:
        cell = self.grid.get(row, col)
        if cell is None or cell.is_empty:
            logger.debug("Ignoring activation of empty or missing cell (%s, %s)", row, col)
            return
        if self._input_locked():
            logger.debug("Ignoring activation of (%s, %s) while input is locked", row, col)
            return
        state = self.state
        if state.armed is None:
            self._arm(cell.pos)
            return
        armed = state.armed
        if can_connect(self.grid, armed, cell.pos):
            path = find_path(self.grid, armed, cell.pos)
            self._reset(reason='matched')
            self.event_bus.emit(EVENT_MATCH_FOUND, a=armed, b=cell.pos, path=path)
        else:
            # Re-clicking the armed cell lands here too and simply re-arms it.
            self.event_bus.emit(EVENT_TILE_DESELECTED, row=armed[0], col=armed[1], reason='switched')
            self._arm(cell.pos)

    def clear_selection(self, reason: str = 'cleared') -> None:
        self._reset(reason=reason)

    def _arm(self, pos: Tuple[int, int]) -> None:
        state = self.state
        state.armed = pos
        state.phase = SelectionPhase.ARMED
        self.event_bus.emit(EVENT_TILE_SELECTED, row=pos[0], col=pos[1])

    def _reset(self, reason: str) -> None:
        reset_selection(self.state, self.event_bus, reason)

    def _input_locked(self) -> bool:
        if self.state.phase == SelectionPhase.RESOLVING:
            return True
        if any(True for _ in self.world.get_component(PendingResolution)):
            return True
        return get_game_state(self.world).mode == GameMode.COMPLETED


def reset_selection(state: SelectionState, event_bus: EventBus, reason: str) -> None:
    """Drop any armed cell, returning to Idle and un-highlighting it."""
    prev = state.armed
    state.armed = None
    state.phase = SelectionPhase.IDLE
    if prev is not None:
        event_bus.emit(EVENT_TILE_DESELECTED, row=prev[0], col=prev[1], reason=reason)
