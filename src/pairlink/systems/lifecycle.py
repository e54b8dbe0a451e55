"""Game lifecycle: generation, match resolution, deadlock recovery and completion."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Tuple

from esper import World

from pairlink.components.game_state import GameMode, GameState
from pairlink.components.pending_resolution import PendingResolution
from pairlink.components.selection_state import SelectionPhase, SelectionState
from pairlink.config import GameConfig
from pairlink.constants import EMPTY_KIND
from pairlink.errors import InvariantViolation
from pairlink.events.bus import (
    EventBus,
    EVENT_BOARD_SHUFFLED,
    EVENT_DEADLOCK_DETECTED,
    EVENT_GAME_COMPLETE,
    EVENT_GAME_STARTED,
    EVENT_MATCH_FOUND,
    EVENT_PAIR_REMOVED,
    EVENT_TICK,
    EVENT_TILE_REMOVED,
)
from pairlink.systems import connectivity
from pairlink.systems.grid import GridModel, GridSnapshot
from pairlink.systems.selection import reset_selection
from pairlink.world import get_game_state, get_selection_state

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Path = Tuple[Position, ...]


class PathAnimator(Protocol):
    """Optional collaborator that animates a path and reports back once."""

    def draw_path(self, path: Path, on_complete: Callable[[], None]) -> None: ...


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    grid: GridSnapshot
    selected: Optional[Position]
    phase: SelectionPhase
    complete: bool
    resolving: bool


class GameLifecycleSystem:
    """Owns the game-level flow around the grid.

    Matches arrive as EVENT_MATCH_FOUND (or direct ``resolve_match`` calls). With
    a path animator registered the pair is parked in a PendingResolution
    component until the animator's callback fires; otherwise it is removed
    immediately.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        config: GameConfig | None = None,
        *,
        grid: GridModel | None = None,
        path_animator: PathAnimator | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config or GameConfig()
        self.grid = grid or GridModel(world)
        self.path_animator = path_animator
        self._rng = rng or getattr(world, "random", None) or random.Random(self.config.seed)
        self._resolution_token = 0
        self.event_bus.subscribe(EVENT_MATCH_FOUND, self.on_match_found)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    # ------------------------------------------------------------------
    # Collaborators and state access
    # ------------------------------------------------------------------
    def set_path_animator(self, animator: PathAnimator | None) -> None:
        self.path_animator = animator

    @property
    def state(self) -> GameState:
        return get_game_state(self.world)

    @property
    def selection(self) -> SelectionState:
        return get_selection_state(self.world)

    @property
    def is_complete(self) -> bool:
        return self.state.completion_signaled

    def pending(self) -> PendingResolution | None:
        for _, pending in self.world.get_component(PendingResolution):
            return pending
        return None

    # ------------------------------------------------------------------
    # Game setup
    # ------------------------------------------------------------------
    def new_game(
        self,
        rows: int | None = None,
        cols: int | None = None,
        kind_count: int | None = None,
        *,
        restart: bool = False,
    ) -> GridSnapshot:
        config = self.config.with_dimensions(
            rows if rows is not None else self.config.rows,
            cols if cols is not None else self.config.columns,
            kind_count if kind_count is not None else self.config.tile_kinds_count,
        )
        self._discard_pending()
        reset_selection(self.selection, self.event_bus, reason='new_game')
        self.grid.initialize(config.rows, config.columns, config.tile_kinds_count, rng=self._rng)
        self.config = config
        state = self.state
        state.mode = GameMode.PLAYING
        state.completion_signaled = False
        state.shuffle_count = 0
        state.games_started += 1
        snapshot = self.grid.snapshot()
        logger.info(
            "New game %d: %dx%d grid, %d kinds, %d tiles",
            state.games_started,
            config.rows,
            config.columns,
            config.tile_kinds_count,
            len(snapshot.active_positions()),
        )
        self.event_bus.emit(EVENT_GAME_STARTED, snapshot=snapshot, restart=restart)
        # A fresh deal can be deadlocked; no removal would ever trigger recovery.
        self._recover_from_deadlock()
        return self.grid.snapshot()

    def restart_game(self) -> GridSnapshot:
        reset_selection(self.selection, self.event_bus, reason='restart')
        return self.new_game(restart=True)

    # ------------------------------------------------------------------
    # Match resolution
    # ------------------------------------------------------------------
    def on_match_found(self, sender, **kwargs):
        a = kwargs.get('a')
        b = kwargs.get('b')
        if a is None or b is None:
            return
        self.resolve_match(a, b, kwargs.get('path'))

    def resolve_match(self, a: Position, b: Position, path: Path | None = None) -> None:
        a = tuple(a)
        b = tuple(b)
        self._validate_match(a, b)
        if path is None:
            path = connectivity.find_path(self.grid, a, b)
        path = tuple(tuple(point) for point in path)
        if self.path_animator is None:
            self._remove_pair(a, b, path)
            return
        if self.pending() is not None:
            raise InvariantViolation("A match is already waiting for its path animation")
        self._resolution_token += 1
        token = self._resolution_token
        self.world.create_entity(PendingResolution(a=a, b=b, path=path, token=token))
        self.selection.phase = SelectionPhase.RESOLVING
        self.path_animator.draw_path(path, lambda: self._complete_pending(token))

    def _validate_match(self, a: Position, b: Position) -> None:
        if a == b:
            raise InvariantViolation(f"Cannot match cell {a} with itself")
        kind_a = self.grid.kind_at(*a)
        kind_b = self.grid.kind_at(*b)
        if kind_a is None or kind_b is None:
            raise InvariantViolation(f"Match operands {a}, {b} must lie on the grid")
        if kind_a == EMPTY_KIND or kind_b == EMPTY_KIND:
            raise InvariantViolation(f"Match operands {a}, {b} must both hold tiles")
        if kind_a != kind_b:
            raise InvariantViolation(f"Match operands {a}, {b} hold different kinds ({kind_a} != {kind_b})")
        if not connectivity.can_connect(self.grid, a, b):
            raise InvariantViolation(f"Match operands {a}, {b} cannot be connected")

    def _complete_pending(self, token: int) -> None:
        for entity, pending in list(self.world.get_component(PendingResolution)):
            if pending.token != token:
                continue
            self.world.delete_entity(entity, immediate=True)
            if self.selection.phase == SelectionPhase.RESOLVING:
                self.selection.phase = SelectionPhase.IDLE
            self._remove_pair(pending.a, pending.b, pending.path)
            return
        # Stale or repeated callback: the pair was already resolved or the game restarted.
        logger.debug("Ignoring completion callback for resolution %d", token)

    def _discard_pending(self) -> None:
        for entity, _ in list(self.world.get_component(PendingResolution)):
            self.world.delete_entity(entity, immediate=True)
        if self.selection.phase == SelectionPhase.RESOLVING:
            self.selection.phase = SelectionPhase.IDLE

    def _flush_pending(self) -> None:
        pending = self.pending()
        if pending is not None:
            self._complete_pending(pending.token)

    def _remove_pair(self, a: Position, b: Position, path: Path | None) -> None:
        kind = self.grid.kind_at(*a)
        self.grid.clear(a)
        self.grid.clear(b)
        self.event_bus.emit(EVENT_TILE_REMOVED, row=a[0], col=a[1], kind=kind)
        self.event_bus.emit(EVENT_TILE_REMOVED, row=b[0], col=b[1], kind=kind)
        self.event_bus.emit(EVENT_PAIR_REMOVED, a=a, b=b, kind=kind, path=path)
        if not self.check_completion():
            self._recover_from_deadlock()

    def on_tick(self, sender, **kwargs):
        timeout = self.config.resolution_timeout
        if timeout is None:
            return
        pending = self.pending()
        if pending is None:
            return
        pending.elapsed += kwargs.get('dt', 1/60)
        if pending.elapsed >= timeout:
            logger.warning(
                "Path animation for %s-%s did not finish within %.2fs; removing the pair",
                pending.a, pending.b, timeout,
            )
            self._complete_pending(pending.token)

    # ------------------------------------------------------------------
    # Completion and deadlock
    # ------------------------------------------------------------------
    def check_completion(self) -> bool:
        state = self.state
        if state.completion_signaled:
            return True
        if not self.grid.is_empty():
            return False
        state.completion_signaled = True
        state.mode = GameMode.COMPLETED
        logger.info("Game complete after %d shuffles", state.shuffle_count)
        self.event_bus.emit(EVENT_GAME_COMPLETE)
        return True

    def has_valid_moves(self) -> bool:
        return connectivity.has_valid_moves(self.grid.snapshot())

    def hint(self) -> Optional[Tuple[Position, Position]]:
        pairs = connectivity.find_connectable_pairs(self.grid.snapshot(), limit=1)
        return pairs[0] if pairs else None

    def _recover_from_deadlock(self) -> None:
        if not self.config.shuffle_on_deadlock:
            return
        if self.grid.is_empty() or self.has_valid_moves():
            return
        remaining = len(self.grid.active_cells())
        logger.info("Deadlock with %d tiles left; shuffling", remaining)
        self.event_bus.emit(EVENT_DEADLOCK_DETECTED, remaining=remaining)
        for _ in range(self.config.max_shuffle_attempts):
            self.shuffle_remaining_tiles(reason='deadlock')
            if self.has_valid_moves():
                return
        logger.warning(
            "No valid move after %d shuffles; leaving the board to the host",
            self.config.max_shuffle_attempts,
        )

    def shuffle_remaining_tiles(self, reason: str = 'manual') -> GridSnapshot:
        """Collect surviving kinds row-major, shuffle them, refill the row-major prefix.

        Tiles are compacted toward the top-left; their previous positions are
        abandoned.
        """
        self._flush_pending()
        if self.state.completion_signaled:
            return self.grid.snapshot()
        reset_selection(self.selection, self.event_bus, reason='shuffled')
        remaining = []
        for cell in self.grid.cells():
            if not cell.is_empty:
                remaining.append(cell.kind)
                self.grid.clear(cell)
        self._rng.shuffle(remaining)
        for cell, kind in zip(self.grid.cells(), remaining):
            cell.tile.kind = kind
        self.state.shuffle_count += 1
        snapshot = self.grid.snapshot()
        logger.debug("Shuffled %d tiles (%s)", len(remaining), reason)
        self.event_bus.emit(EVENT_BOARD_SHUFFLED, snapshot=snapshot, reason=reason)
        if reason == 'manual':
            self._recover_from_deadlock()
            return self.grid.snapshot()
        return snapshot

    # ------------------------------------------------------------------
    # Host queries
    # ------------------------------------------------------------------
    def get_snapshot(self) -> GameSnapshot:
        selection = self.selection
        return GameSnapshot(
            grid=self.grid.snapshot(),
            selected=selection.armed,
            phase=selection.phase,
            complete=self.state.completion_signaled,
            resolving=self.pending() is not None,
        )
