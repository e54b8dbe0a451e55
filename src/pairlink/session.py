"""Host-facing bundle of the world, event bus and core systems."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from esper import World

from pairlink.config import GameConfig
from pairlink.events.bus import EVENT_TICK, EventBus
from pairlink.systems.animation import PathAnimationSystem
from pairlink.systems.grid import GridModel, GridSnapshot
from pairlink.systems.lifecycle import GameLifecycleSystem, GameSnapshot
from pairlink.systems.selection import SelectionSystem
from pairlink.world import create_world

Position = Tuple[int, int]


@dataclass
class GameSession:
    world: World
    event_bus: EventBus
    grid: GridModel
    selection: SelectionSystem
    lifecycle: GameLifecycleSystem
    animation: Optional[PathAnimationSystem] = None

    @property
    def config(self) -> GameConfig:
        return self.lifecycle.config

    def new_game(self, rows: int | None = None, cols: int | None = None, kind_count: int | None = None) -> GridSnapshot:
        return self.lifecycle.new_game(rows, cols, kind_count)

    def on_tile_activated(self, row: int, col: int) -> None:
        self.selection.on_tile_activated(row, col)

    def has_valid_moves(self) -> bool:
        return self.lifecycle.has_valid_moves()

    def shuffle_remaining_tiles(self) -> GridSnapshot:
        return self.lifecycle.shuffle_remaining_tiles()

    def restart_game(self) -> GridSnapshot:
        return self.lifecycle.restart_game()

    def get_snapshot(self) -> GameSnapshot:
        return self.lifecycle.get_snapshot()

    def hint(self) -> Optional[Tuple[Position, Position]]:
        return self.lifecycle.hint()

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)


def create_session(
    config: GameConfig | Mapping[str, Any] | None = None,
    *,
    event_bus: EventBus | None = None,
    animate: bool = True,
    rng: random.Random | None = None,
    start: bool = True,
) -> GameSession:
    """Wire world and systems together; with ``animate`` matches wait for the path animation."""
    if config is None:
        config = GameConfig()
    elif not isinstance(config, GameConfig):
        config = GameConfig.from_mapping(config)
    event_bus = event_bus or EventBus()
    world = create_world(event_bus, config, rng=rng)
    grid = GridModel(world)
    animation = PathAnimationSystem(world, event_bus) if animate else None
    lifecycle = GameLifecycleSystem(world, event_bus, config, grid=grid, path_animator=animation)
    selection = SelectionSystem(world, event_bus, grid=grid)
    session = GameSession(
        world=world,
        event_bus=event_bus,
        grid=grid,
        selection=selection,
        lifecycle=lifecycle,
        animation=animation,
    )
    if start:
        session.new_game()
    return session
