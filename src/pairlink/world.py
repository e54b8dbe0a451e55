import random

from esper import World
from pairlink.events.bus import EventBus
from pairlink.components.board import Board
from pairlink.components.game_state import GameState
from pairlink.components.selection_state import SelectionState
from pairlink.components.tile_kind_registry import TileKindRegistry
from pairlink.components.tile_kinds import TileKinds
from pairlink.config import GameConfig


def create_world(
    event_bus: EventBus,
    config: GameConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    """Create a world holding the singleton game entities.

    Cell entities are not created here; ``GridModel.initialize`` builds them
    when a game starts.
    """
    config = config or GameConfig()
    world = World()
    setattr(world, "random", rng or random.Random(config.seed))
    setattr(world, "event_bus", event_bus)

    # Register the global game state resource.
    world.create_entity(GameState())

    # Single registry entity with the display palette
    world.create_entity(TileKindRegistry(), TileKinds())

    # Board entity carries dimensions, the cell index and the selection.
    world.create_entity(
        Board(rows=config.rows, cols=config.columns, kind_count=config.tile_kinds_count),
        SelectionState(),
    )
    return world


def get_board_entity(world: World) -> int:
    for entity, _ in world.get_component(Board):
        return entity
    raise RuntimeError("Board entity not found")


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState not found")


def get_selection_state(world: World) -> SelectionState:
    for _, selection in world.get_component(SelectionState):
        return selection
    raise RuntimeError("SelectionState not found")


def get_tile_kinds(world: World) -> TileKinds:
    for entity, _ in world.get_component(TileKindRegistry):
        return world.component_for_entity(entity, TileKinds)
    raise RuntimeError("TileKinds definitions not found")
