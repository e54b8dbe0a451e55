from typing import Any, Optional, Tuple

from esper import World

from pairlink.events.bus import (
    EventBus,
    EVENT_BOARD_SHUFFLED,
    EVENT_GAME_COMPLETE,
    EVENT_GAME_STARTED,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_REMOVED,
    EVENT_TILE_SELECTED,
)
from pairlink.rendering.board_renderer import BoardRenderer
from pairlink.rendering.layout import BoardGeometry, compute_board_geometry
from pairlink.rendering.path_renderer import PathRenderer
from pairlink.systems.grid import GridModel
from pairlink.world import get_tile_kinds

PADDING = 4
COMPLETE_MESSAGE = "Congratulations!\nYou completed the puzzle!"


class RenderSystem:
    """Draws the board, the selection highlight, in-flight paths and the completion banner.

    Holds no game logic; it only mirrors lifecycle events into view state.
    """
    def __init__(self, world: World, event_bus: EventBus, window, grid: Optional[GridModel] = None):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.grid = grid or GridModel(world)
        self.event_bus.subscribe(EVENT_TILE_SELECTED, self.on_tile_selected)
        self.event_bus.subscribe(EVENT_TILE_DESELECTED, self.on_tile_deselected)
        self.event_bus.subscribe(EVENT_TILE_REMOVED, self.on_tile_removed)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)
        self.event_bus.subscribe(EVENT_BOARD_SHUFFLED, self.on_board_rebuilt)
        self.event_bus.subscribe(EVENT_GAME_COMPLETE, self.on_game_complete)
        self.selected: Optional[Tuple[int, int]] = None
        self.hinted: tuple[Tuple[int, int], ...] = ()
        self.show_complete_banner = False
        self._last_tile_layout: dict[tuple[int, int], dict[str, Any]] = {}
        self._board_renderer = BoardRenderer(self, padding=PADDING)
        self._path_renderer = PathRenderer(world)

    def show_hint(self, pair: Optional[Tuple[Tuple[int, int], Tuple[int, int]]]) -> None:
        self.hinted = tuple(pair) if pair else ()

    def on_tile_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))
        self.hinted = ()

    def on_tile_deselected(self, sender, **kwargs):
        if self.selected == (kwargs.get('row'), kwargs.get('col')):
            self.selected = None

    def on_tile_removed(self, sender, **kwargs):
        self.hinted = ()
        self._last_tile_layout.pop((kwargs.get('row'), kwargs.get('col')), None)

    def on_game_started(self, sender, **kwargs):
        self.on_board_rebuilt(sender, **kwargs)
        self.show_complete_banner = False

    def on_board_rebuilt(self, sender, **kwargs):
        self._last_tile_layout = {}
        self.hinted = ()
        self.selected = None

    def on_game_complete(self, sender, **kwargs):
        self.show_complete_banner = True

    def geometry(self) -> BoardGeometry:
        return compute_board_geometry(self.window.width, self.window.height, self.grid.rows, self.grid.cols)

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        geometry = self.geometry()
        registry = get_tile_kinds(self.world)
        self._board_renderer.render(arcade, self.grid, geometry, registry, headless=headless)
        self._path_renderer.render(arcade, geometry, headless=headless)
        if self.show_complete_banner and not headless:
            self._render_complete_banner(arcade)

    def get_tile_at_point(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        return self.geometry().cell_at_point(x, y)

    def _render_complete_banner(self, arcade) -> None:
        width = min(self.window.width * 0.8, 520)
        height = 140
        left = (self.window.width - width) / 2
        bottom = (self.window.height - height) / 2
        arcade.draw_lrbt_rectangle_filled(left, left + width, bottom, bottom + height, (20, 20, 30, 230))
        arcade.draw_lrbt_rectangle_outline(left, left + width, bottom, bottom + height, (255, 215, 0), 3)
        for index, line in enumerate(COMPLETE_MESSAGE.split("\n")):
            arcade.draw_text(
                line,
                self.window.width / 2,
                bottom + height - 45 - index * 36,
                arcade.color.WHITE,
                22,
                anchor_x="center",
            )
        arcade.draw_text(
            "Press R to play again",
            self.window.width / 2,
            bottom + 14,
            arcade.color.LIGHT_GRAY,
            12,
            anchor_x="center",
        )
