"""Entry point for the Pairlink connect-the-pair puzzle.

Sets up the game session, render/input systems, and the Arcade window.
"""
import argparse
import logging

from arcade import Window, run, set_background_color, color, key

from pairlink.config import GameConfig
from pairlink.constants import GRID_COLS, GRID_ROWS, TILE_KINDS_COUNT
from pairlink.events.bus import EVENT_MOUSE_PRESS
from pairlink.logging_config import setup_logging
from pairlink.session import create_session
from pairlink.systems.input import InputSystem
from pairlink.systems.render import RenderSystem

logger = logging.getLogger("pairlink.main")


class PairlinkWindow(Window):
    def __init__(self, config: GameConfig):
        super().__init__(1000, 800, "Pairlink", resizable=True)
        self.session = create_session(config, start=False)
        self.event_bus = self.session.event_bus
        self.world = self.session.world

        # Interface systems
        self.render_system = RenderSystem(self.world, self.event_bus, self, grid=self.session.grid)
        self.input_system = InputSystem(self.event_bus, self, grid=self.session.grid)

        self.session.new_game()
        set_background_color(color.DARK_SLATE_GRAY)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.session.tick(delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.R:
            self.session.restart_game()
        elif symbol == key.S:
            self.session.shuffle_remaining_tiles()
        elif symbol == key.H:
            pair = self.session.hint()
            if pair is None:
                logger.info("No connectable pair on the board")
            self.render_system.show_hint(pair)
        elif symbol == key.ESCAPE:
            self.close()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Connect-the-pair puzzle")
    parser.add_argument("--rows", type=int, default=GRID_ROWS)
    parser.add_argument("--columns", type=int, default=GRID_COLS)
    parser.add_argument("--kinds", type=int, default=TILE_KINDS_COUNT)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO, args.log_file)
    config = GameConfig(rows=args.rows, columns=args.columns, tile_kinds_count=args.kinds, seed=args.seed)
    PairlinkWindow(config)
    run()

if __name__ == "__main__":
    main()
