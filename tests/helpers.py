from __future__ import annotations

import random
from typing import Sequence

from pairlink.config import GameConfig
from pairlink.session import GameSession, create_session


def make_game(
    rows: int = 4,
    cols: int = 4,
    kinds: int = 2,
    *,
    seed: int = 1234,
    animate: bool = False,
    shuffle_on_deadlock: bool = False,
    resolution_timeout: float | None = None,
) -> GameSession:
    """Start a seeded session; deadlock shuffling is off so hand-built layouts stay put."""
    config = GameConfig(
        rows=rows,
        columns=cols,
        tile_kinds_count=kinds,
        seed=seed,
        shuffle_on_deadlock=shuffle_on_deadlock,
        resolution_timeout=resolution_timeout,
    )
    return create_session(config, animate=animate)


def set_layout(session: GameSession, layout: Sequence[Sequence[int]]) -> None:
    """Overwrite the board with an explicit row-major layout (0 = Empty)."""
    session.grid.load_layout([list(line) for line in layout])


def collect(bus, *names: str) -> list[tuple[str, dict]]:
    """Record (event name, payload) for every emission of the given events."""
    received: list[tuple[str, dict]] = []
    for name in names:
        def handler(sender, _name=name, **kwargs):
            received.append((_name, kwargs))
        bus.subscribe(name, handler)
    return received


class ScriptedRandom(random.Random):
    """Random source whose shuffles follow a fixed script, then sort."""

    def __init__(self, orders: Sequence[Sequence[int]] = ()):
        super().__init__(0)
        self.orders = [list(order) for order in orders]

    def shuffle(self, x):
        if self.orders:
            x[:] = self.orders.pop(0)
        else:
            x.sort()
