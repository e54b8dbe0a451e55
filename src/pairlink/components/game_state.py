"""Game state resource describing lifecycle progress."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """High-level lifecycle modes."""
    PLAYING = auto()
    COMPLETED = auto()


@dataclass
class GameState:
    """Singleton component storing lifecycle flags for the current game."""
    mode: GameMode = GameMode.PLAYING
    completion_signaled: bool = False
    games_started: int = 0
    shuffle_count: int = 0
