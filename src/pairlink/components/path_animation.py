from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class PathAnimation:
    path: Tuple[Tuple[int, int], ...]
    progress: float = 0.0  # 0..1 share of the path drawn
    alpha: float = 1.0     # 1..0 during fade
    phase: str = 'draw'    # 'draw', 'fade', 'done'
