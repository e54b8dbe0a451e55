from dataclasses import dataclass
from typing import Tuple

Position = Tuple[int, int]

@dataclass(slots=True)
class PendingResolution:
    """Matched pair waiting for the path animator's completion callback.

    Fields:
      a, b: the matched cells.
      path: connection path handed to the animator.
      elapsed: tick time spent waiting, compared against the resolution timeout.
      token: identifies the callback allowed to complete this resolution.
    """
    a: Position
    b: Position
    path: Tuple[Position, ...]
    elapsed: float = 0.0
    token: int = 0
