from dataclasses import dataclass, field
from typing import Dict, Tuple

@dataclass(slots=True)
class Board:
    """Grid dimensions plus the position -> cell entity index.

    The index is rebuilt whenever a new game recreates the cell entities; cells
    themselves never move.
    """
    rows: int
    cols: int
    kind_count: int = 1
    cells: Dict[Tuple[int, int], int] = field(default_factory=dict)
