from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple


class SelectionPhase(Enum):
    IDLE = auto()
    ARMED = auto()
    RESOLVING = auto()


@dataclass(slots=True)
class SelectionState:
    """Current tile selection, stored on the board entity.

    ``armed`` references a cell by coordinate only; the board keeps ownership
    of the cell's kind.
    """
    phase: SelectionPhase = SelectionPhase.IDLE
    armed: Optional[Tuple[int, int]] = None
