from dataclasses import dataclass

from pairlink.constants import EMPTY_KIND

@dataclass(slots=True)
class TileKind:
    """Per-cell tile kind assignment.

    ``kind`` is ``EMPTY_KIND`` (0) for a cell without a tile, otherwise a
    matchable kind index in ``1..kind_count``. Display names and colours are
    looked up in the singleton TileKinds component.
    """
    kind: int = EMPTY_KIND

    @property
    def is_empty(self) -> bool:
        return self.kind == EMPTY_KIND
