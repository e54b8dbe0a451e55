from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class BoardPosition:
    """Fixed grid coordinate of a cell entity."""
    row: int
    col: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)
