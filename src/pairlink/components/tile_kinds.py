from dataclasses import dataclass, field
from typing import List, Tuple

Color = Tuple[int, int, int]

DEFAULT_KIND_NAMES: List[str] = [
    'ember', 'leaf', 'tide', 'spark', 'frost', 'bloom', 'shade', 'stone',
]
DEFAULT_KIND_COLORS: List[Color] = [
    (220, 80, 60),    # ember
    (80, 170, 80),    # leaf
    (70, 110, 200),   # tide
    (230, 200, 60),   # spark
    (120, 200, 220),  # frost
    (210, 110, 180),  # bloom
    (110, 90, 150),   # shade
    (150, 140, 120),  # stone
]

@dataclass(slots=True)
class TileKinds:
    """Display palette for matchable kinds.

    Kind indices start at 1; when more kinds are configured than the palette
    defines, names get a numeric suffix and colours cycle.
    """
    names: List[str] = field(default_factory=lambda: list(DEFAULT_KIND_NAMES))
    colors: List[Color] = field(default_factory=lambda: list(DEFAULT_KIND_COLORS))

    def __post_init__(self) -> None:
        if not self.names or not self.colors:
            raise ValueError("TileKinds palette needs at least one name and one colour")

    def name_for(self, kind: int) -> str:
        if kind <= 0:
            return 'empty'
        index = kind - 1
        base = self.names[index % len(self.names)]
        cycle = index // len(self.names)
        return base if cycle == 0 else f"{base}_{cycle + 1}"

    def color_for(self, kind: int) -> Color:
        if kind <= 0:
            raise KeyError(kind)
        return self.colors[(kind - 1) % len(self.colors)]
