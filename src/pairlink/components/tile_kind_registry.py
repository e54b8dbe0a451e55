from dataclasses import dataclass

@dataclass(slots=True)
class TileKindRegistry:
    """Empty tag component marking the single entity that stores tile kind definitions.

    The same entity also carries a TileKinds component with the name/colour palette.
    """
    pass
