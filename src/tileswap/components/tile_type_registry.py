from dataclasses import dataclass

@dataclass(slots=True)
class TileTypeRegistry:
    """Tag for the singleton entity carrying TileTypes."""
    pass
