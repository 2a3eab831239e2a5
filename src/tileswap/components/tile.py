from dataclasses import dataclass
from typing import Optional

@dataclass(slots=True)
class TileType:
    """Per-cell tile assignment.

    ``type_name`` is the semantic tile type; ``None`` means the cell is currently empty.
    Colours live in the singleton entity holding TileTypeRegistry + TileTypes.
    """
    type_name: Optional[str] = None
