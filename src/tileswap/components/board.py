from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Tuple

@dataclass(slots=True)
class Board:
    """Grid extents plus the fixed set of disabled cells.

    ``cells`` maps every ``(col, row)`` to the entity that stores that cell's tile.
    """
    cols: int
    rows: int
    disabled: FrozenSet[Tuple[int, int]] = frozenset()
    cells: Dict[Tuple[int, int], int] = field(default_factory=dict)
