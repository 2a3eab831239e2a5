from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from tileswap.constants import EMPTY_CELL_COLOR

@dataclass(slots=True)
class TileTypes:
    """Canonical tile type palette stored on a single entity.

    ``spawnable`` is the subset handed out when the board is filled or refilled.
    """
    types: Dict[str, Tuple[int,int,int]]
    spawnable: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.spawnable = self._filter(self.spawnable) or list(self.types.keys())

    def _filter(self, type_names: Iterable[str]) -> List[str]:
        # Preserve order while dropping unknown and duplicate names.
        seen: set[str] = set()
        filtered: List[str] = []
        for name in type_names:
            if name in self.types and name not in seen:
                filtered.append(name)
                seen.add(name)
        return filtered

    def background_for(self, type_name: Optional[str]) -> Tuple[int,int,int]:
        if type_name is None:
            return EMPTY_CELL_COLOR
        return self.types.get(type_name, EMPTY_CELL_COLOR)

    def spawnable_types(self) -> List[str]:
        return list(self.spawnable)
