from dataclasses import dataclass
from typing import Optional, Tuple

@dataclass(slots=True)
class Selection:
    """Pending first tile of a click-click swap, owned by the input layer."""
    cell: Optional[Tuple[int, int]] = None
