from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from tileswap.constants import DEFAULT_TILE_TYPES, GRID_COLS, GRID_ROWS, STARTING_MOVES

Cell = Tuple[int, int]


@dataclass(slots=True)
class BoardConfig:
    """Static board setup: dimensions, holes in the grid, move budget and tile palette.

    ``disabled_cells`` holds ``(col, row)`` pairs that never take part in play.
    """

    cols: int = GRID_COLS
    rows: int = GRID_ROWS
    disabled_cells: Tuple[Cell, ...] = ()
    starting_moves: int = STARTING_MOVES
    tile_types: Dict[str, Tuple[int, int, int]] = field(default_factory=lambda: dict(DEFAULT_TILE_TYPES))
    enforce_adjacency: bool = False

    def __post_init__(self) -> None:
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.cols}x{self.rows}")
        if self.starting_moves < 1:
            raise ValueError(f"starting_moves must be at least 1, got {self.starting_moves}")
        if len(self.tile_types) < 2:
            raise ValueError("At least two tile types are required")
        cells: list[Cell] = []
        seen: set[Cell] = set()
        for entry in self.disabled_cells:
            col, row = int(entry[0]), int(entry[1])
            if not (0 <= col < self.cols and 0 <= row < self.rows):
                raise ValueError(f"Disabled cell {(col, row)} is outside the {self.cols}x{self.rows} board")
            if (col, row) not in seen:
                seen.add((col, row))
                cells.append((col, row))
        self.disabled_cells = tuple(cells)
        self.tile_types = {name: tuple(rgb) for name, rgb in self.tile_types.items()}

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "BoardConfig":
        kwargs: Dict[str, Any] = {}
        for key in ("cols", "rows", "starting_moves"):
            if key in payload:
                kwargs[key] = int(payload[key])
        if "disabled_cells" in payload:
            kwargs["disabled_cells"] = tuple(tuple(cell) for cell in payload["disabled_cells"])
        if "tile_types" in payload:
            kwargs["tile_types"] = dict(payload["tile_types"])
        if "enforce_adjacency" in payload:
            kwargs["enforce_adjacency"] = bool(payload["enforce_adjacency"])
        return cls(**kwargs)


def load_board_config(path: Path | str) -> BoardConfig:
    with Path(path).open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Board config in {path} must be a JSON object")
    return BoardConfig.from_mapping(payload)
