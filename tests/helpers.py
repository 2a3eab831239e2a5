from __future__ import annotations

import random
from typing import Dict, Iterable, Optional, Tuple

from tileswap.config import BoardConfig
from tileswap.events.bus import EventBus
from tileswap.systems.board import BoardSystem
from tileswap.systems.board_ops import active_cells, set_tile
from tileswap.world import create_world

Cell = Tuple[int, int]


class DummyWindow:
    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height


def filler(col: int, row: int) -> str:
    """Background token pattern with no two equal orthogonal neighbours."""
    return f"f{(col + 2 * row) % 5}"


def build_board(
    cols: int,
    rows: int,
    tiles: Optional[Dict[Cell, str]] = None,
    *,
    disabled: Iterable[Cell] = (),
    moves: int = 10,
    seed: int = 0,
    enforce_adjacency: bool = False,
):
    """Create a board and overwrite every active cell with a known layout.

    Cells not listed in ``tiles`` get ``filler`` tokens. Refills draw from the
    default fruit palette, so they never match the layout's tokens.
    """
    config = BoardConfig(
        cols=cols,
        rows=rows,
        disabled_cells=tuple(disabled),
        starting_moves=moves,
        enforce_adjacency=enforce_adjacency,
    )
    bus = EventBus()
    world = create_world(bus, config, rng=random.Random(seed))
    board = BoardSystem(world, bus)
    tiles = tiles or {}
    for cell in active_cells(world):
        set_tile(world, cell, tiles.get(cell, filler(*cell)))
    return bus, world, board


def record(bus: EventBus, name: str) -> list:
    received: list = []
    bus.subscribe(name, lambda sender, **kwargs: received.append(kwargs))
    return received
