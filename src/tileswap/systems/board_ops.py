from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from esper import World

from tileswap.components.board import Board
from tileswap.components.board_position import BoardPosition
from tileswap.components.disabled_cell import DisabledCell
from tileswap.components.tile import TileType
from tileswap.components.tile_type_registry import TileTypeRegistry
from tileswap.components.tile_types import TileTypes
from tileswap.errors import InvalidCell, OutOfBounds

# (col, row); row 0 is the bottom of the board.
Position = Tuple[int, int]
TypeEntry = Tuple[int, int, str]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    type_name: str


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    """Return ``(cols, rows)`` or None when no board exists yet."""
    for _, board in world.get_component(Board):
        return board.cols, board.rows
    return None


def create_board(world: World, cols: int, rows: int, disabled: Iterable[Position] = ()) -> int:
    """Create the board entity and one entity per cell. Returns the board entity."""
    disabled_set = frozenset((int(c), int(r)) for c, r in disabled)
    board = Board(cols=cols, rows=rows, disabled=disabled_set)
    board_entity = world.create_entity(board)
    for row in range(rows):
        for col in range(cols):
            components = [BoardPosition(col=col, row=row), TileType()]
            if (col, row) in disabled_set:
                components.append(DisabledCell())
            board.cells[(col, row)] = world.create_entity(*components)
    return board_entity


def in_bounds(world: World, cell: Position) -> bool:
    board = get_board(world)
    col, row = cell
    return 0 <= col < board.cols and 0 <= row < board.rows


def _cell_entity(world: World, cell: Position) -> int:
    board = get_board(world)
    col, row = cell
    if not (0 <= col < board.cols and 0 <= row < board.rows):
        raise OutOfBounds(f"Cell {cell} is outside the {board.cols}x{board.rows} board")
    return board.cells[(col, row)]


def is_disabled(world: World, cell: Position) -> bool:
    return world.has_component(_cell_entity(world, cell), DisabledCell)


def get_tile(world: World, cell: Position) -> Optional[str]:
    """Return the tile type at ``cell`` (None for empty or disabled cells)."""
    entity = _cell_entity(world, cell)
    return world.component_for_entity(entity, TileType).type_name


def set_tile(world: World, cell: Position, type_name: Optional[str]) -> None:
    entity = _cell_entity(world, cell)
    if world.has_component(entity, DisabledCell):
        raise InvalidCell(f"Cell {cell} is disabled")
    world.component_for_entity(entity, TileType).type_name = type_name


def swap_tile_types(world: World, a: Position, b: Position) -> None:
    """Exchange the tile types held at two active cells."""
    tile_a = get_tile(world, a)
    tile_b = get_tile(world, b)
    set_tile(world, a, tile_b)
    set_tile(world, b, tile_a)


def active_cells(world: World) -> List[Position]:
    """Every non-disabled cell, ordered column by column from the bottom up."""
    board = get_board(world)
    return [
        (col, row)
        for col in range(board.cols)
        for row in range(board.rows)
        if (col, row) not in board.disabled
    ]


def tile_type_map(world: World) -> Dict[Position, str]:
    """Return mapping of occupied active positions to their type names."""
    mapping: Dict[Position, str] = {}
    for entity, (position, tile) in world.get_components(BoardPosition, TileType):
        if tile.type_name is None or world.has_component(entity, DisabledCell):
            continue
        mapping[(position.col, position.row)] = tile.type_name
    return mapping


def board_snapshot(world: World) -> Dict[Position, Optional[str]]:
    """Every cell, including empty and disabled ones, mapped to its tile type."""
    board = get_board(world)
    return {
        cell: world.component_for_entity(entity, TileType).type_name
        for cell, entity in sorted(board.cells.items())
    }


def fill_board(world: World, rng: random.Random) -> List[Position]:
    """Assign a random spawnable type to every active cell."""
    choices = get_tile_registry(world).spawnable_types()
    filled: List[Position] = []
    for cell in active_cells(world):
        set_tile(world, cell, rng.choice(choices))
        filled.append(cell)
    return filled


def _probe(types: Dict[Position, str], origin: Position, step: Position) -> List[Position]:
    """Collect the contiguous same-type cells after ``origin`` along ``step``."""
    tval = types[origin]
    col, row = origin[0] + step[0], origin[1] + step[1]
    run: List[Position] = []
    # Missing keys are empty or disabled cells; both end the run.
    while types.get((col, row)) == tval:
        run.append((col, row))
        col, row = col + step[0], row + step[1]
    return run


def find_matched_cells(world: World) -> Set[Position]:
    """Return every active cell that belongs to a horizontal or vertical run of 3+."""
    types = tile_type_map(world)
    matched: Set[Position] = set()
    for origin in types:
        for step in ((1, 0), (0, 1)):
            run = _probe(types, origin, step)
            if len(run) >= 2:
                matched.add(origin)
                matched.update(run)
    return matched


def find_match_groups(world: World) -> List[List[Position]]:
    """Matched cells merged into groups of orthogonally connected same-type cells."""
    matched = find_matched_cells(world)
    if not matched:
        return []
    types = tile_type_map(world)
    remaining = set(matched)
    groups: List[List[Position]] = []
    while remaining:
        start = remaining.pop()
        group = {start}
        frontier = [start]
        while frontier:
            col, row = frontier.pop()
            for neighbour in ((col + 1, row), (col - 1, row), (col, row + 1), (col, row - 1)):
                if neighbour in remaining and types[neighbour] == types[start]:
                    remaining.remove(neighbour)
                    group.add(neighbour)
                    frontier.append(neighbour)
        groups.append(sorted(group))
    return sorted(groups)


def clear_tiles(world: World, positions: Iterable[Position]) -> List[TypeEntry]:
    """Empty the given cells and return what was there."""
    typed: List[TypeEntry] = []
    for col, row in positions:
        type_name = get_tile(world, (col, row))
        if type_name is None:
            continue
        typed.append((col, row, type_name))
        set_tile(world, (col, row), None)
    return typed


def column_segments(world: World, col: int) -> List[List[int]]:
    """Split a column into runs of active rows separated by disabled cells."""
    board = get_board(world)
    segments: List[List[int]] = []
    current: List[int] = []
    for row in range(board.rows):
        if (col, row) in board.disabled:
            if current:
                segments.append(current)
            current = []
            continue
        current.append(row)
    if current:
        segments.append(current)
    return segments


def compute_gravity_moves(world: World) -> List[GravityMove]:
    """Plan how remaining tiles settle toward row 0 within each column segment."""
    board = get_board(world)
    types = tile_type_map(world)
    moves: List[GravityMove] = []
    for col in range(board.cols):
        for segment in column_segments(world, col):
            filled_rows = [row for row in segment if (col, row) in types]
            for target_row, original_row in zip(segment, filled_rows):
                if original_row == target_row:
                    continue
                moves.append(GravityMove(
                    source=(col, original_row),
                    target=(col, target_row),
                    type_name=types[(col, original_row)],
                ))
    return moves


def apply_gravity_moves(world: World, moves: List[GravityMove]) -> None:
    # Moves only ever go downward, so applying bottom-first never overwrites a pending source.
    for move in sorted(moves, key=lambda m: (m.target[0], m.target[1])):
        set_tile(world, move.target, move.type_name)
        set_tile(world, move.source, None)


def refill_empty_tiles(world: World, rng: random.Random) -> List[Position]:
    """Give every empty active cell a fresh random type. Disabled cells are skipped."""
    choices = get_tile_registry(world).spawnable_types()
    spawned: List[Position] = []
    for cell in active_cells(world):
        if get_tile(world, cell) is not None:
            continue
        set_tile(world, cell, rng.choice(choices))
        spawned.append(cell)
    return spawned
