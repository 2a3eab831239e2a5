import random

import pytest

from tileswap.components.game_state import GameMode
from tileswap.config import BoardConfig
from tileswap.errors import InvalidCell, OutOfBounds
from tileswap.events.bus import (EventBus, EVENT_GAME_OVER, EVENT_MATCH_CLEARED, EVENT_MOVES_CHANGED,
                                 EVENT_SCORE_CHANGED, EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_REJECTED,
                                 EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID)
from tileswap.systems.board import SwapOutcome
from tileswap.systems.board_ops import find_matched_cells
from tileswap.world import initialize_game
from tests.helpers import build_board, record

SCENARIO = {(0, 0): 'A', (1, 0): 'A', (2, 0): 'B', (3, 0): 'C', (0, 1): 'A'}


def test_matching_swap_resolves_and_scores():
    bus, world, board = build_board(4, 4, SCENARIO, moves=5)
    cleared_events = record(bus, EVENT_MATCH_CLEARED)
    valid = record(bus, EVENT_TILE_SWAP_VALID)
    result = board.swap_tiles((2, 0), (0, 1))
    assert result.outcome is SwapOutcome.RESOLVED
    assert valid == [{'src': (2, 0), 'dst': (0, 1)}]
    assert cleared_events[0]['positions'] == [(0, 0), (1, 0), (2, 0)]
    total = sum(len(event['positions']) for event in cleared_events)
    assert result.cleared == total
    assert result.score_delta == total
    assert result.score == board.score == total
    assert result.moves_left == board.moves_left == 4
    assert not result.game_over
    assert find_matched_cells(world) == set()


def test_non_matching_swap_rolls_back():
    bus, world, board = build_board(4, 4, SCENARIO, moves=5)
    before = board.snapshot()
    invalid = record(bus, EVENT_TILE_SWAP_INVALID)
    moves = record(bus, EVENT_MOVES_CHANGED)
    result = board.swap_tiles((3, 0), (3, 1))
    assert result.outcome is SwapOutcome.NO_MATCH
    assert board.snapshot() == before
    assert board.moves_left == 5
    assert board.score == 0
    assert invalid == [{'src': (3, 0), 'dst': (3, 1)}]
    assert moves == []


def test_score_accumulates_across_swaps():
    tiles = dict(SCENARIO)
    # Columns 3-5 are untouched by the first cascade.
    tiles.update({(3, 5): 'D', (4, 5): 'D', (5, 4): 'D'})
    bus, world, board = build_board(6, 6, tiles, moves=5)
    scores = record(bus, EVENT_SCORE_CHANGED)
    first = board.swap_tiles((2, 0), (0, 1))
    second = board.swap_tiles((5, 5), (5, 4))
    assert second.outcome is SwapOutcome.RESOLVED
    assert board.score == first.score_delta + second.score_delta
    assert [event['score'] for event in scores] == [first.score, second.score]
    assert board.moves_left == 3


@pytest.mark.parametrize("a,b,error", [
    ((1, 1), (1, 1), InvalidCell),
    ((0, 0), (1, 0), InvalidCell),
    ((1, 0), (0, 0), InvalidCell),
    ((4, 0), (3, 0), OutOfBounds),
    ((3, 0), (3, -1), OutOfBounds),
])
def test_invalid_swap_requests_raise_without_mutation(a, b, error):
    _, _, board = build_board(4, 4, disabled=[(0, 0)], moves=3)
    before = board.snapshot()
    with pytest.raises(error):
        board.swap_tiles(a, b)
    assert board.snapshot() == before
    assert board.moves_left == 3
    assert board.mode is GameMode.PLAYING


def test_adjacency_not_enforced_by_default():
    _, _, board = build_board(4, 4, SCENARIO)
    assert not board.is_adjacent((2, 0), (0, 1))
    assert board.swap_tiles((2, 0), (0, 1)).outcome is SwapOutcome.RESOLVED


def test_adjacency_enforced_when_configured():
    _, _, board = build_board(4, 4, SCENARIO, enforce_adjacency=True)
    before = board.snapshot()
    with pytest.raises(InvalidCell):
        board.swap_tiles((2, 0), (0, 1))
    assert board.snapshot() == before


def test_last_move_ends_game():
    bus, world, board = build_board(4, 4, SCENARIO, moves=1)
    game_over = record(bus, EVENT_GAME_OVER)
    result = board.swap_tiles((2, 0), (0, 1))
    assert result.outcome is SwapOutcome.RESOLVED
    assert result.moves_left == 0
    assert result.game_over
    assert board.is_game_over
    assert game_over == [{'score': result.score}]


def test_swaps_rejected_after_game_over():
    tiles = dict(SCENARIO)
    tiles.update({(0, 3): 'D', (1, 3): 'D', (3, 3): 'D'})
    bus, world, board = build_board(4, 4, tiles, moves=1)
    game_over = record(bus, EVENT_GAME_OVER)
    rejected = record(bus, EVENT_TILE_SWAP_REJECTED)
    board.swap_tiles((2, 0), (0, 1))
    before = board.snapshot()
    score = board.score
    result = board.swap_tiles((2, 3), (3, 3))
    assert result.outcome is SwapOutcome.REJECTED
    assert result.game_over
    assert board.snapshot() == before
    assert board.score == score
    assert board.moves_left == 0
    assert len(game_over) == 1
    assert rejected[0]['reason'] == 'game_over'


def test_swap_request_event_drives_board():
    bus, world, board = build_board(4, 4, SCENARIO, moves=5)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(2, 0), dst=(0, 1))
    assert board.moves_left == 4
    assert board.score >= 3


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_initial_board_is_stable(seed):
    config = BoardConfig(cols=8, rows=8, disabled_cells=((0, 0), (7, 7), (3, 4)), starting_moves=12)
    board = initialize_game(EventBus(), config, rng=random.Random(seed))
    assert find_matched_cells(board.world) == set()
    assert board.score == 0
    assert board.moves_left == 12
    assert board.mode is GameMode.PLAYING
    assert all(
        (cell in config.disabled_cells) == (type_name is None)
        for cell, type_name in board.snapshot().items()
    )
