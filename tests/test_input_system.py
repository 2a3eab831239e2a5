from tileswap.events.bus import EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from tileswap.systems.input import InputSystem
from tileswap.ui.layout import cell_at_point, cell_center, compute_board_geometry
from tests.helpers import DummyWindow, build_board, record


def test_geometry_centres_board():
    tile_size, start_x, start_y = compute_board_geometry(800, 600, 8, 8)
    assert tile_size >= 20
    assert start_x + 8 * tile_size / 2 == 400
    assert start_y == 20


def test_cell_round_trip_through_centre():
    for col, row in [(0, 0), (7, 0), (3, 5), (7, 7)]:
        x, y = cell_center(col, row, 800, 600, 8, 8)
        assert cell_at_point(x, y, 800, 600, 8, 8) == (col, row)


def test_points_outside_board_map_to_none():
    tile_size, start_x, start_y = compute_board_geometry(800, 600, 8, 8)
    assert cell_at_point(start_x - 1, start_y + 5, 800, 600, 8, 8) is None
    assert cell_at_point(start_x + 5, start_y - 1, 800, 600, 8, 8) is None
    assert cell_at_point(start_x + 8 * tile_size + 1, start_y + 5, 800, 600, 8, 8) is None


def test_left_click_emits_tile_click():
    bus, world, _ = build_board(5, 4)
    window = DummyWindow()
    InputSystem(bus, window, world)
    clicks = record(bus, EVENT_TILE_CLICK)
    x, y = cell_center(3, 2, window.width, window.height, 5, 4)
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1)
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=4)
    bus.emit(EVENT_MOUSE_PRESS, x=1, y=1, button=1)
    assert clicks == [{'col': 3, 'row': 2}]
