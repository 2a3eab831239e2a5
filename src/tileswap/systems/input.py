from esper import World

from tileswap.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from tileswap.systems.board_ops import board_dimensions
from tileswap.ui.layout import cell_at_point

# Arcade uses 1 for the left mouse button (arcade.MOUSE_BUTTON_LEFT).
MOUSE_BUTTON_LEFT = 1


class InputSystem:
    """Translates raw window clicks into board cell clicks."""

    def __init__(self, event_bus: EventBus, window, world: World):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        # Other buttons are handled by listeners of EVENT_MOUSE_PRESS directly.
        if kwargs.get('button') != MOUSE_BUTTON_LEFT:
            return
        dims = board_dimensions(self.world)
        if not dims:
            return
        cols, rows = dims
        cell = cell_at_point(x, y, self.window.width, self.window.height, cols, rows)
        if cell is None:
            return
        self.event_bus.emit(EVENT_TILE_CLICK, col=cell[0], row=cell[1])
