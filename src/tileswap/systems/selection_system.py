from esper import World

from tileswap.components.selection import Selection
from tileswap.events.bus import (EventBus, EVENT_TILE_CLICK, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED,
                                 EVENT_TILE_SWAP_REQUEST, EVENT_MOUSE_PRESS)
from tileswap.systems.board_ops import in_bounds, is_disabled
from tileswap.utils.game_state import is_game_over

# Arcade uses 4 for the right mouse button (arcade.MOUSE_BUTTON_RIGHT).
MOUSE_BUTTON_RIGHT = 4


class SelectionSystem:
    """Click-to-select then click-to-swap sequencing for the input layer.

    Only grid-adjacent pairs are forwarded as swap requests.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.selection_entity = self.world.create_entity(Selection())
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    @property
    def selected(self):
        return self._selection().cell

    def _selection(self) -> Selection:
        return self.world.component_for_entity(self.selection_entity, Selection)

    def on_tile_click(self, sender, **kwargs):
        col = kwargs.get('col')
        row = kwargs.get('row')
        if col is None or row is None:
            return
        cell = (col, row)
        if is_game_over(self.world):
            return
        if not in_bounds(self.world, cell) or is_disabled(self.world, cell):
            return
        selection = self._selection()
        if selection.cell is None:
            selection.cell = cell
            self.event_bus.emit(EVENT_TILE_SELECTED, col=col, row=row)
            return
        if selection.cell == cell:
            return
        if self.is_adjacent(selection.cell, cell):
            src = selection.cell
            # Cleared before the request so the selection resets whether or not the swap matches.
            selection.cell = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='swap', prev_col=src[0], prev_row=src[1])
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=cell)
        else:
            selection.cell = cell
            self.event_bus.emit(EVENT_TILE_SELECTED, col=col, row=row)

    @staticmethod
    def is_adjacent(a, b) -> bool:
        ac, ar = a
        bc, br = b
        return (abs(ac - bc) == 1 and ar == br) or (abs(ar - br) == 1 and ac == bc)

    def on_mouse_press(self, sender, **kwargs):
        # Right-click always clears the current selection.
        if kwargs.get('button') != MOUSE_BUTTON_RIGHT:
            return
        selection = self._selection()
        prev = selection.cell
        if prev is not None:
            selection.cell = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='right_click', prev_col=prev[0], prev_row=prev[1])
