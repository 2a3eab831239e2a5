from esper import World

from tileswap.constants import DISABLED_CELL_COLOR, SELECTED_OUTLINE_COLOR
from tileswap.events.bus import (EventBus, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED,
                                 EVENT_GAME_OVER)
from tileswap.systems.board_ops import board_dimensions, board_snapshot, get_board, get_tile_registry
from tileswap.ui.layout import compute_board_geometry
from tileswap.utils.game_state import get_move_budget, get_score, is_game_over

PADDING = 4


class RenderSystem:
    """Draws the board, score/moves bar and game-over panel from board state."""

    def __init__(self, world: World, event_bus: EventBus, window, score_record=None):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.score_record = score_record
        self.selected = None
        self.recorded_score: int | None = None
        self.event_bus.subscribe(EVENT_TILE_SELECTED, self.on_tile_selected)
        self.event_bus.subscribe(EVENT_TILE_DESELECTED, self.on_tile_deselected)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)

    def on_tile_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('col'), kwargs.get('row'))

    def on_tile_deselected(self, sender, **kwargs):
        self.selected = None

    def on_game_over(self, sender, **kwargs):
        self.selected = None
        # Read back what the score record stored, like a game-over screen would.
        if self.score_record is not None:
            self.recorded_score = self.score_record.load_score()
        else:
            self.recorded_score = kwargs.get('score')

    def tile_rects(self):
        """Return ``[(cell, (left, right, bottom, top), colour), ...]`` for every cell."""
        dims = board_dimensions(self.world)
        if not dims:
            return []
        cols, rows = dims
        tile_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height, cols, rows)
        registry = get_tile_registry(self.world)
        board = get_board(self.world)
        rects = []
        for (col, row), type_name in board_snapshot(self.world).items():
            left = start_x + col * tile_size + PADDING / 2
            bottom = start_y + row * tile_size + PADDING / 2
            rect = (left, left + tile_size - PADDING, bottom, bottom + tile_size - PADDING)
            if (col, row) in board.disabled:
                colour = DISABLED_CELL_COLOR
            else:
                colour = registry.background_for(type_name)
            rects.append(((col, row), rect, colour))
        return rects

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        for cell, (left, right, bottom, top), colour in self.tile_rects():
            arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, colour)
            if cell == self.selected:
                arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, SELECTED_OUTLINE_COLOR, 3)
        score = get_score(self.world).value
        moves = get_move_budget(self.world).remaining
        hud_y = self.window.height - 32
        arcade.draw_text(f"Score: {score}", 20, hud_y, arcade.color.WHITE, 18)
        arcade.draw_text(f"Moves: {moves}", self.window.width - 160, hud_y, arcade.color.WHITE, 18)
        if is_game_over(self.world):
            self._render_game_over(arcade)

    def _render_game_over(self, arcade):
        width, height = 360, 160
        left = (self.window.width - width) / 2
        bottom = (self.window.height - height) / 2
        arcade.draw_lrbt_rectangle_filled(left, left + width, bottom, bottom + height, (20, 20, 30, 230))
        arcade.draw_lrbt_rectangle_outline(left, left + width, bottom, bottom + height, arcade.color.WHITE, 2)
        arcade.draw_text("GAME OVER", left + 24, bottom + height - 56, arcade.color.WHITE, 28)
        recorded = self.recorded_score if self.recorded_score is not None else get_score(self.world).value
        arcade.draw_text(f"Score: {recorded}", left + 24, bottom + 60, arcade.color.WHITE, 18)
        arcade.draw_text("Press R to restart", left + 24, bottom + 24, arcade.color.LIGHT_GRAY, 12)
