"""Entry point for the tile-swap match-three game.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import logging
import sys

from arcade import Window, run, set_background_color, color, key
from tileswap.config import BoardConfig, load_board_config
from tileswap.events.bus import EventBus, EVENT_MOUSE_PRESS
from tileswap.systems.board import BoardSystem
from tileswap.systems.input import InputSystem
from tileswap.systems.render import RenderSystem
from tileswap.systems.score_record_system import ScoreRecordSystem
from tileswap.systems.selection_system import SelectionSystem
from tileswap.world import create_world

logger = logging.getLogger(__name__)


class TileSwapWindow(Window):
    def __init__(self, config: BoardConfig):
        super().__init__(800, 700, "Tile Swap", resizable=True)
        self.config = config
        set_background_color(color.BLACK)
        self._start_game()

    def _start_game(self):
        # A fresh bus and world per game; nothing survives a restart except the score file.
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, self.config)
        self.score_record_system = ScoreRecordSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.selection_system = SelectionSystem(self.world, self.event_bus)
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.render_system = RenderSystem(self.world, self.event_bus, self, self.score_record_system)
        logger.info("new game: %dx%d board, %d moves", self.config.cols, self.config.rows,
                    self.config.starting_moves)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.R and self.board_system.is_game_over:
            self._start_game()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = load_board_config(argv[0]) if argv else BoardConfig()
    TileSwapWindow(config)
    run()

if __name__ == "__main__":
    main()
