"""Game state resource describing whether play is still possible."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the current game mode. GAME_OVER is terminal."""
    mode: GameMode = GameMode.PLAYING
