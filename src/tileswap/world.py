import random

from esper import World

from tileswap.components.game_state import GameMode, GameState
from tileswap.components.move_budget import MoveBudget
from tileswap.components.score import Score
from tileswap.components.tile_type_registry import TileTypeRegistry
from tileswap.components.tile_types import TileTypes
from tileswap.config import BoardConfig
from tileswap.events.bus import EventBus
from tileswap.systems.board import BoardSystem


def create_world(
    event_bus: EventBus,
    config: BoardConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    config = config or BoardConfig()
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "config", config)

    # Global game state resource: mode, score and remaining moves.
    world.create_entity(
        GameState(mode=GameMode.PLAYING),
        Score(value=0),
        MoveBudget(starting=config.starting_moves, remaining=config.starting_moves),
    )

    # Single registry entity with the tile palette.
    world.create_entity(
        TileTypeRegistry(),
        TileTypes(types=dict(config.tile_types)),
    )
    return world


def initialize_game(
    event_bus: EventBus,
    config: BoardConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> BoardSystem:
    """Build a world with a stable, randomly filled board and return its BoardSystem."""
    world = create_world(event_bus, config, rng=rng)
    return BoardSystem(world, event_bus)
