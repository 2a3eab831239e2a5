from __future__ import annotations

from esper import World

from tileswap.components.game_state import GameMode, GameState
from tileswap.components.move_budget import MoveBudget
from tileswap.components.score import Score


def _singleton(world: World, component_type):
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} component not found")


def get_game_state(world: World) -> GameState:
    return _singleton(world, GameState)


def get_score(world: World) -> Score:
    return _singleton(world, Score)


def get_move_budget(world: World) -> MoveBudget:
    return _singleton(world, MoveBudget)


def is_game_over(world: World) -> bool:
    return get_game_state(world).mode == GameMode.GAME_OVER
