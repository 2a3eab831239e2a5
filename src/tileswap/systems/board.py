import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple

from esper import World

from tileswap.components.game_state import GameMode
from tileswap.config import BoardConfig
from tileswap.errors import InvalidCell
from tileswap.events.bus import (EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID,
                                 EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_REJECTED,
                                 EVENT_SCORE_CHANGED, EVENT_MOVES_CHANGED, EVENT_GAME_OVER,
                                 EVENT_BOARD_READY)
from tileswap.systems.board_ops import (board_snapshot, create_board, fill_board, find_matched_cells,
                                        get_tile, is_disabled, swap_tile_types)
from tileswap.systems.match_resolution import MatchResolutionSystem
from tileswap.utils.game_state import get_game_state, get_move_budget, get_score

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class SwapOutcome(Enum):
    REJECTED = auto()
    NO_MATCH = auto()
    RESOLVED = auto()


@dataclass(slots=True, frozen=True)
class SwapResult:
    outcome: SwapOutcome
    cleared: int = 0
    score_delta: int = 0
    score: int = 0
    moves_left: int = 0
    game_over: bool = False


class BoardSystem:
    """Owns the board and applies player swaps.

    ``swap_tiles`` is the only path that mutates tiles, score, moves or game mode
    once the board has been built.
    """

    def __init__(self, world: World, event_bus: EventBus, config: BoardConfig | None = None,
                 *, resolver: MatchResolutionSystem | None = None):
        self.world = world
        self.event_bus = event_bus
        self.config = config or getattr(world, "config", None) or BoardConfig()
        self.resolver = resolver or MatchResolutionSystem(world, event_bus)
        self.board_entity = create_board(world, self.config.cols, self.config.rows, self.config.disabled_cells)
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self._init_board()

    def _init_board(self):
        fill_board(self.world, self.resolver.rng)
        # Opening matches are resolved away without scoring.
        cleared = self.resolver.resolve()
        logger.debug("initial board settled after clearing %d cells", cleared)
        self.event_bus.emit(EVENT_BOARD_READY, cols=self.config.cols, rows=self.config.rows)

    # Read-only accessors -------------------------------------------------

    @property
    def score(self) -> int:
        return get_score(self.world).value

    @property
    def moves_left(self) -> int:
        return get_move_budget(self.world).remaining

    @property
    def mode(self) -> GameMode:
        return get_game_state(self.world).mode

    @property
    def is_game_over(self) -> bool:
        return self.mode == GameMode.GAME_OVER

    def tile_at(self, cell: Position) -> Optional[str]:
        return get_tile(self.world, cell)

    def snapshot(self) -> Dict[Position, Optional[str]]:
        return board_snapshot(self.world)

    @staticmethod
    def is_adjacent(a: Position, b: Position) -> bool:
        ac, ar = a
        bc, br = b
        return abs(ac - bc) + abs(ar - br) == 1

    # Swapping ------------------------------------------------------------

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        self.swap_tiles(tuple(src), tuple(dst))

    def _validate(self, a: Position, b: Position) -> None:
        # Bounds are checked first; is_disabled raises OutOfBounds.
        a_disabled = is_disabled(self.world, a)
        b_disabled = is_disabled(self.world, b)
        if a == b:
            raise InvalidCell(f"Cannot swap cell {a} with itself")
        if a_disabled or b_disabled:
            raise InvalidCell(f"Cannot swap {a} and {b}: disabled cell")
        if self.config.enforce_adjacency and not self.is_adjacent(a, b):
            raise InvalidCell(f"Cells {a} and {b} are not adjacent")

    def swap_tiles(self, a: Position, b: Position) -> SwapResult:
        self._validate(a, b)
        budget = get_move_budget(self.world)
        score = get_score(self.world)
        state = get_game_state(self.world)
        if state.mode == GameMode.GAME_OVER:
            self.event_bus.emit(EVENT_TILE_SWAP_REJECTED, src=a, dst=b, reason="game_over")
            return SwapResult(SwapOutcome.REJECTED, score=score.value, moves_left=budget.remaining, game_over=True)

        swap_tile_types(self.world, a, b)
        if not find_matched_cells(self.world):
            swap_tile_types(self.world, a, b)
            logger.debug("swap %s <-> %s made no match, rolled back", a, b)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=a, dst=b)
            return SwapResult(SwapOutcome.NO_MATCH, score=score.value, moves_left=budget.remaining)

        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=a, dst=b)
        budget.remaining -= 1
        cleared = self.resolver.resolve()
        score.value += cleared
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=score.value, delta=cleared)
        if budget.remaining <= 0:
            budget.remaining = 0
            state.mode = GameMode.GAME_OVER
        self.event_bus.emit(EVENT_MOVES_CHANGED, remaining=budget.remaining)
        logger.debug("swap %s <-> %s cleared %d, score %d, moves left %d",
                     a, b, cleared, score.value, budget.remaining)
        if state.mode == GameMode.GAME_OVER:
            logger.info("game over with score %d", score.value)
            self.event_bus.emit(EVENT_GAME_OVER, score=score.value)
        return SwapResult(
            SwapOutcome.RESOLVED,
            cleared=cleared,
            score_delta=cleared,
            score=score.value,
            moves_left=budget.remaining,
            game_over=state.mode == GameMode.GAME_OVER,
        )
