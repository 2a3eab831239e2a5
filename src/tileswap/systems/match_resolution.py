import logging
import random

from esper import World

from tileswap.events.bus import (EventBus, EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED,
                                 EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED,
                                 EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE)
from tileswap.systems.board_ops import (apply_gravity_moves, clear_tiles, compute_gravity_moves,
                                        find_match_groups, refill_empty_tiles)

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Clears matches, lets tiles fall, refills and rescans until the board is stable."""

    def __init__(self, world: World, event_bus: EventBus, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng

    @property
    def rng(self) -> random.Random:
        if self._rng is not None:
            return self._rng
        candidate = getattr(self.world, "random", None)
        if isinstance(candidate, random.Random):
            return candidate
        self._rng = random.Random()
        return self._rng

    def resolve(self) -> int:
        """Run cascade passes until no match remains. Returns total cells cleared."""
        cleared_total = 0
        depth = 0
        while True:
            groups = find_match_groups(self.world)
            if not groups:
                break
            depth += 1
            positions = sorted({pos for group in groups for pos in group})
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, positions=positions)
            self.event_bus.emit(EVENT_MATCH_FOUND, groups=groups, positions=positions, size=len(positions))
            typed = clear_tiles(self.world, positions)
            cleared_total += len(typed)
            self.event_bus.emit(EVENT_MATCH_CLEARED, positions=positions, types=sorted(typed))
            moves = compute_gravity_moves(self.world)
            apply_gravity_moves(self.world, moves)
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves)
            new_tiles = refill_empty_tiles(self.world, self.rng)
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles)
            logger.debug("cascade pass %d cleared %d cells, %d fell, %d refilled",
                         depth, len(typed), len(moves), len(new_tiles))
        if depth:
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth, cleared=cleared_total)
        return cleared_total
