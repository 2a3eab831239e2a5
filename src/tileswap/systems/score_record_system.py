from __future__ import annotations

import json
import logging
from pathlib import Path

from esper import World

from tileswap.constants import DEFAULT_SCORE_FILE
from tileswap.events.bus import EVENT_GAME_OVER, EventBus

logger = logging.getLogger(__name__)


class ScoreRecordSystem:
    """Persists the final score of a finished game as a single integer."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        save_path: Path | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

    @staticmethod
    def _default_save_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / DEFAULT_SCORE_FILE

    @property
    def save_path(self) -> Path:
        return self._save_path

    def load_score(self) -> int:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return 0
        except json.JSONDecodeError:
            logger.warning("score file %s is corrupt, treating as 0", self._save_path)
            return 0
        try:
            return int(payload.get("score", 0))
        except (AttributeError, TypeError, ValueError):
            return 0

    def save_score(self, score: int) -> None:
        self._save_path.parent.mkdir(parents=True, exist_ok=True)
        with self._save_path.open("w", encoding="utf-8") as handle:
            json.dump({"score": int(score)}, handle, indent=2)
        logger.info("recorded final score %d to %s", score, self._save_path)

    # Event handlers -----------------------------------------------------

    def _on_game_over(self, sender, **payload) -> None:
        self.save_score(payload.get("score", 0))
