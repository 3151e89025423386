from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..errors import ContentAlreadyTriggeredError
from ..models import ContentItem, ContentType, PuzzlePayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PuzzleReward:
    gold: int
    xp: int


class Puzzle:
    """Shared bookkeeping for a puzzle bound to one content item.

    Solving marks the item triggered and its payload solved; the content
    list of the room is never touched. Failing grants nothing and leaves
    the item open so the exploration layer can offer the puzzle again.
    Either outcome is reported to ``on_evaluated``.
    """

    def __init__(self, item: ContentItem, on_evaluated: Optional[Callable[["Puzzle"], None]] = None) -> None:
        if item.content_type is not ContentType.PUZZLE:
            raise TypeError(f"Content {item.id} is a {item.content_type.value}, not a puzzle")
        if item.triggered:
            raise ContentAlreadyTriggeredError(f"Puzzle {item.id} is already solved")
        self.item = item
        self.reward: Optional[PuzzleReward] = None
        self._on_evaluated = on_evaluated

    @property
    def payload(self) -> PuzzlePayload:
        return self.item.payload

    @property
    def solved(self) -> bool:
        return self.reward is not None

    def _solve(self) -> PuzzleReward:
        self.item.triggered = True
        self.payload.solved = True
        self.reward = PuzzleReward(gold=self.payload.gold_reward, xp=self.payload.xp_reward)
        logger.info(
            "Puzzle %s solved: +%d gold, +%d xp", self.item.id, self.reward.gold, self.reward.xp
        )
        self._notify()
        return self.reward

    def _fail(self) -> None:
        logger.info("Puzzle %s failed", self.item.id)
        self._notify()

    def _notify(self) -> None:
        if self._on_evaluated is not None:
            self._on_evaluated(self)
