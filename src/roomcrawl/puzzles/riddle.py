from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from ..errors import PuzzleStateError
from ..models import ContentItem
from .base import Puzzle, PuzzleReward

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Riddle:
    question: str
    options: Tuple[str, ...]
    answer: int


RIDDLES: Tuple[Riddle, ...] = (
    Riddle("I have keys but no locks. What am I?", ("Keyboard", "Piano", "Map"), 0),
    Riddle("What has hands but can't clap?", ("Gloves", "Clock", "Statue"), 1),
    Riddle("I get wetter as I dry. What am I?", ("Sponge", "Rain", "Towel"), 2),
    Riddle("What has a head and tail but no body?", ("Coin", "Snake", "Comet"), 0),
    Riddle("What can you catch but not throw?", ("Ball", "Cold", "Fish"), 1),
)


class RiddleState(str, Enum):
    PRESENTED = "presented"
    ANSWERED_CORRECT = "answered_correct"
    ANSWERED_INCORRECT = "answered_incorrect"
    ABANDONED = "abandoned"


class RiddlePuzzle(Puzzle):
    """Pick-one-option riddle. One answer per attempt."""

    def __init__(
        self,
        item: ContentItem,
        riddle: Riddle,
        on_evaluated: Optional[Callable[[Puzzle], None]] = None,
    ) -> None:
        super().__init__(item, on_evaluated)
        self.riddle = riddle
        self.state = RiddleState.PRESENTED

    @property
    def question(self) -> str:
        return self.riddle.question

    @property
    def options(self) -> Tuple[str, ...]:
        return self.riddle.options

    def answer(self, index: int) -> Optional[PuzzleReward]:
        """Submit an option index. Returns the reward when it is correct."""
        if self.state is not RiddleState.PRESENTED:
            raise PuzzleStateError(f"Riddle already {self.state.value}")
        if not 0 <= index < len(self.riddle.options):
            raise ValueError(f"Option {index} out of range for {len(self.riddle.options)} options")

        if index == self.riddle.answer:
            self.state = RiddleState.ANSWERED_CORRECT
            return self._solve()
        self.state = RiddleState.ANSWERED_INCORRECT
        self._fail()
        return None

    def abandon(self) -> None:
        if self.state is RiddleState.PRESENTED:
            self.state = RiddleState.ABANDONED
