from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..errors import PuzzleStateError
from ..models import ContentItem
from .base import Puzzle, PuzzleReward

logger = logging.getLogger(__name__)

UP, RIGHT, DOWN = 0, 1, 2
SYMBOL_NAMES = {UP: "up", RIGHT: "right", DOWN: "down"}
REVEAL_SECONDS = 3.0

Clock = Callable[[], float]


@dataclass(frozen=True)
class Sequence:
    pattern: Tuple[int, ...]

    @property
    def display(self) -> str:
        return " ".join(SYMBOL_NAMES[s] for s in self.pattern)


SEQUENCES: Tuple[Sequence, ...] = (
    Sequence((UP, RIGHT, DOWN)),
    Sequence((RIGHT, UP, RIGHT, DOWN)),
    Sequence((DOWN, DOWN, UP, RIGHT)),
    Sequence((UP, DOWN, RIGHT, UP)),
)


class SequenceState(str, Enum):
    SHOWING_PATTERN = "showing_pattern"
    COLLECTING_INPUT = "collecting_input"
    EVALUATED_CORRECT = "evaluated_correct"
    EVALUATED_INCORRECT = "evaluated_incorrect"
    ABANDONED = "abandoned"


class SequencePuzzle(Puzzle):
    """Memorise-and-repeat lock.

    The pattern is visible for ``reveal_seconds`` after opening, measured on
    ``clock``. Input is accepted only after that; once as many inputs as the
    pattern length are in, they are compared position by position.
    """

    def __init__(
        self,
        item: ContentItem,
        sequence: Sequence,
        clock: Clock = time.monotonic,
        reveal_seconds: float = REVEAL_SECONDS,
        on_evaluated: Optional[Callable[[Puzzle], None]] = None,
    ) -> None:
        super().__init__(item, on_evaluated)
        self.sequence = sequence
        self.reveal_seconds = reveal_seconds
        self._clock = clock
        self._opened_at = clock()
        self._state = SequenceState.SHOWING_PATTERN
        self.inputs: List[int] = []

    @property
    def state(self) -> SequenceState:
        if self._state is SequenceState.SHOWING_PATTERN and self._clock() - self._opened_at >= self.reveal_seconds:
            self._state = SequenceState.COLLECTING_INPUT
            logger.debug("Sequence %s hidden; collecting input", self.item.id)
        return self._state

    @property
    def pattern_visible(self) -> bool:
        return self.state is SequenceState.SHOWING_PATTERN

    @property
    def pattern(self) -> Optional[Tuple[int, ...]]:
        """The pattern while it is on display, otherwise None."""
        return self.sequence.pattern if self.pattern_visible else None

    @property
    def remaining_inputs(self) -> int:
        return len(self.sequence.pattern) - len(self.inputs)

    def press(self, symbol: int) -> Optional[PuzzleReward]:
        """Record one input. Returns the reward if this input completes a correct sequence."""
        state = self.state
        if state is not SequenceState.COLLECTING_INPUT:
            raise PuzzleStateError(f"Sequence is not accepting input ({state.value})")
        if symbol not in SYMBOL_NAMES:
            raise ValueError(f"Unknown sequence symbol: {symbol}")

        self.inputs.append(symbol)
        if len(self.inputs) < len(self.sequence.pattern):
            return None

        if tuple(self.inputs) == self.sequence.pattern:
            self._state = SequenceState.EVALUATED_CORRECT
            return self._solve()
        self._state = SequenceState.EVALUATED_INCORRECT
        self._fail()
        return None

    def abandon(self) -> None:
        if self.state in (SequenceState.SHOWING_PATTERN, SequenceState.COLLECTING_INPUT):
            self._state = SequenceState.ABANDONED
