from __future__ import annotations

import time
from typing import Callable, Optional, Union

from ..models import ContentItem
from ..rng import RandomSource
from .base import Puzzle, PuzzleReward
from .riddle import RIDDLES, Riddle, RiddlePuzzle, RiddleState
from .sequence import SEQUENCES, Clock, Sequence, SequencePuzzle, SequenceState

# Kinds answered by picking an option; every other kind is a sequence lock.
_RIDDLE_KINDS = frozenset({"riddle", "memory"})


def open_puzzle(
    item: ContentItem,
    rng: RandomSource,
    clock: Clock = time.monotonic,
    on_evaluated: Optional[Callable[[Puzzle], None]] = None,
) -> Union[RiddlePuzzle, SequencePuzzle]:
    """Start the minigame for an unsolved puzzle item.

    ``riddle`` and ``memory`` puzzles open a riddle; ``sequence``, ``switch``
    and unknown kinds open a sequence lock. ``on_evaluated`` is called after
    every correct or incorrect attempt.
    """
    kind = getattr(item.payload, "puzzle_kind", None) or "riddle"
    if kind in _RIDDLE_KINDS:
        return RiddlePuzzle(item, rng.choice(RIDDLES), on_evaluated=on_evaluated)
    return SequencePuzzle(item, rng.choice(SEQUENCES), clock=clock, on_evaluated=on_evaluated)


__all__ = [
    "Puzzle",
    "PuzzleReward",
    "RIDDLES",
    "Riddle",
    "RiddlePuzzle",
    "RiddleState",
    "SEQUENCES",
    "Sequence",
    "SequencePuzzle",
    "SequenceState",
    "open_puzzle",
]
