from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random to:
    - centralize RNG handling for every generation step
    - support optional deterministic seeding for tests and replays
    - provide the cumulative weighted draw used for room classification
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            # Non-deterministic seed using system random state
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def random(self) -> float:
        return self._rng.random()

    def uniform(self, a: float, b: float) -> float:
        """Return a float in [a, a + (b - a)) drawn from a single random() call."""
        return a + (b - a) * self._rng.random()

    def chance(self, probability: float) -> bool:
        return self._rng.random() < probability

    def choice(self, seq: Iterable[Any]) -> Any:
        seq_list = list(seq)
        if not seq_list:
            raise ValueError("RandomSource.choice() received an empty sequence")
        idx = self._rng.randrange(0, len(seq_list))
        return seq_list[idx]

    def sample_with_replacement(self, seq: Sequence[Any], k: int) -> List[Any]:
        return [self.choice(seq) for _ in range(k)]

    def weighted_choice(self, weights: Mapping[Any, float], default: Any = _MISSING) -> Any:
        """
        Select a key from a mapping of non-negative weights.

        One uniform draw in [0, total) is compared against the running total;
        the first key whose cumulative weight meets or exceeds the draw wins.
        Zero weights never match. When nothing matches (empty or all-zero
        mapping) ``default`` is returned if given, otherwise ValueError.
        """
        keys: List[Any] = []
        cumulative: List[float] = []
        total = 0.0
        for k, w in weights.items():
            if w < 0:
                raise ValueError(f"Weight for {k!r} must be non-negative, got {w}")
            if w == 0:
                continue
            total += w
            keys.append(k)
            cumulative.append(total)

        if total == 0:
            if default is not _MISSING:
                logger.debug("No positive weights; using default %r", default)
                return default
            raise ValueError("All weights are zero; cannot make a weighted choice")

        r = self._rng.random() * total
        for i, c in enumerate(cumulative):
            if r <= c:
                return keys[i]
        if default is not _MISSING:
            return default
        return keys[-1]


__all__ = ["RandomSource"]
