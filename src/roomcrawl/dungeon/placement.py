from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..models import Direction, Room
from ..rng import RandomSource

logger = logging.getLogger(__name__)

Position = Tuple[float, float]
Range = Tuple[float, float]

# Normalized size of the strip kept clear in front of each open door.
DOOR_ZONE_DEPTH = 0.15
DOOR_ZONE_SPAN = 0.3
PLACEMENT_ATTEMPTS = 10
CENTER: Position = (0.5, 0.5)


@dataclass(frozen=True)
class Zone:
    """Axis-aligned rectangle in normalized room coordinates."""

    x0: float
    y0: float
    x1: float
    y1: float

    def contains(self, x: float, y: float) -> bool:
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1


def door_zone(direction: Direction) -> Zone:
    half = DOOR_ZONE_SPAN / 2
    if direction is Direction.NORTH:
        return Zone(0.5 - half, 0.0, 0.5 + half, DOOR_ZONE_DEPTH)
    if direction is Direction.SOUTH:
        return Zone(0.5 - half, 1.0 - DOOR_ZONE_DEPTH, 0.5 + half, 1.0)
    if direction is Direction.WEST:
        return Zone(0.0, 0.5 - half, DOOR_ZONE_DEPTH, 0.5 + half)
    return Zone(1.0 - DOOR_ZONE_DEPTH, 0.5 - half, 1.0, 0.5 + half)


def door_zones(room: Room) -> List[Zone]:
    """Exclusion zones for every side of ``room`` that has a connection."""
    return [door_zone(d) for d in room.open_directions()]


def in_door_zone(position: Position, zones: Iterable[Zone]) -> bool:
    x, y = position
    return any(z.contains(x, y) for z in zones)


def sample_position(
    rng: RandomSource,
    x_range: Range,
    y_range: Range,
    zones: Sequence[Zone] = (),
    accept: Optional[Callable[[Position], bool]] = None,
    attempts: int = PLACEMENT_ATTEMPTS,
) -> Position:
    """Draw a uniform position inside the given ranges, avoiding door zones.

    Each attempt must clear every zone and satisfy ``accept`` when given.
    After ``attempts`` failures the room centre is returned.
    """
    for _ in range(attempts):
        pos = (rng.uniform(*x_range), rng.uniform(*y_range))
        if in_door_zone(pos, zones):
            continue
        if accept is not None and not accept(pos):
            continue
        return pos
    logger.debug("Placement retries exhausted in %s x %s; using room centre", x_range, y_range)
    return CENTER


def far_from(others: Sequence[Position], min_separation: float) -> Callable[[Position], bool]:
    """Predicate rejecting positions within ``min_separation`` of any other on both axes."""

    def _accept(pos: Position) -> bool:
        x, y = pos
        return not any(abs(ox - x) < min_separation and abs(oy - y) < min_separation for ox, oy in others)

    return _accept


__all__ = [
    "CENTER",
    "DOOR_ZONE_DEPTH",
    "DOOR_ZONE_SPAN",
    "PLACEMENT_ATTEMPTS",
    "Zone",
    "door_zone",
    "door_zones",
    "far_from",
    "in_door_zone",
    "sample_position",
]
