from __future__ import annotations

import logging
from collections import Counter
from typing import Dict

from ..config import DungeonConfig
from ..models import Room, RoomType
from ..rng import RandomSource

logger = logging.getLogger(__name__)


# Placed by the generator, never drawn.
STRUCTURAL_TYPES = frozenset({RoomType.START, RoomType.BOSS, RoomType.EXIT})


def draw_room_type(config: DungeonConfig, rng: RandomSource) -> RoomType:
    weights = {t: w for t, w in config.room_weights.items() if t not in STRUCTURAL_TYPES}
    return rng.weighted_choice(weights, default=RoomType.EMPTY)


def assign_room_types(
    rooms: Dict[str, Room],
    config: DungeonConfig,
    is_final_floor: bool,
    rng: RandomSource,
) -> None:
    """Label every room except the start room.

    The last room created by the walk becomes the boss room on the final
    floor and the exit room otherwise. This is by creation order, not by
    distance from the start. Rooms in between get a weighted draw from the
    theme's room weights.
    """
    room_list = list(rooms.values())
    if len(room_list) < 2:
        logger.warning("Floor has a single room; no exit or boss room assigned")
        return

    last = room_list[-1]
    last.type = RoomType.BOSS if is_final_floor else RoomType.EXIT

    for room in room_list[1:-1]:
        room.type = draw_room_type(config, rng)

    logger.debug(
        "Assigned room types for theme=%s: %s",
        config.id,
        dict(Counter(r.type.value for r in room_list)),
    )


__all__ = ["STRUCTURAL_TYPES", "assign_room_types", "draw_room_type"]
