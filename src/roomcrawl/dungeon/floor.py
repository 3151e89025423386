from __future__ import annotations

import logging
from typing import Optional

from ..config import DungeonConfig, ThemeRegistry, default_registry
from ..errors import DungeonCompleteError, InvalidFloorError
from ..models import Floor, Room, RoomType
from ..rng import RandomSource
from .classify import assign_room_types
from .graph import build_room_graph, grid_extent
from .ids import IdFactory
from .populate import ContentPopulator

logger = logging.getLogger(__name__)


def generate_floor(
    theme_id: str,
    floor_number: int,
    rng: Optional[RandomSource] = None,
    registry: Optional[ThemeRegistry] = None,
) -> Floor:
    """Generate one complete dungeon floor.

    Unknown theme ids use the registry's default theme. Without an explicit
    ``rng`` the output is not reproducible. The start room comes back
    visited and discovered; every other lifecycle flag is left for the
    exploration layer.
    """
    if floor_number < 1:
        raise InvalidFloorError(f"Floor numbers start at 1, got {floor_number}")

    registry = registry or default_registry()
    rng = rng or RandomSource()
    config = registry.get(theme_id)
    ids = IdFactory()

    room_count = config.room_count(floor_number)
    is_final = config.is_final_floor(floor_number)
    logger.info(
        "Generating floor %d of %s (%d rooms, final=%s)", floor_number, config.name, room_count, is_final
    )

    rooms = build_room_graph(room_count, rng, ids)
    assign_room_types(rooms, config, is_final, rng)

    populator = ContentPopulator(config, floor_number, rng, ids)
    for room in rooms.values():
        populator.populate(room)

    start = next(r for r in rooms.values() if r.type is RoomType.START)
    exit_room: Optional[Room] = next(
        (r for r in rooms.values() if r.type in (RoomType.EXIT, RoomType.BOSS)), None
    )
    if exit_room is None:
        logger.warning("No exit or boss room on floor %d of %s; reporting start as exit", floor_number, config.id)

    start.visited = True
    start.discovered = True
    width, height = grid_extent(rooms)

    floor = Floor(
        floor_number=floor_number,
        theme_id=config.id,
        rooms=rooms,
        start_room_id=start.id,
        exit_room_id=exit_room.id if exit_room is not None else start.id,
        boss_room_id=exit_room.id if is_final and exit_room is not None else None,
        width=width,
        height=height,
    )
    logger.info("Generated floor with %d rooms (%dx%d)", len(rooms), width, height)
    return floor


class DungeonRun:
    """Progression through the floors of one dungeon theme.

    Floors are regenerated from scratch on every advance; nothing on the old
    floor survives. The theme and random source are carried forward.
    """

    def __init__(
        self,
        theme_id: str,
        rng: Optional[RandomSource] = None,
        registry: Optional[ThemeRegistry] = None,
        start_floor: int = 1,
    ) -> None:
        self.registry = registry or default_registry()
        self.config: DungeonConfig = self.registry.get(theme_id)
        self.rng = rng or RandomSource()
        self.completed = False
        self.floor: Floor = generate_floor(self.config.id, start_floor, self.rng, self.registry)

    @property
    def theme_id(self) -> str:
        return self.config.id

    @property
    def floor_number(self) -> int:
        return self.floor.floor_number

    @property
    def is_final_floor(self) -> bool:
        return self.config.is_final_floor(self.floor_number)

    def advance(self) -> Optional[Floor]:
        """Leave the current floor.

        Returns the freshly generated next floor, or None when the final
        floor was just left and the run is complete.
        """
        if self.completed:
            raise DungeonCompleteError(f"Dungeon '{self.theme_id}' is already complete")

        if self.floor_number >= self.config.total_floors:
            self.completed = True
            logger.info("Dungeon %s complete after floor %d", self.theme_id, self.floor_number)
            return None

        next_number = self.floor_number + 1
        self.floor = generate_floor(self.config.id, next_number, self.rng, self.registry)
        logger.info("Advanced %s to floor %d", self.theme_id, next_number)
        return self.floor


__all__ = ["DungeonRun", "generate_floor"]
