from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from ..models import Direction, Room, RoomType
from ..rng import RandomSource
from .ids import IdFactory

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


def connect_rooms(a: Room, b: Room, direction: Direction) -> None:
    """Link ``a`` to ``b`` through ``direction`` and ``b`` back through the opposite side."""
    a.links[direction] = b.id
    b.links[direction.opposite] = a.id


def build_room_graph(room_count: int, rng: RandomSource, ids: Optional[IdFactory] = None) -> Dict[str, Room]:
    """Grow a connected room graph with a random walk over the grid.

    The walk starts at (0, 0) with the start room. Each step picks any
    direction except the exact reverse of the previous step. Stepping into an
    occupied cell links the two rooms and moves there; stepping into a free
    cell creates a new room. The returned dict keeps creation order, so the
    last entry is the last room created.
    """
    ids = ids or IdFactory()
    target = max(1, room_count)

    start = Room(id=ids.room_id(), type=RoomType.START, grid_x=0, grid_y=0)
    rooms: Dict[str, Room] = {start.id: start}
    grid: Dict[Point, Room] = {(0, 0): start}

    current = start
    last_direction: Optional[Direction] = None
    steps = 0

    while len(rooms) < target:
        options = [d for d in Direction if last_direction is None or d is not last_direction.opposite]
        direction: Direction = rng.choice(options)
        dx, dy = direction.offset
        cell = (current.grid_x + dx, current.grid_y + dy)

        existing = grid.get(cell)
        if existing is not None:
            connect_rooms(current, existing, direction)
            current = existing
        else:
            room = Room(id=ids.room_id(), type=RoomType.EMPTY, grid_x=cell[0], grid_y=cell[1])
            rooms[room.id] = room
            grid[cell] = room
            connect_rooms(current, room, direction)
            current = room

        last_direction = direction
        steps += 1

    logger.debug("Built room graph: rooms=%d walk_steps=%d", len(rooms), steps)
    return rooms


def grid_extent(rooms: Dict[str, Room]) -> Tuple[int, int]:
    """Width and height of the bounding box of all room cells, origin included."""
    min_x = max_x = min_y = max_y = 0
    for room in rooms.values():
        min_x = min(min_x, room.grid_x)
        max_x = max(max_x, room.grid_x)
        min_y = min(min_y, room.grid_y)
        max_y = max(max_y, room.grid_y)
    return (max_x - min_x + 1, max_y - min_y + 1)


__all__ = ["build_room_graph", "connect_rooms", "grid_extent"]
