from __future__ import annotations

import logging
from typing import Optional, Set

from ..events import ContentTriggered, DoorEntered, EventBus, RoomCleared, RoomEntered
from ..models import Floor

logger = logging.getLogger(__name__)


class FloorObserver:
    """Derives exploration events by diffing a floor's lifecycle flags.

    Generation never publishes anything; whoever mutates the floor calls
    ``poll`` afterwards and this observer publishes what changed since the
    previous poll: newly triggered content, newly cleared rooms, and a
    change of current room (as a door entry when the rooms are linked).
    """

    def __init__(self, floor: Floor, bus: EventBus, current_room_id: Optional[str] = None) -> None:
        self.floor = floor
        self.bus = bus
        self._current = current_room_id or floor.start_room_id
        self._triggered: Set[str] = self._triggered_ids()
        self._cleared: Set[str] = {r.id for r in floor.iter_rooms() if r.cleared}
        self._visited: Set[str] = {r.id for r in floor.iter_rooms() if r.visited}

    def _triggered_ids(self) -> Set[str]:
        return {c.id for r in self.floor.iter_rooms() for c in r.contents if c.triggered}

    def poll(self, current_room_id: Optional[str] = None) -> int:
        """Publish events for changes since the last poll. Returns how many were published."""
        published = 0

        if current_room_id is not None and current_room_id != self._current:
            previous = self.floor.get_room(self._current)
            room = self.floor.get_room(current_room_id)
            for direction, target in previous.links.items():
                if target == current_room_id:
                    self.bus.publish(DoorEntered(direction, previous.id, room.id))
                    published += 1
                    break
            first_visit = room.id not in self._visited
            self.bus.publish(RoomEntered(room, first_visit))
            published += 1
            self._current = current_room_id

        for room in self.floor.iter_rooms():
            for item in room.contents:
                if item.triggered and item.id not in self._triggered:
                    self._triggered.add(item.id)
                    self.bus.publish(ContentTriggered(item, room))
                    published += 1
            if room.cleared and room.id not in self._cleared:
                self._cleared.add(room.id)
                self.bus.publish(RoomCleared(room))
                published += 1
            if room.visited:
                self._visited.add(room.id)

        if published:
            logger.debug("Observer published %d event(s) on floor %d", published, self.floor.floor_number)
        return published


__all__ = ["FloorObserver"]
