from __future__ import annotations

import logging
import time
from typing import Optional, Union

from ..dungeon.floor import DungeonRun
from ..errors import NoDoorError
from ..events import DungeonCompleted, EventBus, FloorEntered
from ..models import ContentItem, ContentType, Direction, Floor, Room
from ..puzzles import Clock, Puzzle, RiddlePuzzle, SequencePuzzle, open_puzzle
from . import triggers
from .observer import FloorObserver

logger = logging.getLogger(__name__)


class ExplorationSession:
    """Room-by-room walk through a DungeonRun.

    Keeps the current room, applies the visited/discovered bookkeeping when
    moving through doors, routes content interactions through the trigger
    rules, and regenerates the floor when an unlocked exit is used. When a
    bus is supplied, lifecycle changes are published through a FloorObserver.
    """

    def __init__(self, run: DungeonRun, bus: Optional[EventBus] = None, clock: Clock = time.monotonic) -> None:
        self.run = run
        self.bus = bus
        self.clock = clock
        self.current_room_id = run.floor.start_room_id
        self._observer: Optional[FloorObserver] = None
        self._attach_floor()

    @property
    def floor(self) -> Floor:
        return self.run.floor

    @property
    def current_room(self) -> Room:
        return self.floor.get_room(self.current_room_id)

    @property
    def completed(self) -> bool:
        return self.run.completed

    def _attach_floor(self) -> None:
        if self.bus is None:
            return
        self._observer = FloorObserver(self.floor, self.bus, self.current_room_id)
        self.bus.publish(FloorEntered(self.floor))

    def _poll(self) -> None:
        if self._observer is not None:
            self._observer.poll(self.current_room_id)

    def move(self, direction: Union[Direction, str]) -> Room:
        """Walk through the door on ``direction`` and return the room entered."""
        direction = Direction(direction)
        target = self.current_room.neighbor(direction)
        if target is None:
            raise NoDoorError(f"No door to the {direction.value} of {self.current_room_id}")

        room = self.floor.get_room(target)
        room.visited = True
        room.discovered = True
        self.current_room_id = room.id
        logger.debug("Entered %s (%s) heading %s", room.id, room.type.value, direction.value)
        self._poll()
        return room

    def discover(self, item: ContentItem) -> bool:
        found = triggers.discover_secret(item)
        self._poll()
        return found

    def trigger(self, item: ContentItem) -> Optional[Floor]:
        """Trigger ``item`` in the current room.

        Using an exit advances the run: the new floor is returned, or None
        once the final floor has been left. Other content returns None.
        """
        room = self._require_in_room(item)
        triggers.trigger(item, room)
        self._poll()

        if item.content_type is not ContentType.EXIT:
            return None
        return self._leave_floor()

    def open_puzzle(self, item: ContentItem) -> Union[RiddlePuzzle, SequencePuzzle]:
        """Open the engine for a puzzle in the current room.

        Every evaluated attempt is polled straight away, so a solved puzzle
        is published without waiting for the next move.
        """
        self._require_in_room(item)
        return open_puzzle(item, self.run.rng, clock=self.clock, on_evaluated=self._on_puzzle_evaluated)

    def _on_puzzle_evaluated(self, puzzle: Puzzle) -> None:
        logger.debug("Puzzle %s evaluated (solved=%s)", puzzle.item.id, puzzle.solved)
        self._poll()

    def _require_in_room(self, item: ContentItem) -> Room:
        room = self.current_room
        if not any(c is item for c in room.contents):
            raise ValueError(f"Content {item.id} is not in the current room {room.id}")
        return room

    def _leave_floor(self) -> Optional[Floor]:
        left = self.floor.floor_number
        next_floor = self.run.advance()
        if next_floor is None:
            logger.info("Run through %s finished on floor %d", self.run.theme_id, left)
            if self.bus is not None:
                self.bus.publish(DungeonCompleted(self.run.theme_id, left))
            return None

        self.current_room_id = next_floor.start_room_id
        self._attach_floor()
        return next_floor


__all__ = ["ExplorationSession"]
