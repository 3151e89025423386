from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, List, Type

from .models import ContentItem, Direction, Floor, Room

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExplorationEvent:
    """Base of everything published while a floor is being explored."""

    name: ClassVar[str] = "exploration"


@dataclass(frozen=True)
class ContentTriggered(ExplorationEvent):
    name: ClassVar[str] = "content.triggered"
    content: ContentItem
    room: Room


@dataclass(frozen=True)
class DoorEntered(ExplorationEvent):
    name: ClassVar[str] = "door.entered"
    direction: Direction
    from_room_id: str
    target_room_id: str


@dataclass(frozen=True)
class RoomEntered(ExplorationEvent):
    name: ClassVar[str] = "room.entered"
    room: Room
    first_visit: bool


@dataclass(frozen=True)
class RoomCleared(ExplorationEvent):
    name: ClassVar[str] = "room.cleared"
    room: Room


@dataclass(frozen=True)
class FloorEntered(ExplorationEvent):
    name: ClassVar[str] = "floor.entered"
    floor: Floor


@dataclass(frozen=True)
class DungeonCompleted(ExplorationEvent):
    name: ClassVar[str] = "dungeon.completed"
    theme_id: str
    floor_number: int


Handler = Callable[[ExplorationEvent], None]


class EventBus:
    """Synchronous dispatch of exploration events by event class.

    Handlers subscribed to ``ExplorationEvent`` itself receive every event.
    Delivery happens inside ``publish`` in subscription order. A failing
    handler is logged and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[ExplorationEvent], List[Handler]] = {}

    def subscribe(self, event_type: Type[ExplorationEvent], handler: Handler) -> None:
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: Type[ExplorationEvent], handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers_for(self, event: ExplorationEvent) -> List[Handler]:
        return self._handlers.get(type(event), []) + self._handlers.get(ExplorationEvent, [])

    def publish(self, event: ExplorationEvent) -> int:
        """Deliver ``event``. Returns the number of handlers that ran cleanly."""
        delivered = 0
        for handler in self.handlers_for(event):
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed on %s", handler, event.name)
                continue
            delivered += 1
        logger.debug("Published %s to %d handler(s)", event.name, delivered)
        return delivered


__all__ = [
    "ContentTriggered",
    "DoorEntered",
    "DungeonCompleted",
    "EventBus",
    "ExplorationEvent",
    "FloorEntered",
    "RoomCleared",
    "RoomEntered",
]
