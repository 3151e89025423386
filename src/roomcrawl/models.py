from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, Iterator, List, Optional, Tuple, Union


class Direction(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def offset(self) -> Tuple[int, int]:
        """Grid step for this direction; north is negative y."""
        return _OFFSETS[self]


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_OFFSETS = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}


class RoomType(str, Enum):
    START = "start"
    EMPTY = "empty"
    ENEMY = "enemy"
    TREASURE = "treasure"
    TRAP = "trap"
    REST = "rest"
    MERCHANT = "merchant"
    SECRET = "secret"
    PUZZLE = "puzzle"
    BOSS = "boss"
    EXIT = "exit"


class ContentType(str, Enum):
    ENEMY = "enemy"
    CHEST = "chest"
    TRAP = "trap"
    NPC = "npc"
    INTERACTABLE = "interactable"
    EXIT = "exit"
    PUZZLE = "puzzle"
    SECRET = "secret"


# ---------------------------------------------------------------------------
# Content payloads. One dataclass per content type; the variant is the type.
# ---------------------------------------------------------------------------


@dataclass
class EnemyPayload:
    content_type: ClassVar[ContentType] = ContentType.ENEMY
    enemy_id: str
    level: int
    is_boss: bool = False


@dataclass
class ChestPayload:
    content_type: ClassVar[ContentType] = ContentType.CHEST
    loot_id: str
    gold: int
    bonus: bool = False


@dataclass
class TrapPayload:
    content_type: ClassVar[ContentType] = ContentType.TRAP
    trap_kind: str
    damage: int
    bonus: bool = False


@dataclass
class NpcPayload:
    content_type: ClassVar[ContentType] = ContentType.NPC
    npc_kind: str
    inventory: Tuple[str, ...] = ()


@dataclass
class InteractablePayload:
    content_type: ClassVar[ContentType] = ContentType.INTERACTABLE
    interact_kind: str
    heal_percent: int


@dataclass
class PuzzlePayload:
    content_type: ClassVar[ContentType] = ContentType.PUZZLE
    puzzle_kind: str
    name: str
    reward_kind: str
    gold_reward: int
    xp_reward: int
    solved: bool = False


@dataclass
class SecretPayload:
    content_type: ClassVar[ContentType] = ContentType.SECRET
    secret_kind: str
    name: str
    reward_kind: str
    gold_reward: int
    xp_reward: int
    heal_amount: int = 0
    discovered: bool = False


@dataclass
class ExitPayload:
    content_type: ClassVar[ContentType] = ContentType.EXIT
    requires_boss_defeated: bool = False
    boss_defeated: bool = False


Payload = Union[
    EnemyPayload,
    ChestPayload,
    TrapPayload,
    NpcPayload,
    InteractablePayload,
    PuzzlePayload,
    SecretPayload,
    ExitPayload,
]


@dataclass
class ContentItem:
    """One interactive object inside a room.

    Positions are normalized to the room bounds so any renderer can map them
    to its own pixel space. Only ``triggered`` and the puzzle/secret/exit
    payload flags change after generation.
    """

    id: str
    x: float
    y: float
    payload: Payload
    triggered: bool = False

    @property
    def content_type(self) -> ContentType:
        return self.payload.content_type

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Room:
    id: str
    type: RoomType
    grid_x: int
    grid_y: int
    links: Dict[Direction, Optional[str]] = field(
        default_factory=lambda: {d: None for d in Direction}
    )
    contents: List[ContentItem] = field(default_factory=list)
    visited: bool = False
    cleared: bool = False
    discovered: bool = False

    @property
    def position(self) -> Tuple[int, int]:
        return (self.grid_x, self.grid_y)

    def neighbor(self, direction: Direction) -> Optional[str]:
        return self.links.get(direction)

    def open_directions(self) -> List[Direction]:
        return [d for d in Direction if self.links.get(d)]

    def enemies(self) -> List[ContentItem]:
        return [c for c in self.contents if c.content_type is ContentType.ENEMY]

    def boss_enemies(self) -> List[ContentItem]:
        return [c for c in self.enemies() if c.payload.is_boss]

    def contents_of(self, content_type: ContentType) -> List[ContentItem]:
        return [c for c in self.contents if c.content_type is content_type]


@dataclass
class Floor:
    """One fully generated level. Advancing replaces the whole value."""

    floor_number: int
    theme_id: str
    rooms: Dict[str, Room]
    start_room_id: str
    exit_room_id: str
    boss_room_id: Optional[str]
    width: int
    height: int

    def get_room(self, room_id: str) -> Room:
        try:
            return self.rooms[room_id]
        except KeyError as exc:
            raise KeyError(f"Room not found on floor {self.floor_number}: {room_id}") from exc

    @property
    def start_room(self) -> Room:
        return self.rooms[self.start_room_id]

    @property
    def exit_room(self) -> Room:
        return self.rooms[self.exit_room_id]

    def iter_rooms(self) -> Iterator[Room]:
        return iter(self.rooms.values())

    def rooms_of_type(self, room_type: RoomType) -> List[Room]:
        return [r for r in self.rooms.values() if r.type is room_type]

    def __len__(self) -> int:
        return len(self.rooms)


__all__ = [
    "ChestPayload",
    "ContentItem",
    "ContentType",
    "Direction",
    "EnemyPayload",
    "ExitPayload",
    "Floor",
    "InteractablePayload",
    "NpcPayload",
    "Payload",
    "PuzzlePayload",
    "Room",
    "RoomType",
    "SecretPayload",
    "TrapPayload",
]
