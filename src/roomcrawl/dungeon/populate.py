from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..config import DungeonConfig
from ..models import (
    ChestPayload,
    ContentItem,
    EnemyPayload,
    ExitPayload,
    InteractablePayload,
    NpcPayload,
    Payload,
    PuzzlePayload,
    Room,
    RoomType,
    SecretPayload,
    TrapPayload,
)
from ..rng import RandomSource
from ..shop.catalog import build_merchant_inventory
from .ids import IdFactory
from .placement import Position, door_zones, far_from, sample_position

logger = logging.getLogger(__name__)

# Rooms that never receive bonus spawns.
SAFE_ROOM_TYPES = frozenset({RoomType.START, RoomType.REST, RoomType.MERCHANT, RoomType.EXIT, RoomType.BOSS})

BONUS_CHEST_CHANCE = 0.4
BONUS_TRAP_CHANCE = 0.3
BONUS_ENEMY_CHANCE = 0.25

TRAP_MIN_SEPARATION = 0.15
CAMPFIRE_HEAL_PERCENT = 30
FULL_HEAL_AMOUNT = 999
BOSS_ENEMY_ID = "boss"


@dataclass(frozen=True)
class PuzzleKind:
    kind: str
    name: str
    reward: str


@dataclass(frozen=True)
class SecretKind:
    kind: str
    name: str
    reward: str


PUZZLE_KINDS: Tuple[PuzzleKind, ...] = (
    PuzzleKind("riddle", "Riddle Stone", "gold"),
    PuzzleKind("switch", "Ancient Switch", "chest"),
    PuzzleKind("memory", "Memory Tiles", "item"),
    PuzzleKind("sequence", "Sequence Lock", "gold"),
)

SECRET_KINDS: Tuple[SecretKind, ...] = (
    SecretKind("hidden_chest", "Hidden Treasure", "gold_large"),
    SecretKind("ancient_tome", "Ancient Tome", "xp_bonus"),
    SecretKind("secret_merchant", "Secret Merchant", "rare_items"),
    SecretKind("healing_spring", "Healing Spring", "full_heal"),
)


class ContentPopulator:
    """Fills rooms with content for one floor.

    Primary content follows the room type. Rooms that are not safe rooms
    also roll for bonus chests, traps and enemies of a kind they do not
    already specialise in. Randomly placed items keep clear of the door
    zones of the room's open sides.
    """

    def __init__(self, config: DungeonConfig, floor_number: int, rng: RandomSource, ids: IdFactory) -> None:
        self.config = config
        self.floor = floor_number
        self.rng = rng
        self.ids = ids

    def populate(self, room: Room) -> List[ContentItem]:
        room.contents = []
        handler = getattr(self, f"_add_{room.type.value}_content", None)
        if handler is not None:
            handler(room)

        if room.type not in SAFE_ROOM_TYPES:
            self._add_bonus_content(room)

        logger.debug(
            "Populated %s (%s) with %d item(s)", room.id, room.type.value, len(room.contents)
        )
        return room.contents

    # ---------------------- Placement ----------------------
    def _place(self, room: Room, x: float, y: float, payload: Payload) -> ContentItem:
        item = ContentItem(id=self.ids.content_id(), x=x, y=y, payload=payload)
        room.contents.append(item)
        return item

    def _random_position(self, room: Room, x_range, y_range, accept=None) -> Position:
        return sample_position(self.rng, x_range, y_range, zones=door_zones(room), accept=accept)

    # ---------------------- Primary content ----------------------
    def _add_enemy_content(self, room: Room) -> None:
        count = 1 + self.rng.randint(0, min(3, self.floor) - 1)
        for _ in range(count):
            x, y = self._random_position(room, (0.3, 0.7), (0.3, 0.7))
            self._place(room, x, y, EnemyPayload(enemy_id=self.rng.choice(self.config.enemy_pool), level=self.floor))

    def _add_treasure_content(self, room: Room) -> None:
        gold = 10 * self.floor + self.rng.randint(0, 20 * self.floor - 1)
        self._place(room, 0.5, 0.5, ChestPayload(loot_id=self.rng.choice(self.config.treasure_pool), gold=gold))

    def _add_trap_content(self, room: Room) -> None:
        used: List[Position] = []
        for _ in range(self.rng.randint(1, 3)):
            pos = self._random_position(
                room, (0.15, 0.85), (0.15, 0.85), accept=far_from(used, TRAP_MIN_SEPARATION)
            )
            used.append(pos)
            self._place(room, pos[0], pos[1], TrapPayload(trap_kind="spike", damage=5 + self.floor * 2))

    def _add_rest_content(self, room: Room) -> None:
        self._place(room, 0.5, 0.5, InteractablePayload(interact_kind="campfire", heal_percent=CAMPFIRE_HEAL_PERCENT))

    def _add_merchant_content(self, room: Room) -> None:
        inventory = build_merchant_inventory(self.config.id, self.rng)
        self._place(room, 0.5, 0.3, NpcPayload(npc_kind="merchant", inventory=inventory))

    def _add_puzzle_content(self, room: Room) -> None:
        kind: PuzzleKind = self.rng.choice(PUZZLE_KINDS)
        payload = PuzzlePayload(
            puzzle_kind=kind.kind,
            name=kind.name,
            reward_kind=kind.reward,
            gold_reward=20 * self.floor + self.rng.randint(0, 30 * self.floor - 1),
            xp_reward=10 * self.floor,
        )
        self._place(room, 0.5, 0.4, payload)

    def _add_secret_content(self, room: Room) -> None:
        kind: SecretKind = self.rng.choice(SECRET_KINDS)
        if kind.reward == "full_heal":
            gold, xp, heal = 0, 0, FULL_HEAL_AMOUNT
        else:
            gold = 30 * self.floor + self.rng.randint(0, 50 * self.floor - 1)
            xp, heal = 20 * self.floor, 0
        payload = SecretPayload(
            secret_kind=kind.kind,
            name=kind.name,
            reward_kind=kind.reward,
            gold_reward=gold,
            xp_reward=xp,
            heal_amount=heal,
        )
        self._place(room, 0.5, 0.5, payload)

    def _add_boss_content(self, room: Room) -> None:
        self._place(room, 0.5, 0.4, EnemyPayload(enemy_id=BOSS_ENEMY_ID, level=self.floor, is_boss=True))
        self._place(room, 0.5, 0.7, ExitPayload(requires_boss_defeated=True, boss_defeated=False))

    def _add_exit_content(self, room: Room) -> None:
        self._place(room, 0.5, 0.5, ExitPayload())

    # ---------------------- Bonus content ----------------------
    def _add_bonus_content(self, room: Room) -> None:
        if room.type is not RoomType.TREASURE and self.rng.chance(BONUS_CHEST_CHANCE):
            x, y = self._random_position(room, (0.15, 0.35), (0.2, 0.8))
            gold = int((5 + self.rng.random() * 10) * self.floor)
            self._place(
                room, x, y, ChestPayload(loot_id=self.rng.choice(self.config.treasure_pool), gold=gold, bonus=True)
            )

        if room.type is not RoomType.TRAP and self.rng.chance(BONUS_TRAP_CHANCE):
            for _ in range(self.rng.randint(1, 2)):
                x, y = self._random_position(room, (0.1, 0.9), (0.1, 0.9))
                self._place(room, x, y, TrapPayload(trap_kind="spike", damage=3 + self.floor, bonus=True))

        if room.type is not RoomType.ENEMY and self.rng.chance(BONUS_ENEMY_CHANCE):
            x, y = self._random_position(room, (0.7, 0.85), (0.3, 0.7))
            self._place(room, x, y, EnemyPayload(enemy_id=self.rng.choice(self.config.enemy_pool), level=self.floor))


def populate_room(
    room: Room,
    floor_number: int,
    config: DungeonConfig,
    rng: RandomSource,
    ids: IdFactory,
) -> List[ContentItem]:
    return ContentPopulator(config, floor_number, rng, ids).populate(room)


__all__ = [
    "BOSS_ENEMY_ID",
    "ContentPopulator",
    "PUZZLE_KINDS",
    "SAFE_ROOM_TYPES",
    "SECRET_KINDS",
    "populate_room",
]
