from __future__ import annotations

import logging

from ..errors import (
    ContentAlreadyTriggeredError,
    ExitLockedError,
    PuzzleUnsolvedError,
    SecretNotDiscoveredError,
)
from ..models import ContentItem, ContentType, ExitPayload, Room, SecretPayload

logger = logging.getLogger(__name__)


def is_boss_defeated(room: Room) -> bool:
    """True once every boss enemy in the room has been triggered."""
    return all(c.triggered for c in room.boss_enemies())


def is_room_cleared(room: Room) -> bool:
    return all(c.triggered for c in room.enemies())


def sync_boss_gate(room: Room) -> bool:
    """Open gated exits in ``room`` once its bosses are down.

    Returns True if any exit flipped to ``boss_defeated`` on this call.
    """
    if not is_boss_defeated(room):
        return False
    opened = False
    for item in room.contents_of(ContentType.EXIT):
        payload: ExitPayload = item.payload
        if payload.requires_boss_defeated and not payload.boss_defeated:
            payload.boss_defeated = True
            opened = True
            logger.info("Boss defeated in %s; exit %s unlocked", room.id, item.id)
    return opened


def is_exit_unlocked(item: ContentItem) -> bool:
    payload: ExitPayload = item.payload
    return not payload.requires_boss_defeated or payload.boss_defeated


def discover_secret(item: ContentItem) -> bool:
    """Reveal a secret found by proximity. Returns False if it was already known."""
    if item.content_type is not ContentType.SECRET:
        raise TypeError(f"Content {item.id} is a {item.content_type.value}, not a secret")
    payload: SecretPayload = item.payload
    if payload.discovered:
        return False
    payload.discovered = True
    logger.debug("Secret %s (%s) discovered", item.id, payload.secret_kind)
    return True


def can_trigger(item: ContentItem, room: Room) -> bool:
    if item.triggered:
        return False
    if item.content_type is ContentType.PUZZLE:
        return False
    if item.content_type is ContentType.SECRET:
        return item.payload.discovered
    if item.content_type is ContentType.EXIT:
        return is_exit_unlocked(item)
    return True


def trigger(item: ContentItem, room: Room) -> ContentItem:
    """Move ``item`` from untriggered to triggered.

    Secrets must be discovered first and gated exits need their room's
    bosses triggered. Puzzles are only triggered by solving them through
    their engine (``roomcrawl.puzzles.open_puzzle``). Triggering an enemy
    re-evaluates the boss gate and the room's cleared flag.
    """
    if item.triggered:
        raise ContentAlreadyTriggeredError(f"Content {item.id} has already been triggered")

    if item.content_type is ContentType.PUZZLE:
        raise PuzzleUnsolvedError(f"Puzzle {item.id} must be solved; open it with open_puzzle()")

    if item.content_type is ContentType.SECRET and not item.payload.discovered:
        raise SecretNotDiscoveredError(f"Secret {item.id} must be discovered before it can be claimed")

    if item.content_type is ContentType.EXIT:
        sync_boss_gate(room)
        if not is_exit_unlocked(item):
            raise ExitLockedError("Defeat the boss first!")

    item.triggered = True
    logger.debug("Triggered %s %s in %s", item.content_type.value, item.id, room.id)

    if item.content_type is ContentType.ENEMY:
        sync_boss_gate(room)
        if not room.cleared and is_room_cleared(room):
            room.cleared = True
            logger.info("Room %s cleared", room.id)
    return item


__all__ = [
    "can_trigger",
    "discover_secret",
    "is_boss_defeated",
    "is_exit_unlocked",
    "is_room_cleared",
    "sync_boss_gate",
    "trigger",
]
