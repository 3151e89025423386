from .observer import FloorObserver
from .session import ExplorationSession
from .triggers import can_trigger, discover_secret, is_room_cleared, sync_boss_gate, trigger

__all__ = [
    "ExplorationSession",
    "FloorObserver",
    "can_trigger",
    "discover_secret",
    "is_room_cleared",
    "sync_boss_gate",
    "trigger",
]
