from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from .models import ContentItem, Floor, Room


def content_to_dict(item: ContentItem) -> Dict[str, Any]:
    data = asdict(item.payload)
    if "inventory" in data:
        data["inventory"] = list(data["inventory"])
    return {
        "id": item.id,
        "type": item.content_type.value,
        "x": round(item.x, 4),
        "y": round(item.y, 4),
        "data": data,
        "triggered": item.triggered,
    }


def room_to_dict(room: Room) -> Dict[str, Any]:
    return {
        "id": room.id,
        "type": room.type.value,
        "grid_x": room.grid_x,
        "grid_y": room.grid_y,
        "connections": {d.value: target for d, target in room.links.items()},
        "contents": [content_to_dict(c) for c in room.contents],
        "visited": room.visited,
        "cleared": room.cleared,
        "discovered": room.discovered,
    }


def floor_to_dict(floor: Floor) -> Dict[str, Any]:
    """JSON-serializable snapshot of a floor, rooms in creation order."""
    return {
        "floor_number": floor.floor_number,
        "theme_id": floor.theme_id,
        "start_room_id": floor.start_room_id,
        "exit_room_id": floor.exit_room_id,
        "boss_room_id": floor.boss_room_id,
        "width": floor.width,
        "height": floor.height,
        "rooms": [room_to_dict(r) for r in floor.iter_rooms()],
    }


__all__ = ["content_to_dict", "floor_to_dict", "room_to_dict"]
