from .classify import assign_room_types
from .floor import DungeonRun, generate_floor
from .graph import build_room_graph
from .populate import ContentPopulator, populate_room

__all__ = [
    "ContentPopulator",
    "DungeonRun",
    "assign_room_types",
    "build_room_graph",
    "generate_floor",
    "populate_room",
]
