from importlib.metadata import version, PackageNotFoundError

from .dungeon.floor import DungeonRun, generate_floor

__all__ = ["__version__", "DungeonRun", "generate_floor"]

try:
    __version__ = version("roomcrawl")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
