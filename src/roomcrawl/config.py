from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from jsonschema import Draft7Validator

from .errors import ConfigError
from .models import RoomType

logger = logging.getLogger(__name__)

_DATA_PKG = "roomcrawl.data"
THEMES_RESOURCE = "themes.yaml"
SCHEMA_RESOURCE = "theme.schema.json"
DEFAULT_THEME_ID = "training"


@dataclass(frozen=True)
class DungeonConfig:
    """Static description of one dungeon theme.

    - base_rooms / rooms_per_floor: room count on floor N is
      base_rooms + (N - 1) * rooms_per_floor.
    - total_floors: the last floor holds the boss instead of an exit.
    - room_weights: relative weight of each room type for interior rooms.
    """

    id: str
    name: str
    base_rooms: int
    rooms_per_floor: int
    total_floors: int
    room_weights: Mapping[RoomType, float]
    enemy_pool: Tuple[str, ...]
    treasure_pool: Tuple[str, ...]
    theme: str = ""

    def room_count(self, floor_number: int) -> int:
        return self.base_rooms + (floor_number - 1) * self.rooms_per_floor

    def is_final_floor(self, floor_number: int) -> bool:
        return floor_number == self.total_floors

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "DungeonConfig":
        weights = {RoomType(k): float(v) for k, v in raw["room_weights"].items()}
        return cls(
            id=str(raw["id"]),
            name=str(raw["name"]),
            theme=str(raw.get("theme", "")),
            base_rooms=int(raw["base_rooms"]),
            rooms_per_floor=int(raw["rooms_per_floor"]),
            total_floors=int(raw["total_floors"]),
            room_weights=weights,
            enemy_pool=tuple(raw["enemy_pool"]),
            treasure_pool=tuple(raw["treasure_pool"]),
        )


class ThemeRegistry:
    """Lookup table from theme id to DungeonConfig.

    Loads the packaged ``themes.yaml`` (or an explicit path) and validates it
    against the bundled JSON Schema. Unknown ids resolve to the first theme
    defined in the file instead of failing.
    """

    def __init__(self, themes: List[DungeonConfig]) -> None:
        if not themes:
            raise ConfigError("Theme table must define at least one theme")
        self._themes: Dict[str, DungeonConfig] = {}
        for cfg in themes:
            if cfg.id in self._themes:
                raise ConfigError(f"Duplicate theme id: {cfg.id}")
            self._themes[cfg.id] = cfg
        self._default_id = themes[0].id

    @classmethod
    def from_yaml(cls, text: str, source: str = "<string>") -> "ThemeRegistry":
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in theme table {source}: {exc}") from exc
        validate_theme_table(raw)
        themes = [DungeonConfig.from_dict(t) for t in raw["themes"]]
        logger.info("Loaded %d dungeon themes from %s", len(themes), source)
        return cls(themes)

    @classmethod
    def load(cls, path: Optional[os.PathLike | str] = None) -> "ThemeRegistry":
        """Load themes from ``path``, $ROOMCRAWL_THEMES, or the packaged resource."""
        if path is None:
            path = os.environ.get("ROOMCRAWL_THEMES")
        if path is None:
            text = resources.files(_DATA_PKG).joinpath(THEMES_RESOURCE).read_text(encoding="utf-8")
            logger.debug("Loaded embedded theme table resource")
            return cls.from_yaml(text, source=THEMES_RESOURCE)
        if not str(path).strip():
            raise ConfigError("Theme file path is empty (check ROOMCRAWL_THEMES)")
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Theme file not found: {p}")
        if not p.is_file():
            raise ConfigError(f"Theme file path is not a file: {p}")
        return cls.from_yaml(p.read_text(encoding="utf-8"), source=str(p))

    @property
    def default_id(self) -> str:
        return self._default_id

    @property
    def default(self) -> DungeonConfig:
        return self._themes[self._default_id]

    def ids(self) -> List[str]:
        return list(self._themes)

    def __contains__(self, theme_id: object) -> bool:
        return theme_id in self._themes

    def get(self, theme_id: Optional[str]) -> DungeonConfig:
        cfg = self._themes.get(theme_id or "")
        if cfg is None:
            logger.warning("Unknown theme '%s', falling back to '%s'", theme_id, self._default_id)
            return self.default
        return cfg


@lru_cache(maxsize=1)
def _theme_schema() -> Dict[str, Any]:
    text = resources.files(_DATA_PKG).joinpath(SCHEMA_RESOURCE).read_text(encoding="utf-8")
    return json.loads(text)


def validate_theme_table(data: Any) -> None:
    validator = Draft7Validator(_theme_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        raise ConfigError("Theme table failed schema validation", errors)


@lru_cache(maxsize=1)
def default_registry() -> ThemeRegistry:
    return ThemeRegistry.load()


@dataclass
class GenerationSettings:
    """Inputs for generating a floor from the command line or environment."""

    theme: str = DEFAULT_THEME_ID
    floor: int = 1
    seed: Optional[int] = None
    themes_path: Optional[str] = field(default=None)

    @classmethod
    def from_env(cls) -> "GenerationSettings":
        """Read ROOMCRAWL_THEME/FLOOR/SEED/THEMES. Malformed numbers raise ConfigError."""
        seed = _env_int("ROOMCRAWL_SEED")
        floor = _env_int("ROOMCRAWL_FLOOR")
        return cls(
            theme=os.environ.get("ROOMCRAWL_THEME", DEFAULT_THEME_ID),
            floor=1 if floor is None else floor,
            seed=seed,
            themes_path=os.environ.get("ROOMCRAWL_THEMES"),
        )


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="roomcrawl", description="Generate a dungeon floor as JSON.")
    parser.add_argument("--theme", help="Theme id (unknown ids fall back to the default theme)")
    parser.add_argument("--floor", type=int, help="Floor number, starting at 1")
    parser.add_argument("--seed", type=int, help="Seed for reproducible output")
    parser.add_argument("--themes", dest="themes_path", help="Path to an alternative themes.yaml")
    parser.add_argument("--list-themes", action="store_true", help="Print known theme ids and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> GenerationSettings:
    """Merge CLI arguments over environment defaults."""
    settings = GenerationSettings.from_env()
    if args.theme:
        settings.theme = args.theme
    if args.floor is not None:
        settings.floor = args.floor
    if args.seed is not None:
        settings.seed = args.seed
    if args.themes_path:
        settings.themes_path = args.themes_path
    return settings


__all__ = [
    "DEFAULT_THEME_ID",
    "DungeonConfig",
    "GenerationSettings",
    "ThemeRegistry",
    "build_settings",
    "default_registry",
    "parse_args",
    "validate_theme_table",
]
