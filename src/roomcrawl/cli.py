from __future__ import annotations

import json
import logging
import sys

from .config import ThemeRegistry, build_settings, parse_args
from .dungeon.floor import generate_floor
from .errors import ConfigError, RoomcrawlError
from .rng import RandomSource
from .serialize import floor_to_dict

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        settings = build_settings(args)
        registry = ThemeRegistry.load(settings.themes_path)
        if args.list_themes:
            print("\n".join(registry.ids()))
            return 0
        floor = generate_floor(settings.theme, settings.floor, RandomSource(settings.seed), registry)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 2
    except RoomcrawlError as exc:
        logger.error("%s", exc.to_human() if isinstance(exc, ConfigError) else exc)
        return 2

    # Print JSON so it can be diffed across runs
    print(json.dumps(floor_to_dict(floor), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
