from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..rng import RandomSource

logger = logging.getLogger(__name__)

THEME_TIERS: Dict[str, int] = {
    "training": 1,
    "forest": 2,
    "crystal": 3,
    "library": 4,
    "volcano": 5,
    "void": 6,
}

SPECIAL_CHANCE = 0.5
LOWER_TIER_CHANCE = 0.3


@dataclass(frozen=True)
class TierStock:
    consumables: Tuple[str, ...]
    equipment: Tuple[str, ...]
    specials: Tuple[str, ...]


TIER_STOCK: Dict[int, TierStock] = {
    1: TierStock(
        consumables=("health_potion", "mana_vial", "strength_tonic"),
        equipment=("wooden_sword", "leather_cap", "cloth_tunic"),
        specials=("lucky_charm",),
    ),
    2: TierStock(
        consumables=("health_potion", "greater_potion", "mana_flask", "forest_brew"),
        equipment=("iron_sword", "leather_armor", "oak_shield"),
        specials=("acorn_amulet", "smoke_bomb"),
    ),
    3: TierStock(
        consumables=("greater_potion", "mana_flask", "super_potion", "catnip_potion"),
        equipment=("crystal_blade", "frost_mail", "ice_buckler"),
        specials=("prism_ring",),
    ),
    4: TierStock(
        consumables=("super_potion", "mana_elixir", "catnip_potion", "page_of_wisdom"),
        equipment=("runed_staff", "scholar_robe", "tome_shield"),
        specials=("spectral_lantern", "forbidden_page"),
    ),
    5: TierStock(
        consumables=("super_potion", "max_potion", "mana_elixir", "phoenix_feather"),
        equipment=("flame_sword", "dragonscale_mail", "ember_shield"),
        specials=("dragon_heart",),
    ),
    6: TierStock(
        consumables=("max_potion", "void_shield_potion", "mana_elixir", "phoenix_feather"),
        equipment=("void_blade", "abyssal_plate", "null_aegis"),
        specials=("void_crown", "star_fragment"),
    ),
}


def get_theme_tier(theme_id: str) -> int:
    """Map a theme id to its merchant tier (1..6). Unknown themes are tier 1."""
    return THEME_TIERS.get(theme_id, 1)


def build_merchant_inventory(theme_id: str, rng: RandomSource) -> Tuple[str, ...]:
    """Roll the item ids a dungeon merchant offers.

    3-4 consumables and 2-3 equipment pieces from the theme's tier, a 50%
    chance of one tier special and a 30% chance of one consumable from the
    tier below. Picks are independent, so duplicates are possible.
    """
    tier = get_theme_tier(theme_id)
    stock = TIER_STOCK[tier]

    items: List[str] = []
    items.extend(rng.sample_with_replacement(stock.consumables, rng.randint(3, 4)))
    items.extend(rng.sample_with_replacement(stock.equipment, rng.randint(2, 3)))

    if rng.chance(SPECIAL_CHANCE):
        items.append(rng.choice(stock.specials))

    if tier > 1 and rng.chance(LOWER_TIER_CHANCE):
        items.append(rng.choice(TIER_STOCK[tier - 1].consumables))

    logger.debug("Merchant stock for theme=%s tier=%d: %s", theme_id, tier, items)
    return tuple(items)


__all__ = ["THEME_TIERS", "TIER_STOCK", "TierStock", "build_merchant_inventory", "get_theme_tier"]
