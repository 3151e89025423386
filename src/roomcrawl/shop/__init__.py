from .catalog import build_merchant_inventory, get_theme_tier

__all__ = ["build_merchant_inventory", "get_theme_tier"]
