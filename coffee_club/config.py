"""
Configuration Module for Coffee Club
====================================

This module centralizes the environment variables and constants used by the
Coffee Club ordering service. Every setting is parsed and typed once, at
module load time, so misconfiguration surfaces early.

Configuration Categories:
-------------------------
- **Database**: SQLAlchemy URL for the catalog/recipe store.

- **Shop Configuration**: The shop (tenant) identifier that every recipe
  write is scoped to, plus the default tax rate for new products.

- **Dialog & Cart Management**: TTL and cache size for the in-memory stores
  that hold open customization dialogs and buyer carts.

- **Rate Limiting**: slowapi limits for the public customization endpoints.

- **CORS Settings**: Allowed origins for the storefront.

- **Staff Authentication**: HTTP Basic credentials for /admin endpoints.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL (default: "sqlite:///./coffee_club.db")
- SHOP_ID: Shop identifier, required for recipe writes (default: "")
- DEFAULT_TAX_RATE: Tax rate applied to new products (default: 0.0825)
- DIALOG_TTL_SECONDS: Idle dialog lifetime (default: 1800)
- DIALOG_MAX_CACHE_SIZE: Max open dialogs kept in memory (default: 1000)
- CART_TTL_SECONDS: Idle cart lifetime (default: 86400)
- CART_MAX_CACHE_SIZE: Max carts kept in memory (default: 5000)
- RATE_LIMIT_DIALOG: Dialog endpoint rate limit (default: "120 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- ADMIN_USERNAME: Staff username (default: "admin")
- ADMIN_PASSWORD: Staff password (required for admin access)

Usage:
------
    from coffee_club.config import SHOP_ID, DIALOG_TTL_SECONDS
"""

import os
from typing import List


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./coffee_club.db")


# =============================================================================
# Shop Configuration
# =============================================================================
# Single-seller deployment: one shop id scopes every recipe write.

SHOP_ID: str = os.getenv("SHOP_ID", "").strip()

# Values that ship in sample .env files and must never reach the store
PLACEHOLDER_IDS = frozenset({
    "",
    "your-shop-id",
    "placeholder",
    "changeme",
    "undefined",
    "null",
    "none",
    "00000000-0000-0000-0000-000000000000",
})

DEFAULT_TAX_RATE: float = float(os.getenv("DEFAULT_TAX_RATE", "0.0825"))


def is_placeholder_id(value) -> bool:
    """
    Return True if an identifier is missing or one of the known placeholders.

    Integers are accepted as real ids unless they are zero or negative.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return True
    if isinstance(value, int):
        return value <= 0
    return str(value).strip().lower() in PLACEHOLDER_IDS


def get_shop_id() -> str:
    """
    Return the configured shop id.

    Kept as a function so tests can override SHOP_ID without reloading
    the module.
    """
    return SHOP_ID


# =============================================================================
# Dialog & Cart Management Configuration
# =============================================================================
# Open customization dialogs and carts live in memory only; a dialog that
# expires is simply discarded (nothing was committed).

DIALOG_TTL_SECONDS: int = int(os.getenv("DIALOG_TTL_SECONDS", "1800"))  # 30 minutes
DIALOG_MAX_CACHE_SIZE: int = int(os.getenv("DIALOG_MAX_CACHE_SIZE", "1000"))

CART_TTL_SECONDS: int = int(os.getenv("CART_TTL_SECONDS", "86400"))  # 1 day
CART_MAX_CACHE_SIZE: int = int(os.getenv("CART_MAX_CACHE_SIZE", "5000"))


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Format: "X per Y" where Y is second, minute, hour, or day

RATE_LIMIT_DIALOG: str = os.getenv("RATE_LIMIT_DIALOG", "120 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_dialog() -> str:
    """Return the current dialog rate limit (overridable in tests)."""
    return RATE_LIMIT_DIALOG


# =============================================================================
# CORS Configuration
# =============================================================================

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]


# =============================================================================
# Staff Authentication Configuration
# =============================================================================
# ADMIN_PASSWORD must be set in production for admin access to work.

ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
