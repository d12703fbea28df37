"""
Services Package for Coffee Club
================================

Service modules sit between the routes and the pure customization engine
(`coffee_club.customizer`). They own store access and in-memory state; the
engine owns the rules.

Available Services:
-------------------
- **catalog**: Catalog reads (ingredients, sizes, recipe entries, unit
  types) returned as engine records, with seed-ingredient fallback
- **recipe_store**: The staff recipe write path (dedupe + diff upsert)
- **dialog_loader**: Concurrent reads that open a customization dialog
- **state_store**: TTL/LRU in-memory store for open dialogs and carts
- **checkout**: Cart payload for the external checkout collaborator

Usage:
------
    from coffee_club.services.catalog import get_ingredients
    from coffee_club.services.recipe_store import set_recipe
    from coffee_club.services.dialog_loader import open_customization
"""
