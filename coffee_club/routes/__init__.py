"""
Routes Package for Coffee Club
==============================

API route definitions organized by domain. Each module defines a FastAPI
APIRouter with a prefix and tags for OpenAPI documentation.

Architecture Overview:
----------------------
**Buyer-Facing Routes:**
- menu.py: Products, sizes and the grouped ingredient catalog
- customize.py: Customization dialog (open, commands, confirm, cancel)
- cart.py: Cart lines, quantities and the checkout payload

**Admin Routes (require authentication):**
- admin_recipes.py: Unit types, recipe scopes and the resolver preview

Route Dependencies:
-------------------
- get_db: Database session for queries
- get_session_factory: Session factory for the concurrent dialog reads
- verify_admin_credentials: Admin authentication
- limiter.limit(): Rate limiting

Error Handling:
---------------
- 400: Bad request (invalid recipe save, unpriceable product, empty cart)
- 401: Unauthorized (invalid credentials)
- 404: Not found (unknown product, expired dialog, unknown cart line)
- 429: Too many requests (rate limited)
- 503: Service unavailable (catalog store down, admin auth not configured)
"""

from .menu import menu_router
from .customize import customize_router, limiter
from .cart import cart_router
from .admin_recipes import admin_recipes_router

__all__ = [
    "menu_router",
    "customize_router",
    "cart_router",
    "admin_recipes_router",
    "limiter",
]
