"""
Application factory for the Coffee Club ordering API.

`create_app()` builds a fully wired FastAPI application: CORS, rate
limiting, routers, and the in-memory stores for open customization dialogs
and carts. Tests call it directly to get an isolated app per test.
"""

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from . import config
from .routes import (
    admin_recipes_router,
    cart_router,
    customize_router,
    limiter,
    menu_router,
)
from .services.state_store import StateStore

logger = logging.getLogger(__name__)


def create_app(
    dialog_store: Optional[StateStore] = None,
    cart_store: Optional[StateStore] = None,
) -> FastAPI:
    """
    Create a FastAPI application.

    Args:
        dialog_store: Store for open dialogs; a new TTL/LRU store is created
                      from config when omitted
        cart_store: Store for carts; likewise

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Coffee Club Ordering API",
        description="Drink customization, pricing and cart API for the Coffee Club storefront",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Configure rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    if dialog_store is None:
        dialog_store = StateStore(
            "dialog",
            ttl_seconds=config.DIALOG_TTL_SECONDS,
            max_size=config.DIALOG_MAX_CACHE_SIZE,
        )
    if cart_store is None:
        cart_store = StateStore(
            "cart",
            ttl_seconds=config.CART_TTL_SECONDS,
            max_size=config.CART_MAX_CACHE_SIZE,
        )
    app.state.dialogs = dialog_store
    app.state.carts = cart_store

    # Include routers with API version prefix
    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(menu_router)
    api_v1.include_router(customize_router)
    api_v1.include_router(cart_router)
    api_v1.include_router(admin_recipes_router)
    app.include_router(api_v1)

    # Also mount at root
    app.include_router(menu_router)
    app.include_router(customize_router)
    app.include_router(cart_router)
    app.include_router(admin_recipes_router)

    @app.get("/health")
    def health_check():
        return {
            "status": "healthy",
            "shop_configured": not config.is_placeholder_id(config.get_shop_id()),
            "open_dialogs": len(app.state.dialogs),
            "carts": len(app.state.carts),
        }

    logger.info("Application created")

    return app
