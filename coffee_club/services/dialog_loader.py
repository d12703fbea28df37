"""
Customization dialog loader.

Opening a dialog needs three reads: the ingredient catalog, the product's
recipe entries, and the product's size list. They are issued concurrently
(each blocking SQLAlchemy read runs in a worker thread with its own
session) and joined with asyncio.gather before anything is built, so a
session is never constructed from partial results.

Failure handling:
- ingredient catalog unreadable -> seed ingredients, dialog opens degraded
- product missing -> ProductNotFoundError
- product not priceable (no sizes and no price) -> ProductNotPriceableError
- product, sizes or recipe unreadable -> CatalogUnavailableError
"""

import asyncio
import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..customizer.commands import DialogContext, DialogState, open_dialog
from .catalog import (
    CatalogUnavailableError,
    fetch_ingredients,
    get_product,
    get_product_recipe,
    get_product_sizes,
    get_unit_types,
)


logger = logging.getLogger(__name__)


class ProductNotPriceableError(ValueError):
    """Raised when a product has neither a size set nor a price."""


def _read(session_factory: Callable[[], Session], reader, *args):
    db = session_factory()
    try:
        return reader(db, *args)
    finally:
        db.close()


def _read_catalog(db: Session):
    result = fetch_ingredients(db)
    try:
        unit_types = {u.name: u for u in get_unit_types(db)}
    except SQLAlchemyError as e:
        logger.warning("Unit type catalog unavailable, using built-in labels: %s", e)
        unit_types = {}
    return result, unit_types


async def load_dialog_context(
    session_factory: Callable[[], Session],
    product_id: int,
) -> DialogContext:
    """
    Read everything a customization dialog needs for one product.

    Args:
        session_factory: Callable returning a new SQLAlchemy Session
        product_id: Product being customized

    Returns:
        DialogContext with sizes, every recipe scope, and the ingredient
        catalog merged with the ingredients the recipe references
    """
    try:
        product = await asyncio.to_thread(_read, session_factory, get_product, product_id)
        (catalog, unit_types), sizes, recipe = await asyncio.gather(
            asyncio.to_thread(_read, session_factory, _read_catalog),
            asyncio.to_thread(_read, session_factory, get_product_sizes, product_id),
            asyncio.to_thread(_read, session_factory, get_product_recipe, product_id),
        )
    except SQLAlchemyError as e:
        logger.error("Could not load dialog for product %s: %s", product_id, e, exc_info=True)
        raise CatalogUnavailableError(f"Could not load product {product_id}") from e

    if not sizes and product.price is None:
        raise ProductNotPriceableError(f"Product {product.name} has no sizes and no price")

    # Recipe ingredients may be unavailable in the catalog; they still
    # need a name and a unit cost for pricing and the order label.
    ingredients = {ing.id: ing for ing in recipe.ingredients.values()}
    ingredients.update({ing.id: ing for ing in catalog.ingredients})

    logger.info(
        "Loaded dialog for %s: %d sizes, %d recipe entries, %d ingredients%s",
        product.name, len(sizes), len(recipe.entries), len(ingredients),
        " (degraded)" if catalog.degraded else "",
    )

    return DialogContext(
        product=product,
        sizes=tuple(sizes),
        recipe_entries=tuple(recipe.entries),
        ingredients=tuple(ingredients.values()),
        unit_types=unit_types,
        degraded=catalog.degraded,
    )


async def open_customization(
    session_factory: Callable[[], Session],
    product_id: int,
    size_id: Optional[int] = None,
) -> DialogState:
    """Load a product and open its customization dialog on a size."""
    context = await load_dialog_context(session_factory, product_id)
    return open_dialog(context, size_id)
