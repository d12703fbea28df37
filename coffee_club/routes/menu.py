"""
Menu Routes for Coffee Club
===========================

Public, read-only catalog endpoints used by the storefront before a buyer
opens the customization dialog.

Endpoints:
----------
- GET /menu/products: List products (optionally by category)
- GET /menu/products/{product_id}/sizes: Available sizes of a product
- GET /menu/ingredients: Available ingredients grouped by category

When the ingredient catalog cannot be read, /menu/ingredients answers with
the built-in seed ingredients and `degraded: true` instead of failing.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..customizer.views import group_by_category
from ..db import get_db
from ..schemas.catalog import (
    IngredientCatalogOut,
    IngredientGroupOut,
    IngredientOut,
    ProductOut,
    ProductSizeOut,
)
from ..services.catalog import (
    ProductNotFoundError,
    fetch_ingredients,
    get_product,
    get_product_sizes,
    list_products,
)


logger = logging.getLogger(__name__)

# Router definition
menu_router = APIRouter(prefix="/menu", tags=["Menu"])


@menu_router.get("/products", response_model=List[ProductOut])
def list_menu_products(
    category: Optional[str] = Query(None, description="Filter by category"),
    db: Session = Depends(get_db),
) -> List[ProductOut]:
    """List products that are not archived."""
    return [ProductOut.model_validate(p) for p in list_products(db, category)]


@menu_router.get("/products/{product_id}/sizes", response_model=List[ProductSizeOut])
def list_product_sizes(
    product_id: int,
    db: Session = Depends(get_db),
) -> List[ProductSizeOut]:
    """Available sizes of a product, in display order. Empty for unsized products."""
    try:
        get_product(db, product_id)
    except ProductNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found")
    return [ProductSizeOut.model_validate(s) for s in get_product_sizes(db, product_id)]


@menu_router.get("/ingredients", response_model=IngredientCatalogOut)
def list_menu_ingredients(db: Session = Depends(get_db)) -> IngredientCatalogOut:
    """Available ingredients grouped by category."""
    result = fetch_ingredients(db)
    groups = [
        IngredientGroupOut(
            category=group.category,
            title=group.title,
            ingredients=[IngredientOut.model_validate(i) for i in group.items],
        )
        for group in group_by_category(result.ingredients)
    ]
    return IngredientCatalogOut(groups=groups, degraded=result.degraded, error=result.error)
