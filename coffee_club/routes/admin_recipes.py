"""
Admin Recipe Routes for Coffee Club
===================================

Staff endpoints for configuring product recipes.

Endpoints:
----------
- GET /admin/unit-types: Unit catalog, ordered for pickers
- GET /admin/products/{product_id}/recipe: Stored entries for one scope
- PUT /admin/products/{product_id}/recipe: Replace one scope
- GET /admin/products/{product_id}/effective-recipe: Resolver preview

Recipe Scopes:
--------------
Omit `size_id` to work on the product's DEFAULT layer, which applies to
every size. Pass `size_id` to work on that size's override layer. A size
entry replaces the DEFAULT entry for the same ingredient entirely.

Authentication:
---------------
All endpoints require admin authentication via HTTP Basic Auth.

Usage:
------
    # See what a Large latte actually contains
    GET /admin/products/1/effective-recipe?size_id=3
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..auth import verify_admin_credentials
from ..customizer.resolver import resolve
from ..db import get_db
from ..schemas.catalog import UnitTypeOut
from ..schemas.recipes import (
    EffectiveRecipeOut,
    RecipeEntryOut,
    RecipeSaveRequest,
    RecipeSaveResponse,
)
from ..services.catalog import (
    ProductNotFoundError,
    get_product,
    get_product_recipe,
    get_recipe_entries,
    get_unit_types,
)
from ..services.recipe_store import set_recipe


logger = logging.getLogger(__name__)

# Router definition
admin_recipes_router = APIRouter(
    prefix="/admin",
    tags=["Admin - Recipes"]
)


def _require_product(db: Session, product_id: int) -> None:
    try:
        get_product(db, product_id)
    except ProductNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found")


# =============================================================================
# Unit Types
# =============================================================================

@admin_recipes_router.get("/unit-types", response_model=List[UnitTypeOut])
def list_unit_types(
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> List[UnitTypeOut]:
    """List unit types ordered by display_order, then name."""
    return [UnitTypeOut.model_validate(u) for u in get_unit_types(db)]


# =============================================================================
# Recipe Endpoints
# =============================================================================

@admin_recipes_router.get("/products/{product_id}/recipe", response_model=List[RecipeEntryOut])
def get_recipe(
    product_id: int,
    size_id: Optional[int] = Query(None, description="Size override layer; omit for DEFAULT"),
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> List[RecipeEntryOut]:
    """Stored entries of one recipe scope."""
    _require_product(db, product_id)
    return [RecipeEntryOut.model_validate(e) for e in get_recipe_entries(db, product_id, size_id)]


@admin_recipes_router.put("/products/{product_id}/recipe", response_model=RecipeSaveResponse)
def save_recipe(
    product_id: int,
    payload: RecipeSaveRequest,
    size_id: Optional[int] = Query(None, description="Size override layer; omit for DEFAULT"),
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> RecipeSaveResponse:
    """
    Replace one recipe scope.

    Duplicate ingredient ids keep their first entry. Unknown products,
    sizes or ingredients and placeholder ids reject the whole save with 400.
    """
    result = set_recipe(
        db,
        product_id,
        size_id,
        [entry.model_dump() for entry in payload.entries],
    )
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)

    logger.info("Recipe for product %s size %s saved by staff", product_id, size_id)
    return RecipeSaveResponse.model_validate(result)


@admin_recipes_router.get("/products/{product_id}/effective-recipe", response_model=EffectiveRecipeOut)
def preview_effective_recipe(
    product_id: int,
    size_id: Optional[int] = Query(None, description="Selected size; omit for DEFAULT only"),
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> EffectiveRecipeOut:
    """The recipe a buyer would see for a product and size."""
    _require_product(db, product_id)
    recipe = get_product_recipe(db, product_id)
    effective = resolve(product_id, size_id, recipe.entries)
    return EffectiveRecipeOut(
        product_id=product_id,
        size_id=size_id,
        entries=[RecipeEntryOut.model_validate(e) for e in effective.values()],
    )
