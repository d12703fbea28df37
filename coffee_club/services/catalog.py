"""
Catalog Read Service for Coffee Club
====================================

Read operations the customization engine consumes. Every function returns
engine records (see customizer/records.py), never ORM rows, so callers can
hand the results to the pure resolver and pricing code unchanged.

Reads:
------
- get_ingredients: available ingredients, ordered by category then name
- get_product_sizes: a product's available sizes, ordered by display_order
- get_recipe_entries: recipe entries for one (product, size | DEFAULT) scope
- get_product_recipe: every scope of a product's recipe, plus the
  ingredients those entries reference (available or not)
- get_unit_types: unit catalog ordered by display_order, then name

Degraded Mode:
--------------
`fetch_ingredients` wraps `get_ingredients` in the `{success, error}` result
shape. When the store cannot be read it logs the failure and returns the
built-in seed ingredient set, so the customization dialog still opens.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..customizer.records import (
    DEFAULT_SIZE,
    IngredientInfo,
    ProductInfo,
    RecipeLine,
    SizeInfo,
    UnitTypeInfo,
)
from ..models import Ingredient, Product, ProductSize, RecipeEntry, UnitType


logger = logging.getLogger(__name__)

# Sentinel so callers can ask for every scope of a recipe
ALL_SCOPES = object()


class CatalogUnavailableError(RuntimeError):
    """Raised when the catalog store cannot be read."""


class ProductNotFoundError(LookupError):
    """Raised when a product id does not exist (or is archived)."""

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


# =============================================================================
# Seed Ingredients
# =============================================================================
# Used when the ingredient catalog cannot be read. Ids are negative so they
# can never collide with stored rows.

SEED_INGREDIENTS: List[IngredientInfo] = [
    IngredientInfo(id=-1, name="Espresso Shot", category="base_drink", unit_type="shots", unit_cost=0.75),
    IngredientInfo(id=-2, name="Vanilla Syrup", category="sugar", unit_type="pumps", unit_cost=0.25),
    IngredientInfo(id=-3, name="Caramel Syrup", category="sugar", unit_type="pumps", unit_cost=0.25),
    IngredientInfo(id=-4, name="Hazelnut Syrup", category="sugar", unit_type="pumps", unit_cost=0.25),
    IngredientInfo(id=-5, name="Maple Syrup", category="sugar", unit_type="pumps", unit_cost=0.30),
    IngredientInfo(id=-6, name="Pumpkin Spice Syrup", category="sugar", unit_type="pumps", unit_cost=0.30),
    IngredientInfo(id=-7, name="Steamed Milk", category="liquid_creamer", unit_type="oz", unit_cost=0.10),
    IngredientInfo(id=-8, name="Oat Milk", category="liquid_creamer", unit_type="oz", unit_cost=0.12),
    IngredientInfo(id=-9, name="Almond Milk", category="liquid_creamer", unit_type="oz", unit_cost=0.12),
    IngredientInfo(id=-10, name="Sugar", category="sugar", unit_type="tsp", unit_cost=0.00),
    IngredientInfo(id=-11, name="Stevia", category="sugar", unit_type="packets", unit_cost=0.00),
    IngredientInfo(id=-12, name="Whipped Cream", category="topping", unit_type="count", unit_cost=0.50),
    IngredientInfo(id=-13, name="Toasted Pecans", category="topping", unit_type="count", unit_cost=0.50),
]


@dataclass
class CatalogFetchResult:
    """`{success, error}` wrapper for a catalog read."""

    success: bool
    ingredients: List[IngredientInfo] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return not self.success


@dataclass
class ProductRecipe:
    """All recipe scopes of one product and the ingredients they reference."""

    entries: List[RecipeLine] = field(default_factory=list)
    ingredients: Dict[int, IngredientInfo] = field(default_factory=dict)


# =============================================================================
# Reads
# =============================================================================

def get_product(db: Session, product_id: int) -> ProductInfo:
    """
    Look up one product.

    Raises:
        ProductNotFoundError: If the product does not exist or is archived
    """
    product = db.get(Product, product_id)
    if product is None or product.archived:
        raise ProductNotFoundError(product_id)
    return ProductInfo.from_row(product)


def list_products(db: Session, category: Optional[str] = None) -> List[ProductInfo]:
    """List products that are not archived, optionally by category."""
    query = db.query(Product).filter(Product.archived == False)  # noqa: E712
    if category:
        query = query.filter(Product.category == category.lower())
    products = query.order_by(Product.category, Product.name).all()
    return [ProductInfo.from_row(p) for p in products]


def get_ingredients(db: Session, include_unavailable: bool = False) -> List[IngredientInfo]:
    """Ingredient catalog ordered by category, then name."""
    query = db.query(Ingredient)
    if not include_unavailable:
        query = query.filter(Ingredient.available == True)  # noqa: E712
    rows = query.order_by(Ingredient.category, Ingredient.name).all()
    return [IngredientInfo.from_row(row) for row in rows]


def fetch_ingredients(db: Session) -> CatalogFetchResult:
    """
    Read available ingredients, falling back to the seed set on failure.

    Never raises: a failed read is reported as success=False with the seed
    ingredients attached.
    """
    try:
        ingredients = get_ingredients(db)
    except SQLAlchemyError as e:
        logger.error("Ingredient catalog unavailable, using seed ingredients: %s", e, exc_info=True)
        return CatalogFetchResult(
            success=False,
            ingredients=list(SEED_INGREDIENTS),
            error=str(e),
        )
    return CatalogFetchResult(success=True, ingredients=ingredients)


def get_product_sizes(
    db: Session,
    product_id: int,
    include_unavailable: bool = False,
) -> List[SizeInfo]:
    """A product's sizes ordered by display_order, then id."""
    query = db.query(ProductSize).filter(ProductSize.product_id == product_id)
    if not include_unavailable:
        query = query.filter(ProductSize.available == True)  # noqa: E712
    rows = query.order_by(ProductSize.display_order, ProductSize.id).all()
    return [SizeInfo.from_row(row) for row in rows]


def get_recipe_entries(
    db: Session,
    product_id: int,
    size_id=DEFAULT_SIZE,
) -> List[RecipeLine]:
    """
    Recipe entries for one scope of a product.

    Args:
        db: Database session
        product_id: Product id
        size_id: A size id, DEFAULT_SIZE (None) for the default layer, or
                 ALL_SCOPES for every layer of the product
    """
    query = db.query(RecipeEntry).filter(RecipeEntry.product_id == product_id)
    if size_id is DEFAULT_SIZE:
        query = query.filter(RecipeEntry.size_id.is_(None))
    elif size_id is not ALL_SCOPES:
        query = query.filter(RecipeEntry.size_id == size_id)
    rows = query.order_by(RecipeEntry.id).all()
    return [RecipeLine.from_row(row) for row in rows]


def get_product_recipe(db: Session, product_id: int) -> ProductRecipe:
    """Every recipe scope of a product, with the ingredients it references."""
    rows = (
        db.query(RecipeEntry)
        .filter(RecipeEntry.product_id == product_id)
        .order_by(RecipeEntry.id)
        .all()
    )
    recipe = ProductRecipe()
    for row in rows:
        recipe.entries.append(RecipeLine.from_row(row))
        if row.ingredient is not None:
            recipe.ingredients[row.ingredient_id] = IngredientInfo.from_row(row.ingredient)
    return recipe


def get_unit_types(db: Session) -> List[UnitTypeInfo]:
    """Unit catalog ordered by display_order, then name."""
    rows = db.query(UnitType).order_by(UnitType.display_order, UnitType.name).all()
    return [UnitTypeInfo.from_row(row) for row in rows]
