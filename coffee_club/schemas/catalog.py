"""
Catalog Schemas for Coffee Club
===============================

Response models for the read-only catalog: products, sizes, ingredients and
unit types. All of them use `from_attributes=True`, so they can be built
directly from ORM rows or from the engine's frozen records:

    product = get_product(db, product_id)
    return ProductOut.model_validate(product)

Ingredient Categories:
----------------------
- base_drink: Espresso, brewed coffee, tea
- sugar: Syrups and sweeteners
- liquid_creamer: Milks and creamers
- topping: Whipped cream, drizzles, nuts
- add_in: Anything else (also the group for unknown categories)
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ProductOut(BaseModel):
    """
    Response model for a purchasable product.

    Attributes:
        id: Database primary key
        name: Display name (e.g., "Maple Pecan Latte")
        category: Menu category (drink, food, merch, ...)
        price: Fixed price; None when the product is sold by size
        tax_rate: Rate applied to the line subtotal at checkout
        has_sizes: Whether the product is sold in sizes
        fixed_size_ounces: Volume of an unsized drink, if meaningful
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    description: Optional[str] = None
    price: Optional[float] = None
    tax_rate: float
    has_sizes: bool
    fixed_size_ounces: Optional[float] = None


class ProductSizeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    size_name: str
    size_ounces: Optional[float] = None
    price: float
    display_order: int
    available: bool


class IngredientOut(BaseModel):
    """
    Response model for an ingredient.

    Attributes:
        id: Database primary key (negative for seed ingredients)
        name: Display name (e.g., "Vanilla Syrup")
        category: One of the five ingredient categories
        unit_type: Name of the unit it is measured in ("pumps")
        unit_cost: Price per unit when added
        available: False when soft-deleted
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    unit_type: str
    unit_cost: float
    available: bool = True


class IngredientGroupOut(BaseModel):
    """Ingredients of one category, in display order."""
    category: str
    title: str
    ingredients: List[IngredientOut]


class IngredientCatalogOut(BaseModel):
    """
    Ingredient catalog grouped for display.

    degraded is True when the store could not be read and the built-in
    seed ingredients are shown instead.
    """
    groups: List[IngredientGroupOut]
    degraded: bool = False
    error: Optional[str] = None


class UnitTypeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    display_name: str
    abbreviation: str
    display_order: int
