"""
Recipe Schemas for Coffee Club
==============================

Request/response models for the staff recipe endpoints.

A recipe is saved one scope at a time: the product's DEFAULT layer (no
size_id) or one size's override layer. Saving replaces the scope: entries
missing from the request are deleted, existing ones are updated in place,
new ones are inserted. Duplicate ingredient ids keep their first
occurrence and are reported in `dropped_duplicates`.

Usage:
------
    # Default recipe for a latte: 2 shots, 10 oz steamed milk
    PUT /admin/products/1/recipe
    {
        "entries": [
            {"ingredient_id": 1, "default_amount": 2, "is_required": true},
            {"ingredient_id": 7, "default_amount": 10, "use_default_price": false}
        ]
    }

    # Large size overrides the milk only
    PUT /admin/products/1/recipe?size_id=3
    {"entries": [{"ingredient_id": 7, "default_amount": 12}]}
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecipeEntryIn(BaseModel):
    """
    One recipe line in a save request.

    Attributes:
        ingredient_id: Ingredient in the recipe (required)
        default_amount: Amount included in the base price (>= 0)
        unit_type_override: Unit for this recipe only; falls back to the
                            ingredient's unit ("parts" for ratio recipes)
        is_required / is_removable / is_addable: Advisory flags, not enforced
        use_default_price: Charge departures from the default at unit cost
        custom_price: Stored for staff reference; not used in pricing
    """
    ingredient_id: int
    default_amount: float = Field(0.0, ge=0)
    unit_type_override: Optional[str] = None
    is_required: bool = False
    is_removable: bool = True
    is_addable: bool = True
    use_default_price: bool = True
    custom_price: Optional[float] = None


class RecipeSaveRequest(BaseModel):
    entries: List[RecipeEntryIn] = []


class RecipeEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    product_id: int
    size_id: Optional[int] = None
    ingredient_id: int
    default_amount: float
    unit_type_override: Optional[str] = None
    is_required: bool
    is_removable: bool
    is_addable: bool
    use_default_price: bool
    custom_price: Optional[float] = None


class RecipeSaveResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    entries: List[RecipeEntryOut] = []
    inserted: int = 0
    updated: int = 0
    deleted: int = 0
    dropped_duplicates: List[int] = []


class EffectiveRecipeOut(BaseModel):
    """Resolver preview: the recipe a buyer sees for a product and size."""
    product_id: int
    size_id: Optional[int] = None
    entries: List[RecipeEntryOut]
