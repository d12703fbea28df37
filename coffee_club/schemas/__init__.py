"""
Schemas Package for Coffee Club
===============================

This package contains all Pydantic models (schemas) used for API request
validation and response serialization.

Schema Organization:
--------------------
- **catalog.py**: Products, sizes, ingredients and unit types
- **recipes.py**: Staff recipe save and effective-recipe preview
- **customize.py**: Customization dialog requests, commands and views
- **cart.py**: Cart lines, totals and the checkout payload

Naming Conventions:
-------------------
- *Out: Response models (e.g., ProductOut) - what API returns
- *In: Items inside a request body (e.g., RecipeEntryIn)
- *Request: Complex request bodies (e.g., DialogOpenRequest)
- *Response: Complex response structures (e.g., ConfirmResponse)

Pydantic Configuration:
-----------------------
Most response models use `model_config = ConfigDict(from_attributes=True)`
so they can be created directly from ORM rows or engine records:

    line = state.confirmed_line
    return CartLineOut.model_validate(line)

Usage:
------
    from coffee_club.schemas.customize import DialogOpenRequest, DialogOut
    from coffee_club.schemas import CartOut
"""

# Catalog schemas
from .catalog import (
    ProductOut,
    ProductSizeOut,
    IngredientOut,
    IngredientGroupOut,
    IngredientCatalogOut,
    UnitTypeOut,
)

# Recipe schemas
from .recipes import (
    RecipeEntryIn,
    RecipeSaveRequest,
    RecipeEntryOut,
    RecipeSaveResponse,
    EffectiveRecipeOut,
)

# Cart schemas
from .cart import (
    SnapshotEntryOut,
    CustomizationOut,
    CartLineOut,
    CartOut,
    CartItemAdd,
    CartQuantityUpdate,
    CheckoutOut,
)

# Customization schemas
from .customize import (
    DialogOpenRequest,
    AdjustCommandIn,
    SelectSizeCommandIn,
    DialogCommandsRequest,
    ViewItemOut,
    ViewGroupOut,
    DialogOut,
    ConfirmRequest,
    ConfirmResponse,
)

__all__ = [
    # Catalog
    "ProductOut",
    "ProductSizeOut",
    "IngredientOut",
    "IngredientGroupOut",
    "IngredientCatalogOut",
    "UnitTypeOut",
    # Recipes
    "RecipeEntryIn",
    "RecipeSaveRequest",
    "RecipeEntryOut",
    "RecipeSaveResponse",
    "EffectiveRecipeOut",
    # Cart
    "SnapshotEntryOut",
    "CustomizationOut",
    "CartLineOut",
    "CartOut",
    "CartItemAdd",
    "CartQuantityUpdate",
    "CheckoutOut",
    # Customization
    "DialogOpenRequest",
    "AdjustCommandIn",
    "SelectSizeCommandIn",
    "DialogCommandsRequest",
    "ViewItemOut",
    "ViewGroupOut",
    "DialogOut",
    "ConfirmRequest",
    "ConfirmResponse",
]
