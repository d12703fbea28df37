"""
Customization Dialog Schemas for Coffee Club
============================================

Request/response models for the buyer-facing customization dialog.

Dialog Lifecycle:
-----------------
1. POST /customize/dialogs opens a dialog for a product (and optional size)
   and returns a dialog_id with the initial recipe and price.
2. POST /customize/dialogs/{dialog_id}/commands applies one or more
   commands in order and returns the updated dialog.
3. POST /customize/dialogs/{dialog_id}/confirm freezes the dialog into a
   cart line. DELETE /customize/dialogs/{dialog_id} discards it.

Commands:
---------
Commands are a tagged union keyed by `type`:

    {"type": "adjust", "ingredient_id": 7, "delta": 2}
    {"type": "select_size", "size_id": 3}

`delta` may be negative. Amounts never drop below 0. Adjusting an
ingredient the dialog does not know is ignored.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .cart import CartLineOut, CartOut
from .catalog import ProductSizeOut


class DialogOpenRequest(BaseModel):
    """
    Open a customization dialog.

    Attributes:
        product_id: Product to customize
        size_id: Initial size; sized products default to their first size
    """
    product_id: int
    size_id: Optional[int] = None


class AdjustCommandIn(BaseModel):
    type: Literal["adjust"]
    ingredient_id: int
    delta: float


class SelectSizeCommandIn(BaseModel):
    type: Literal["select_size"]
    size_id: Optional[int] = None


DialogCommandIn = Annotated[
    Union[AdjustCommandIn, SelectSizeCommandIn],
    Field(discriminator="type"),
]


class DialogCommandsRequest(BaseModel):
    commands: List[DialogCommandIn] = Field(..., min_length=1)


class ViewItemOut(BaseModel):
    """
    One ingredient row in the dialog.

    Attributes:
        amount: Buyer's current amount
        unit_label: Unit name for headers ("Pumps")
        unit_display: Abbreviation for the amount ("pump" / "pumps")
        line_cost: unit_cost * amount, for display only
        in_recipe: Whether the ingredient is part of the effective recipe
    """
    model_config = ConfigDict(from_attributes=True)

    ingredient_id: int
    name: str
    category: str
    amount: float
    unit_type: str
    unit_label: str
    unit_display: str
    unit_cost: float
    line_cost: float
    in_recipe: bool
    default_amount: float


class ViewGroupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    title: str
    items: List[ViewItemOut]


class DialogOut(BaseModel):
    """
    Current state of a customization dialog.

    degraded is True when the ingredient catalog could not be read and the
    built-in seed ingredients are offered instead.
    """
    dialog_id: str
    product_id: int
    product_name: str
    selected_size_id: Optional[int] = None
    sizes: List[ProductSizeOut] = []
    base_price: float
    price_adjustment: float
    final_price: float
    current_recipe: List[ViewGroupOut]
    available_to_add: List[ViewGroupOut]
    degraded: bool = False


class ConfirmRequest(BaseModel):
    """
    Confirm a dialog into a cart.

    Attributes:
        cart_id: Existing cart to add to; a new cart is created when omitted
                 or unknown
        quantity: Number of identical drinks
    """
    cart_id: Optional[str] = None
    quantity: int = Field(1, ge=1)


class ConfirmResponse(BaseModel):
    cart_id: str
    line: CartLineOut
    cart: CartOut
