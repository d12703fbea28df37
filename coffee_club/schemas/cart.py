"""
Cart Schemas for Coffee Club
============================

Response models for cart lines and cart totals, plus the request bodies for
adding plain items and changing quantities.

A cart line is frozen when it is created: its final price and its recipe
snapshot never change. Only its quantity can be edited; setting it to 0 or
less removes the line.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SnapshotEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ingredient_id: int
    ingredient_name: str
    amount: float
    unit_type: str
    was_in_default_recipe: bool
    default_amount: float


class CustomizationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ingredient_id: int
    ingredient_name: str
    amount: float
    default_amount: float
    difference: float
    unit_type: str
    cost: float
    action: str


class CartLineOut(BaseModel):
    """
    Response model for one cart line.

    Attributes:
        line_id: Identifier used for quantity changes and removal
        base_price: Product or size price (default recipe included)
        price_adjustment: Customization delta (can be negative)
        final_price: base_price + price_adjustment, per unit, before tax
        tax_rate: Rate applied to subtotal at checkout
        recipe_snapshot: Every ingredient in the drink, for the order label
        customizations: Only the departures from the recipe defaults
    """
    model_config = ConfigDict(from_attributes=True)

    line_id: str
    product_id: int
    product_name: str
    selected_size_id: Optional[int] = None
    selected_size_name: Optional[str] = None
    base_price: float
    price_adjustment: float
    final_price: float
    tax_rate: float
    quantity: int
    subtotal: float
    recipe_snapshot: List[SnapshotEntryOut] = []
    customizations: List[CustomizationOut] = []


class CartOut(BaseModel):
    cart_id: str
    lines: List[CartLineOut]
    subtotal: float
    tax: float
    total: float


class CartItemAdd(BaseModel):
    """Add a product without opening the customization dialog."""
    product_id: int
    size_id: Optional[int] = None
    quantity: int = Field(1, ge=1)


class CartQuantityUpdate(BaseModel):
    quantity: int


class CheckoutCustomizationOut(BaseModel):
    ingredient_id: int
    amount: float
    action: str
    cost_adjustment: float


class CheckoutItemOut(BaseModel):
    line_id: str
    product_id: int
    product_name: str
    selected_size: Optional[str] = None
    quantity: int
    unit_price: float
    tax_rate: float
    tax_amount: float
    subtotal: float
    total: float
    recipe: List[SnapshotEntryOut] = []
    customizations: List[CheckoutCustomizationOut] = []


class CheckoutOut(BaseModel):
    cart_id: str
    items: List[CheckoutItemOut]
    subtotal: float
    tax: float
    total: float
