"""
Drink Customization Engine.

Pure, ORM-free core of the ordering front end:

- resolver: merge the DEFAULT recipe layer with a size override layer
- session: the buyer's ingredient quantities, changed through `adjust`
- pricing: price adjustment and final line price from recipe deltas
- cart: freeze a session into a CartLine and total a cart
- commands: typed dialog commands and the reducer that applies them
- views: "current recipe" / "available to add" lists for the dialog
"""

from .records import (
    DEFAULT_SIZE,
    IngredientInfo,
    ProductInfo,
    RecipeLine,
    SizeInfo,
    UnitTypeInfo,
)
from .units import CatalogUnit, RatioPart, UnitRef, unit_ref
from .resolver import resolve
from .session import CustomizationSession, initialize, adjust
from .pricing import PriceQuote, price, price_session
from .cart import Cart, CartLine, Customization, SnapshotEntry, confirm, plain_line
from .commands import (
    Adjust,
    SelectSize,
    Confirm,
    Command,
    DialogContext,
    DialogState,
    open_dialog,
    reduce,
    dispatch,
)

__all__ = [
    "DEFAULT_SIZE",
    "IngredientInfo",
    "ProductInfo",
    "RecipeLine",
    "SizeInfo",
    "UnitTypeInfo",
    "CatalogUnit",
    "RatioPart",
    "UnitRef",
    "unit_ref",
    "resolve",
    "CustomizationSession",
    "initialize",
    "adjust",
    "PriceQuote",
    "price",
    "price_session",
    "Cart",
    "CartLine",
    "Customization",
    "SnapshotEntry",
    "confirm",
    "plain_line",
    "Adjust",
    "SelectSize",
    "Confirm",
    "Command",
    "DialogContext",
    "DialogState",
    "open_dialog",
    "reduce",
    "dispatch",
]
