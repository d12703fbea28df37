"""
Customization dialog commands and reducer.

Buyer interactions arrive as typed commands and are applied by `reduce`,
which returns a new DialogState with a fresh price quote:

    Adjust(ingredient_id, delta)   change one ingredient amount
    SelectSize(size_id)            switch size: new recipe, new base price
    Confirm(quantity)              freeze the session into a CartLine

Everything the reducer needs (product, sizes, recipe entries for every
scope, ingredient catalog) is loaded once when the dialog opens and carried
in a DialogContext; nothing is read from global state.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Mapping, Optional, Tuple, Union

from .cart import CartLine, confirm
from .pricing import PriceQuote, price_session
from .records import IngredientInfo, ProductInfo, RecipeLine, SizeInfo, UnitTypeInfo
from .resolver import resolve
from .session import CustomizationSession, adjust, initialize, reseed


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Adjust:
    ingredient_id: int
    delta: float


@dataclass(frozen=True)
class SelectSize:
    size_id: Optional[int]


@dataclass(frozen=True)
class Confirm:
    quantity: int = 1


Command = Union[Adjust, SelectSize, Confirm]


@dataclass(frozen=True)
class DialogContext:
    """Everything read from the store when the dialog opened."""

    product: ProductInfo
    sizes: Tuple[SizeInfo, ...] = ()
    recipe_entries: Tuple[RecipeLine, ...] = ()
    ingredients: Tuple[IngredientInfo, ...] = ()
    unit_types: Mapping[str, UnitTypeInfo] = field(default_factory=dict)
    degraded: bool = False

    @property
    def sized(self) -> bool:
        """A non-empty available size set is authoritative over Product.price."""
        return bool(self.sizes)

    def size(self, size_id: Optional[int]) -> Optional[SizeInfo]:
        for size in self.sizes:
            if size.id == size_id:
                return size
        return None

    def default_size(self) -> Optional[SizeInfo]:
        if not self.sizes:
            return None
        return sorted(self.sizes, key=lambda s: (s.display_order, s.id))[0]


@dataclass(frozen=True)
class DialogState:
    context: DialogContext
    session: CustomizationSession
    quote: PriceQuote
    confirmed_line: Optional[CartLine] = None

    @property
    def is_confirmed(self) -> bool:
        return self.confirmed_line is not None

    @property
    def selected_size(self) -> Optional[SizeInfo]:
        return self.context.size(self.session.selected_size_id)


def base_price_for(context: DialogContext, size: Optional[SizeInfo]) -> float:
    if size is not None:
        return size.price
    return float(context.product.price or 0.0)


def open_dialog(context: DialogContext, size_id: Optional[int] = None) -> DialogState:
    """
    Build the initial dialog state for a product.

    A sized product opens on the requested size, or on its first size by
    display order when the request names none (or an unknown one).
    """
    size = None
    if context.sized:
        size = context.size(size_id) or context.default_size()

    selected_size_id = size.id if size is not None else None
    effective = resolve(context.product.id, selected_size_id, context.recipe_entries)
    session = initialize(
        effective,
        context.ingredients,
        product_id=context.product.id,
        selected_size_id=selected_size_id,
        base_price=base_price_for(context, size),
    )
    return DialogState(context=context, session=session, quote=price_session(session))


def reduce(state: DialogState, command: Command) -> DialogState:
    """Apply one command. A confirmed dialog ignores further commands."""
    if state.is_confirmed:
        logger.debug("Dialog for product %s already confirmed; ignoring %r",
                     state.session.product_id, command)
        return state

    if isinstance(command, Adjust):
        session = adjust(state.session, command.ingredient_id, command.delta)
        return replace(state, session=session, quote=price_session(session))

    if isinstance(command, SelectSize):
        context = state.context
        size = context.size(command.size_id)
        if context.sized and size is None:
            logger.debug("Unknown size %s for product %s", command.size_id, context.product.id)
            return state
        if not context.sized and command.size_id is not None:
            return state
        selected_size_id = size.id if size is not None else None
        effective = resolve(context.product.id, selected_size_id, context.recipe_entries)
        session = reseed(
            state.session,
            effective,
            selected_size_id=selected_size_id,
            base_price=base_price_for(context, size),
        )
        return replace(state, session=session, quote=price_session(session))

    if isinstance(command, Confirm):
        size = state.selected_size
        line = confirm(
            state.session,
            product_name=state.context.product.name,
            tax_rate=state.context.product.tax_rate,
            size_name=size.size_name if size is not None else None,
            quantity=max(1, command.quantity),
        )
        logger.info(
            "Confirmed %s (size %s): base %.2f, adjustment %.2f, final %.2f",
            line.product_name, line.selected_size_name, line.base_price,
            line.price_adjustment, line.final_price,
        )
        return replace(state, confirmed_line=line)

    raise TypeError(f"Unsupported command: {command!r}")


def dispatch(state: DialogState, commands: List[Command]) -> DialogState:
    """Apply a sequence of commands in order."""
    for command in commands:
        state = reduce(state, command)
    return state
