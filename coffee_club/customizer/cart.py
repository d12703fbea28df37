"""
Cart lines and the cart aggregator.

Confirming a customization session freezes it into a CartLine: the final
price, the tax rate, and a snapshot of every ingredient in the drink. A
CartLine keeps no reference to the recipe store or the session, so later
recipe edits never change what is already in a cart. Changing a line's
quantity re-derives totals only.
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from .pricing import line_contribution, price_session
from .records import ProductInfo, SizeInfo
from .session import CustomizationSession
from .tax_utils import CartTotals, calculate_cart_totals, calculate_line_tax, round_money


def _new_line_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class SnapshotEntry:
    """One ingredient of the confirmed drink, for the order label."""

    ingredient_id: int
    ingredient_name: str
    amount: float
    unit_type: str
    was_in_default_recipe: bool
    default_amount: float


@dataclass(frozen=True)
class Customization:
    """A departure from the recipe default, used for price-change display."""

    ingredient_id: int
    ingredient_name: str
    amount: float
    default_amount: float
    unit_type: str
    cost: float

    @property
    def difference(self) -> float:
        return self.amount - self.default_amount

    @property
    def action(self) -> str:
        if self.difference > 0:
            return "add"
        if self.difference < 0:
            return "remove"
        return "modify"


@dataclass(frozen=True)
class CartLine:
    product_id: int
    product_name: str
    base_price: float
    price_adjustment: float
    final_price: float
    tax_rate: float
    quantity: int = 1
    selected_size_id: Optional[int] = None
    selected_size_name: Optional[str] = None
    recipe_snapshot: Tuple[SnapshotEntry, ...] = ()
    customizations: Tuple[Customization, ...] = ()
    line_id: str = field(default_factory=_new_line_id)

    @property
    def is_plain(self) -> bool:
        """Lines without any ingredient detail can be merged by quantity."""
        return not self.recipe_snapshot and not self.customizations

    @property
    def subtotal(self) -> float:
        return self.final_price * self.quantity

    @property
    def tax(self) -> float:
        return calculate_line_tax(self.subtotal, self.tax_rate)

    @property
    def total(self) -> float:
        return self.subtotal + self.tax

    def with_quantity(self, quantity: int) -> "CartLine":
        return replace(self, quantity=quantity)


def confirm(
    session: CustomizationSession,
    *,
    product_name: str,
    tax_rate: float,
    size_name: Optional[str] = None,
    quantity: int = 1,
) -> CartLine:
    """
    Freeze a session into a CartLine.

    The snapshot lists every ingredient with an amount above 0: recipe
    ingredients first (in recipe order), then add-ins. Ingredients left at
    their default amount stay in the snapshot but are not customizations;
    customizations are always a subset of the snapshot. The price adjustment
    comes from the pricing function, so a recipe ingredient removed entirely
    still lowers the final price.
    """
    quote = price_session(session)
    snapshot: List[SnapshotEntry] = []
    customizations: List[Customization] = []

    def record(ingredient_id: int, amount: float, entry) -> None:
        # Ingredients taken down to 0 are off the label and not listed
        if amount <= 0:
            return
        ingredient = session.ingredient(ingredient_id)
        name = ingredient.name if ingredient is not None else str(ingredient_id)
        if entry is not None:
            unit_name = entry.unit_for(ingredient).name
            default_amount = entry.default_amount
        else:
            unit_name = ingredient.unit.name if ingredient is not None else ""
            default_amount = 0

        snapshot.append(SnapshotEntry(
            ingredient_id=ingredient_id,
            ingredient_name=name,
            amount=amount,
            unit_type=unit_name,
            was_in_default_recipe=entry is not None,
            default_amount=default_amount,
        ))
        if amount != default_amount:
            customizations.append(Customization(
                ingredient_id=ingredient_id,
                ingredient_name=name,
                amount=amount,
                default_amount=default_amount,
                unit_type=unit_name,
                cost=line_contribution(ingredient_id, amount, entry, ingredient),
            ))

    for ingredient_id, entry in session.effective_recipe.items():
        record(ingredient_id, session.quantity_of(ingredient_id), entry)

    for ingredient_id in session.add_in_ids():
        record(ingredient_id, session.quantity_of(ingredient_id), None)

    return CartLine(
        product_id=session.product_id,
        product_name=product_name,
        selected_size_id=session.selected_size_id,
        selected_size_name=size_name,
        base_price=session.base_price,
        price_adjustment=round_money(quote.adjustment),
        final_price=round_money(quote.final_price),
        tax_rate=tax_rate,
        quantity=quantity,
        recipe_snapshot=tuple(snapshot),
        customizations=tuple(customizations),
    )


def plain_line(
    product: ProductInfo,
    size: Optional[SizeInfo] = None,
    quantity: int = 1,
) -> CartLine:
    """CartLine for an item added without customization."""
    base_price = size.price if size is not None else float(product.price or 0.0)
    return CartLine(
        product_id=product.id,
        product_name=product.name,
        selected_size_id=size.id if size is not None else None,
        selected_size_name=size.size_name if size is not None else None,
        base_price=base_price,
        price_adjustment=0.0,
        final_price=base_price,
        tax_rate=product.tax_rate,
        quantity=quantity,
    )


class Cart:
    """
    Ordered collection of CartLines for one buyer.

    Plain lines for the same product and size merge by quantity; customized
    lines are always kept separate.
    """

    def __init__(self, cart_id: Optional[str] = None):
        self.cart_id = cart_id or uuid.uuid4().hex
        self.lines: List[CartLine] = []

    def __len__(self) -> int:
        return len(self.lines)

    def get_line(self, line_id: str) -> Optional[CartLine]:
        for line in self.lines:
            if line.line_id == line_id:
                return line
        return None

    def add_line(self, line: CartLine) -> CartLine:
        """Add a line, merging plain duplicates. Returns the stored line."""
        if line.is_plain:
            for index, existing in enumerate(self.lines):
                if (
                    existing.is_plain
                    and existing.product_id == line.product_id
                    and existing.selected_size_id == line.selected_size_id
                ):
                    merged = existing.with_quantity(existing.quantity + line.quantity)
                    self.lines[index] = merged
                    return merged
        self.lines.append(line)
        return line

    def update_quantity(self, line_id: str, quantity: int) -> bool:
        """Set a line's quantity; 0 or less removes the line. False if unknown."""
        for index, existing in enumerate(self.lines):
            if existing.line_id == line_id:
                if quantity <= 0:
                    del self.lines[index]
                else:
                    self.lines[index] = existing.with_quantity(quantity)
                return True
        return False

    def remove_line(self, line_id: str) -> bool:
        before = len(self.lines)
        self.lines = [line for line in self.lines if line.line_id != line_id]
        return len(self.lines) < before

    def clear(self) -> None:
        self.lines = []

    def totals(self) -> CartTotals:
        return calculate_cart_totals(self.lines)
