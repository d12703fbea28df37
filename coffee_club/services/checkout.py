"""
Checkout Hand-off for Coffee Club
=================================

Builds the payload handed to the external checkout/order collaborator.
That collaborator persists the order, debits the buyer's prepaid balance
and records the purchase transaction; this module only shapes the cart.

Per line:
- unit_price = final_price (customizations included, tax excluded)
- subtotal = unit_price * quantity
- tax_amount = subtotal * tax_rate
- total = subtotal + tax_amount

Customizations are labelled with an action: "add" when the buyer chose more
than the recipe default, "remove" when less.
"""

from typing import Any, Dict

from ..customizer.cart import Cart, CartLine
from ..customizer.tax_utils import round_money


def _line_payload(line: CartLine) -> Dict[str, Any]:
    return {
        "line_id": line.line_id,
        "product_id": line.product_id,
        "product_name": line.product_name,
        "selected_size": line.selected_size_name,
        "quantity": line.quantity,
        "unit_price": round_money(line.final_price),
        "tax_rate": line.tax_rate,
        "tax_amount": round_money(line.tax),
        "subtotal": round_money(line.subtotal),
        "total": round_money(line.total),
        "recipe": [
            {
                "ingredient_id": entry.ingredient_id,
                "ingredient_name": entry.ingredient_name,
                "amount": entry.amount,
                "unit_type": entry.unit_type,
                "was_in_default_recipe": entry.was_in_default_recipe,
                "default_amount": entry.default_amount,
            }
            for entry in line.recipe_snapshot
        ],
        "customizations": [
            {
                "ingredient_id": cust.ingredient_id,
                "amount": cust.amount,
                "action": cust.action,
                "cost_adjustment": round_money(cust.cost),
            }
            for cust in line.customizations
        ],
    }


def build_checkout_payload(cart: Cart) -> Dict[str, Any]:
    """
    Shape a cart for the checkout collaborator.

    Raises:
        ValueError: If the cart is empty
    """
    if not cart.lines:
        raise ValueError("Cart is empty")

    totals = cart.totals()
    return {
        "cart_id": cart.cart_id,
        "items": [_line_payload(line) for line in cart.lines],
        "subtotal": totals.subtotal,
        "tax": totals.tax,
        "total": totals.total,
    }
