"""
Tax and money utilities.

Tax is never part of a line's price: each cart line carries its own rate and
tax is applied once, to the line subtotal, when the cart is totalled.
"""

from dataclasses import dataclass
from typing import Iterable


def round_money(amount: float) -> float:
    """Round to 2 decimal places for currency."""
    return round(amount, 2)


@dataclass
class CartTotals:
    """Cart subtotal, tax and total, rounded to cents."""

    subtotal: float
    tax: float

    @property
    def total(self) -> float:
        return round_money(self.subtotal + self.tax)


def calculate_line_tax(line_subtotal: float, tax_rate: float) -> float:
    """Tax owed on one line subtotal (unrounded)."""
    return line_subtotal * (tax_rate or 0.0)


def calculate_cart_totals(lines: Iterable) -> CartTotals:
    """
    Sum cart lines into subtotal and tax.

    Args:
        lines: Objects exposing `subtotal` and `tax_rate`

    Returns:
        CartTotals; per-line amounts are summed unrounded and rounded once
    """
    subtotal = 0.0
    tax = 0.0
    for line in lines:
        subtotal += line.subtotal
        tax += calculate_line_tax(line.subtotal, line.tax_rate)

    return CartTotals(subtotal=round_money(subtotal), tax=round_money(tax))
