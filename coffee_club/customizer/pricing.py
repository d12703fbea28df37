"""
Customization pricing.

The base price of a product (or of its selected size) already includes the
default amount of every recipe ingredient. Pricing a customized line
therefore only charges for departures from the recipe:

- recipe ingredient with use_default_price: (quantity - default) * unit_cost,
  which can be negative when the buyer removes something;
- recipe ingredient without use_default_price: no charge either way
  (custom_price is stored on the entry but deliberately not read here);
- ingredient outside the recipe (an add-in): quantity * unit_cost.

Lines measured in ratio parts are not costed. The final price is
base_price + adjustment with no floor. Tax is applied later, per cart line.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from .records import IngredientInfo, RecipeLine
from .units import is_costed, unit_ref


@dataclass(frozen=True)
class PriceQuote:
    base_price: float
    adjustment: float
    final_price: float


def _unit_cost(ingredient: Optional[IngredientInfo]) -> float:
    if ingredient is None:
        return 0.0
    return float(ingredient.unit_cost or 0.0)


def line_contribution(
    ingredient_id: int,
    quantity: float,
    entry: Optional[RecipeLine],
    ingredient: Optional[IngredientInfo],
) -> float:
    """Price contribution of one ingredient at the given quantity."""
    if entry is not None:
        if not entry.use_default_price:
            return 0.0
        if not is_costed(entry.unit_for(ingredient)):
            return 0.0
        return (quantity - entry.default_amount) * _unit_cost(ingredient)

    if quantity <= 0:
        return 0.0
    unit = ingredient.unit if ingredient is not None else unit_ref(None)
    if not is_costed(unit):
        return 0.0
    return quantity * _unit_cost(ingredient)


def price(
    base_price: float,
    effective_recipe: Mapping[int, RecipeLine],
    quantities: Mapping[int, float],
    ingredient_catalog: Mapping[int, IngredientInfo],
) -> PriceQuote:
    """
    Price a customized line.

    Args:
        base_price: Product or size price, default recipe included
        effective_recipe: Resolved recipe (ingredient_id -> RecipeLine)
        quantities: Buyer's current amounts (missing ids count as 0)
        ingredient_catalog: ingredient_id -> IngredientInfo for unit costs;
                            ids missing from it are costed at 0

    Returns:
        PriceQuote with the summed adjustment and base_price + adjustment
    """
    adjustment = 0.0

    for ingredient_id, entry in effective_recipe.items():
        adjustment += line_contribution(
            ingredient_id,
            quantities.get(ingredient_id, 0),
            entry,
            ingredient_catalog.get(ingredient_id),
        )

    for ingredient_id, quantity in quantities.items():
        if ingredient_id in effective_recipe:
            continue
        adjustment += line_contribution(
            ingredient_id,
            quantity,
            None,
            ingredient_catalog.get(ingredient_id),
        )

    return PriceQuote(
        base_price=base_price,
        adjustment=adjustment,
        final_price=base_price + adjustment,
    )


def price_session(session) -> PriceQuote:
    """Price a CustomizationSession against its own ingredient catalog."""
    return price(
        session.base_price,
        session.effective_recipe,
        session.quantities,
        session.ingredients,
    )
