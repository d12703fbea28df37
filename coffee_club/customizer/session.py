"""
Customization session state.

A session is created when a buyer opens the customization dialog for one
product (and optional size) and holds the buyer's chosen quantity for each
ingredient. It is seeded from the effective recipe and changed only through
`adjust`, which returns a new session.

Quantities invariant:
- every ingredient of the effective recipe has a quantity (possibly 0);
- an ingredient outside the effective recipe appears only while its
  quantity is above 0 (an add-in brought back to 0 is dropped).
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Mapping, Optional

from .records import IngredientInfo, RecipeLine


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomizationSession:
    product_id: int
    selected_size_id: Optional[int]
    base_price: float
    effective_recipe: Mapping[int, RecipeLine] = field(default_factory=dict)
    # Lookup for names and unit costs; may include soft-deleted recipe rows
    ingredients: Mapping[int, IngredientInfo] = field(default_factory=dict)
    quantities: Mapping[int, float] = field(default_factory=dict)

    def quantity_of(self, ingredient_id: int) -> float:
        """Current amount; untouched ingredients count as 0."""
        return self.quantities.get(ingredient_id, 0)

    def is_known(self, ingredient_id: int) -> bool:
        """Recipe ingredients, plus catalog ingredients that are not soft-deleted."""
        if ingredient_id in self.effective_recipe:
            return True
        ingredient = self.ingredients.get(ingredient_id)
        return ingredient is not None and ingredient.available

    def ingredient(self, ingredient_id: int) -> Optional[IngredientInfo]:
        return self.ingredients.get(ingredient_id)

    def add_in_ids(self) -> list:
        """Ingredients the buyer added that are not part of the recipe."""
        return [
            ing_id for ing_id, amount in self.quantities.items()
            if ing_id not in self.effective_recipe and amount > 0
        ]


def initialize(
    effective_recipe: Mapping[int, RecipeLine],
    available_ingredients: Iterable[IngredientInfo],
    *,
    product_id: int,
    selected_size_id: Optional[int] = None,
    base_price: float = 0.0,
) -> CustomizationSession:
    """
    Seed a session from an effective recipe.

    Every recipe ingredient starts at its default amount. Every other known
    ingredient is "not yet added": it has no entry in `quantities` and is
    treated as 0 until the buyer touches it.
    """
    ingredients: Dict[int, IngredientInfo] = {ing.id: ing for ing in available_ingredients}
    quantities: Dict[int, float] = {
        ing_id: entry.default_amount for ing_id, entry in effective_recipe.items()
    }
    return CustomizationSession(
        product_id=product_id,
        selected_size_id=selected_size_id,
        base_price=base_price,
        effective_recipe=dict(effective_recipe),
        ingredients=ingredients,
        quantities=quantities,
    )


def adjust(session: CustomizationSession, ingredient_id: int, delta: float) -> CustomizationSession:
    """
    Change one ingredient's quantity by `delta`, clamping at 0.

    There is no upper bound and the advisory recipe flags (required,
    removable, addable) are not enforced. An ingredient id the session does
    not know is ignored and the same session is returned.
    """
    if not session.is_known(ingredient_id):
        logger.debug("Ignoring adjustment for unknown ingredient %s", ingredient_id)
        return session

    new_amount = max(0, session.quantity_of(ingredient_id) + delta)

    quantities = dict(session.quantities)
    if new_amount == 0 and ingredient_id not in session.effective_recipe:
        quantities.pop(ingredient_id, None)
    else:
        quantities[ingredient_id] = new_amount

    logger.debug(
        "Adjusted ingredient %s by %s -> %s (product %s)",
        ingredient_id, delta, new_amount, session.product_id,
    )
    return replace(session, quantities=quantities)


def reseed(
    session: CustomizationSession,
    effective_recipe: Mapping[int, RecipeLine],
    *,
    selected_size_id: Optional[int],
    base_price: float,
) -> CustomizationSession:
    """
    Rebuild a session for a new effective recipe (size change).

    Recipe ingredients reset to the new defaults. Add-ins the buyer already
    chose are kept as long as they are still outside the new recipe.
    """
    quantities: Dict[int, float] = {
        ing_id: entry.default_amount for ing_id, entry in effective_recipe.items()
    }
    for ing_id in session.add_in_ids():
        if ing_id not in effective_recipe:
            quantities[ing_id] = session.quantities[ing_id]

    return replace(
        session,
        selected_size_id=selected_size_id,
        base_price=base_price,
        effective_recipe=dict(effective_recipe),
        quantities=quantities,
    )
