"""
Dialog views over a customization session.

The dialog shows two lists, both derived purely from current quantities:

- "current recipe": every ingredient with an amount above 0;
- "available to add": every known ingredient at 0, including recipe
  ingredients the buyer reduced to nothing.

Both lists are grouped by ingredient category in a fixed order and sorted by
name within a group.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from .records import IngredientInfo
from .session import CustomizationSession
from .units import unit_display, unit_label


CATEGORY_GROUPS = (
    ("base_drink", "Base Drinks"),
    ("sugar", "Sugars"),
    ("liquid_creamer", "Liquid Creamers"),
    ("topping", "Toppings"),
    ("add_in", "Add-ins"),
)

# Categories outside the closed set are shown with the add-ins
_FALLBACK_CATEGORY = "add_in"


@dataclass(frozen=True)
class ViewItem:
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


@dataclass(frozen=True)
class ViewGroup:
    category: str
    title: str
    items: List[ViewItem]


def _view_item(
    session: CustomizationSession,
    ingredient_id: int,
    unit_types: Optional[Mapping[str, object]],
) -> Optional[ViewItem]:
    ingredient: Optional[IngredientInfo] = session.ingredient(ingredient_id)
    if ingredient is None:
        return None
    entry = session.effective_recipe.get(ingredient_id)
    unit = entry.unit_for(ingredient) if entry is not None else ingredient.unit
    amount = session.quantity_of(ingredient_id)
    return ViewItem(
        ingredient_id=ingredient_id,
        name=ingredient.name,
        category=ingredient.category,
        amount=amount,
        unit_type=unit.name,
        unit_label=unit_label(unit, unit_types),
        unit_display=unit_display(unit, amount, unit_types),
        unit_cost=ingredient.unit_cost,
        line_cost=ingredient.unit_cost * amount,
        in_recipe=entry is not None,
        default_amount=entry.default_amount if entry is not None else 0,
    )


def group_by_category(items: List[Any]) -> List[ViewGroup]:
    """
    Group items in display order, dropping empty groups.

    Items only need `category` and `name`, so catalog records
    (IngredientInfo) can be grouped the same way as ViewItems.
    """
    known = {key for key, _ in CATEGORY_GROUPS}
    buckets: Dict[str, List[ViewItem]] = {key: [] for key, _ in CATEGORY_GROUPS}
    for item in items:
        key = item.category if item.category in known else _FALLBACK_CATEGORY
        buckets[key].append(item)

    groups = []
    for key, title in CATEGORY_GROUPS:
        if buckets[key]:
            ordered = sorted(buckets[key], key=lambda i: (i.name or "").lower())
            groups.append(ViewGroup(category=key, title=title, items=ordered))
    return groups


def current_recipe_view(
    session: CustomizationSession,
    unit_types: Optional[Mapping[str, object]] = None,
) -> List[ViewGroup]:
    """Ingredients currently in the drink (amount > 0)."""
    ids = list(session.effective_recipe.keys()) + session.add_in_ids()
    items = []
    for ingredient_id in ids:
        if session.quantity_of(ingredient_id) > 0:
            item = _view_item(session, ingredient_id, unit_types)
            if item is not None:
                items.append(item)
    return group_by_category(items)


def available_to_add_view(
    session: CustomizationSession,
    unit_types: Optional[Mapping[str, object]] = None,
) -> List[ViewGroup]:
    """
    Ingredients at 0 that the buyer can add.

    Soft-deleted ingredients are offered only while they are part of the
    current recipe.
    """
    ids = list(session.ingredients.keys())
    items = []
    for ingredient_id in ids:
        if not session.is_known(ingredient_id):
            continue
        if session.quantity_of(ingredient_id) == 0:
            item = _view_item(session, ingredient_id, unit_types)
            if item is not None:
                items.append(item)
    return group_by_category(items)
