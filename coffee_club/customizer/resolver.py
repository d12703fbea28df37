"""
Recipe resolution.

A product's recipe is stored in layers: the DEFAULT layer (size_id None)
applies to every size, and each size may carry its own entries. Resolving
for a selected size yields the *effective recipe*: one entry per ingredient
present in either the DEFAULT layer or the selected size's layer.

Overrides replace whole entries. When a size-specific entry exists for an
ingredient, no field of the DEFAULT entry survives for that size.
"""

from typing import Dict, Iterable, Optional

from .records import RecipeLine


EffectiveRecipe = Dict[int, RecipeLine]


def resolve(
    product_id: int,
    selected_size_id: Optional[int],
    recipe_entries: Iterable[RecipeLine],
) -> EffectiveRecipe:
    """
    Resolve the effective recipe for a product and an optional size.

    Args:
        product_id: Product being customized; entries for other products
                    are ignored
        selected_size_id: Selected size, or None for the DEFAULT layer only
        recipe_entries: Stored entries for the product (any scopes). At most
                        one entry per (size_id, ingredient_id) is assumed.

    Returns:
        Mapping of ingredient_id -> RecipeLine. Empty when the product has no
        configured recipe, which simply means it has nothing to customize.
    """
    entries = [e for e in recipe_entries if e.product_id == product_id]

    effective: EffectiveRecipe = {}
    for entry in entries:
        if entry.is_default_layer:
            effective[entry.ingredient_id] = entry

    if selected_size_id is not None:
        for entry in entries:
            if entry.size_id == selected_size_id:
                effective[entry.ingredient_id] = entry

    return effective
