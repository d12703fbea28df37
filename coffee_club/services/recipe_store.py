"""
Recipe Store Write Path for Coffee Club
=======================================

Staff-facing save of one recipe scope: `(product_id, size_id | DEFAULT)`.
The resolver assumes at most one entry per (scope, ingredient), and this
module is what guarantees it.

Save Semantics:
---------------
1. **Validation**: The shop id, the product id and every ingredient id must
   be real values (not empty, not a placeholder). The product, the size and
   the ingredients must exist. Failures reject the whole save.

2. **Deduplication**: Entries are deduplicated by ingredient_id, keeping
   the first occurrence. Dropped duplicates are logged at WARNING and
   reported back, but do not fail the save.

3. **Diff-based upsert**: Stored rows of the same scope are compared with
   the new list:
   - ingredient no longer present -> row deleted
   - ingredient still present -> row updated in place (same row id)
   - new ingredient -> row inserted
   Rows keep their identity across saves, so readers holding an entry id
   never see it vanish and reappear.

Result Shape:
-------------
`set_recipe` never raises for bad input or store failures; it returns a
RecipeSaveResult with `success` and `error`, and the route decides how to
present it.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import get_shop_id, is_placeholder_id
from ..customizer.records import DEFAULT_SIZE, RecipeLine
from ..models import Ingredient, Product, ProductSize, RecipeEntry


logger = logging.getLogger(__name__)


# Stored fields a save may set, with their defaults
_ENTRY_DEFAULTS: Dict[str, Any] = {
    "default_amount": 0.0,
    "unit_type_override": None,
    "is_required": False,
    "is_removable": True,
    "is_addable": True,
    "use_default_price": True,
    "custom_price": None,
}


class RecipeValidationError(ValueError):
    """Raised when a recipe save carries missing or placeholder identifiers."""


@dataclass
class RecipeSaveResult:
    success: bool
    error: Optional[str] = None
    entries: List[RecipeLine] = field(default_factory=list)
    inserted: int = 0
    updated: int = 0
    deleted: int = 0
    dropped_duplicates: List[Any] = field(default_factory=list)


def _get(entry: Any, key: str, default: Any = None) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(key, default)
    return getattr(entry, key, default)


def _normalize_entry(entry: Any) -> Dict[str, Any]:
    """Map an input entry (dict or object) to stored field values."""
    amount = _get(entry, "default_amount")
    if amount is None:
        amount = _get(entry, "amount", 0.0)
    unit_override = _get(entry, "unit_type_override")
    if unit_override is None:
        unit_override = _get(entry, "unit_type")

    values = dict(_ENTRY_DEFAULTS)
    values.update({
        "default_amount": float(amount or 0.0),
        "unit_type_override": unit_override or None,
    })
    for flag in ("is_required", "is_removable", "is_addable", "use_default_price"):
        value = _get(entry, flag)
        if value is not None:
            values[flag] = bool(value)
    custom_price = _get(entry, "custom_price")
    values["custom_price"] = float(custom_price) if custom_price is not None else None
    return values


def dedupe_entries(entries: Iterable[Any]) -> tuple:
    """
    Keep the first entry per ingredient_id.

    Returns:
        (kept entries, list of dropped ingredient ids)
    """
    seen = set()
    kept = []
    dropped = []
    for entry in entries:
        ingredient_id = _get(entry, "ingredient_id")
        if ingredient_id in seen:
            dropped.append(ingredient_id)
            continue
        seen.add(ingredient_id)
        kept.append(entry)
    return kept, dropped


def _validate(
    db: Session,
    shop_id: Any,
    product_id: Any,
    size_id: Optional[int],
    entries: List[Any],
) -> None:
    if is_placeholder_id(shop_id):
        raise RecipeValidationError("Shop ID not configured")
    if is_placeholder_id(product_id):
        raise RecipeValidationError("Product ID is required")

    for entry in entries:
        if is_placeholder_id(_get(entry, "ingredient_id")):
            raise RecipeValidationError("Every recipe entry needs an ingredient ID")
        amount = _get(entry, "default_amount", _get(entry, "amount", 0.0))
        if amount is not None and float(amount) < 0:
            raise RecipeValidationError(
                f"Default amount for ingredient {_get(entry, 'ingredient_id')} cannot be negative"
            )

    if db.get(Product, product_id) is None:
        raise RecipeValidationError(f"Product {product_id} does not exist")

    if size_id is not DEFAULT_SIZE:
        size = db.get(ProductSize, size_id)
        if size is None or size.product_id != product_id:
            raise RecipeValidationError(f"Size {size_id} does not belong to product {product_id}")

    ingredient_ids = {_get(entry, "ingredient_id") for entry in entries}
    if ingredient_ids:
        found = {
            row.id for row in db.query(Ingredient.id).filter(Ingredient.id.in_(ingredient_ids)).all()
        }
        missing = sorted(ingredient_ids - found)
        if missing:
            raise RecipeValidationError(f"Unknown ingredient IDs: {missing}")


def set_recipe(
    db: Session,
    product_id: int,
    size_id: Optional[int],
    entries: Iterable[Any],
    shop_id: Optional[str] = None,
) -> RecipeSaveResult:
    """
    Replace one recipe scope with `entries` using a diff-based upsert.

    Args:
        db: Database session (committed on success, rolled back on failure)
        product_id: Product whose recipe is saved
        size_id: Size id, or DEFAULT_SIZE (None) for the default layer
        entries: Dicts or objects with ingredient_id, default_amount (or
                 amount), unit_type_override (or unit_type), the advisory
                 flags, use_default_price and custom_price
        shop_id: Shop identifier; defaults to the configured SHOP_ID

    Returns:
        RecipeSaveResult; success=False with an error message on validation
        or store failure
    """
    if shop_id is None:
        shop_id = get_shop_id()

    entries = list(entries or [])
    kept, dropped = dedupe_entries(entries)
    if dropped:
        logger.warning(
            "Dropped %d duplicate recipe entries for product %s size %s: ingredients %s",
            len(dropped), product_id, size_id, dropped,
        )

    try:
        _validate(db, shop_id, product_id, size_id, kept)
    except RecipeValidationError as e:
        logger.info("Rejected recipe save for product %s size %s: %s", product_id, size_id, e)
        return RecipeSaveResult(success=False, error=str(e), dropped_duplicates=dropped)

    scope = db.query(RecipeEntry).filter(RecipeEntry.product_id == product_id)
    if size_id is DEFAULT_SIZE:
        scope = scope.filter(RecipeEntry.size_id.is_(None))
    else:
        scope = scope.filter(RecipeEntry.size_id == size_id)
    existing = {row.ingredient_id: row for row in scope.all()}

    wanted = {_get(entry, "ingredient_id"): _normalize_entry(entry) for entry in kept}
    result = RecipeSaveResult(success=True, dropped_duplicates=dropped)

    try:
        for ingredient_id, row in existing.items():
            if ingredient_id not in wanted:
                db.delete(row)
                result.deleted += 1

        for entry in kept:
            ingredient_id = _get(entry, "ingredient_id")
            values = wanted[ingredient_id]
            row = existing.get(ingredient_id)
            if row is not None:
                for key, value in values.items():
                    setattr(row, key, value)
                row.shop_id = shop_id
                result.updated += 1
            else:
                db.add(RecipeEntry(
                    shop_id=shop_id,
                    product_id=product_id,
                    size_id=size_id,
                    ingredient_id=ingredient_id,
                    **values,
                ))
                result.inserted += 1

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Recipe save failed for product %s size %s: %s", product_id, size_id, e, exc_info=True)
        return RecipeSaveResult(success=False, error=str(e), dropped_duplicates=dropped)

    saved = scope.order_by(RecipeEntry.id).all()
    result.entries = [RecipeLine.from_row(row) for row in saved]
    logger.info(
        "Saved recipe for product %s size %s: %d inserted, %d updated, %d deleted",
        product_id, size_id, result.inserted, result.updated, result.deleted,
    )
    return result
