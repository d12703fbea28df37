"""
Plain records the customization engine works on.

The engine never sees ORM rows: the service layer converts catalog rows into
these frozen dataclasses (see `from_row`) before handing them over, so the
resolver and the pricing function stay pure and trivially testable.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .units import UnitRef, unit_ref


# size_id value of the product-level default recipe layer
DEFAULT_SIZE = None


@dataclass(frozen=True)
class UnitTypeInfo:
    name: str
    display_name: str
    abbreviation: str = ""
    display_order: int = 0

    @classmethod
    def from_row(cls, row: Any) -> "UnitTypeInfo":
        return cls(
            name=row.name,
            display_name=row.display_name,
            abbreviation=row.abbreviation or "",
            display_order=row.display_order or 0,
        )


@dataclass(frozen=True)
class IngredientInfo:
    id: int
    name: str
    category: str
    unit_type: str
    unit_cost: float = 0.0
    available: bool = True

    @property
    def unit(self) -> UnitRef:
        return unit_ref(self.unit_type)

    @classmethod
    def from_row(cls, row: Any) -> "IngredientInfo":
        return cls(
            id=row.id,
            name=row.name,
            category=row.category,
            unit_type=row.unit_type,
            unit_cost=float(row.unit_cost or 0.0),
            available=bool(row.available),
        )


@dataclass(frozen=True)
class ProductInfo:
    id: int
    name: str
    price: Optional[float]
    tax_rate: float = 0.0
    has_sizes: bool = False
    fixed_size_ounces: Optional[float] = None
    category: str = "drink"
    description: Optional[str] = None

    @classmethod
    def from_row(cls, row: Any) -> "ProductInfo":
        return cls(
            id=row.id,
            name=row.name,
            price=float(row.price) if row.price is not None else None,
            tax_rate=float(row.tax_rate or 0.0),
            has_sizes=bool(row.has_sizes),
            fixed_size_ounces=row.fixed_size_ounces,
            category=row.category,
            description=row.description,
        )


@dataclass(frozen=True)
class SizeInfo:
    id: int
    product_id: int
    size_name: str
    price: float
    size_ounces: Optional[float] = None
    display_order: int = 0
    available: bool = True

    @classmethod
    def from_row(cls, row: Any) -> "SizeInfo":
        return cls(
            id=row.id,
            product_id=row.product_id,
            size_name=row.size_name,
            price=float(row.price),
            size_ounces=row.size_ounces,
            display_order=row.display_order or 0,
            available=bool(row.available),
        )


@dataclass(frozen=True)
class RecipeLine:
    """
    One recipe entry, keyed by (product_id, size_id | DEFAULT, ingredient_id).

    The is_required / is_removable / is_addable flags are advisory: nothing
    in the engine enforces them. custom_price is carried for display only;
    the pricing function does not read it.
    """

    product_id: int
    ingredient_id: int
    default_amount: float
    size_id: Optional[int] = DEFAULT_SIZE
    unit_type_override: Optional[str] = None
    is_required: bool = False
    is_removable: bool = True
    is_addable: bool = True
    use_default_price: bool = True
    custom_price: Optional[float] = None
    id: Optional[int] = None

    @property
    def is_default_layer(self) -> bool:
        return self.size_id is DEFAULT_SIZE

    def unit_for(self, ingredient: Optional[IngredientInfo]) -> UnitRef:
        """Override unit if set, else the ingredient's own unit."""
        if self.unit_type_override:
            return unit_ref(self.unit_type_override)
        if ingredient is not None:
            return ingredient.unit
        return unit_ref(None)

    @classmethod
    def from_row(cls, row: Any) -> "RecipeLine":
        return cls(
            id=row.id,
            product_id=row.product_id,
            size_id=row.size_id,
            ingredient_id=row.ingredient_id,
            default_amount=float(row.default_amount or 0.0),
            unit_type_override=row.unit_type_override,
            is_required=bool(row.is_required),
            is_removable=bool(row.is_removable),
            is_addable=bool(row.is_addable),
            use_default_price=bool(row.use_default_price),
            custom_price=row.custom_price,
        )
