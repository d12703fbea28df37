"""
Unit references and unit display helpers.

A recipe line is measured either in a catalog unit (shots, pumps, oz, ...)
or in ratio "parts". The two are kept apart as a closed union:

    UnitRef = CatalogUnit | RatioPart

RatioPart amounts are proportions of the drink, not absolute quantities,
so they are never costed through the ingredient catalog.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Union


RATIO_PART_NAME = "parts"


@dataclass(frozen=True)
class CatalogUnit:
    """A unit defined in the UnitType catalog, referenced by its name."""

    name: str


@dataclass(frozen=True)
class RatioPart:
    """Ratio-based amount ("2 parts espresso to 1 part milk")."""

    name: str = RATIO_PART_NAME


UnitRef = Union[CatalogUnit, RatioPart]


# Built-in labels used when the UnitType catalog has no row for a unit
_DEFAULT_LABELS = {
    "shots": "Shots",
    "pumps": "Pumps",
    "oz": "Ounces",
    "tsp": "Teaspoons",
    "packets": "Packets",
    "count": "Count",
    "parts": "Parts",
}

_DEFAULT_ABBREVIATIONS = {
    "shots": "shot",
    "pumps": "pump",
    "oz": "oz",
    "tsp": "tsp",
    "packets": "packet",
    "count": "",
    "parts": "Part",
}

# Abbreviations that read the same in singular and plural
_INVARIANT_ABBREVIATIONS = {"oz", "tsp"}


def unit_ref(name: Optional[str]) -> UnitRef:
    """Build the UnitRef for a stored unit name."""
    normalized = (name or "").strip().lower()
    if normalized == RATIO_PART_NAME:
        return RatioPart()
    return CatalogUnit(name=normalized)


def is_costed(unit: UnitRef) -> bool:
    """Only catalog units carry a per-unit cost."""
    return isinstance(unit, CatalogUnit)


def unit_label(unit: UnitRef, unit_types: Optional[Mapping[str, object]] = None) -> str:
    """
    Human label for a unit ("Shots", "Pumps").

    Args:
        unit: The unit reference
        unit_types: Optional mapping of unit name -> object with a
                    `display_name` attribute (catalog rows or UnitTypeInfo)
    """
    row = (unit_types or {}).get(unit.name)
    if row is not None and getattr(row, "display_name", None):
        return row.display_name
    return _DEFAULT_LABELS.get(unit.name, unit.name)


def unit_abbreviation(unit: UnitRef, unit_types: Optional[Mapping[str, object]] = None) -> str:
    """Short form of a unit ("shot", "pump", "oz"); "" for plain counts."""
    if isinstance(unit, RatioPart):
        return _DEFAULT_ABBREVIATIONS[RATIO_PART_NAME]
    row = (unit_types or {}).get(unit.name)
    if row is not None and getattr(row, "abbreviation", None) is not None:
        return row.abbreviation
    return _DEFAULT_ABBREVIATIONS.get(unit.name, unit.name)


def unit_display(
    unit: UnitRef,
    amount: float,
    unit_types: Optional[Mapping[str, object]] = None,
) -> str:
    """
    Abbreviation pluralised for an amount.

    Examples:
        unit_display(CatalogUnit("shots"), 1) -> "shot"
        unit_display(CatalogUnit("shots"), 2) -> "shots"
        unit_display(CatalogUnit("oz"), 12) -> "oz"
        unit_display(RatioPart(), 2) -> "Parts"
        unit_display(CatalogUnit("count"), 3) -> ""
    """
    abbrev = unit_abbreviation(unit, unit_types)
    if not abbrev:
        return ""
    if amount == 1:
        return abbrev
    if isinstance(unit, RatioPart):
        return "Parts"
    if abbrev in _INVARIANT_ABBREVIATIONS or abbrev.endswith("s"):
        return abbrev
    return abbrev + "s"
