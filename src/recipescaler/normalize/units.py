"""Unit spelling normalization for consolidation keys and display."""

import numbers
from fractions import Fraction

# =============================================================================
# Unit Inflection Table
# =============================================================================

# Singular -> plural spellings of cooking units. Only spellings of the same
# unit are folded together; "tbsp" and "tablespoon" stay distinct and no unit
# is ever converted into another.
PLURAL_UNITS: dict[str, str] = {
    # Volume
    "cup": "cups",
    "tablespoon": "tablespoons",
    "teaspoon": "teaspoons",
    "milliliter": "milliliters",
    "millilitre": "millilitres",
    "liter": "liters",
    "litre": "litres",
    "fluid ounce": "fluid ounces",
    "pint": "pints",
    "quart": "quarts",
    "gallon": "gallons",
    # Weight
    "gram": "grams",
    "kilogram": "kilograms",
    "ounce": "ounces",
    "pound": "pounds",
    "lb": "lbs",
    # Count
    "piece": "pieces",
    "slice": "slices",
    "clove": "cloves",
    "head": "heads",
    "bunch": "bunches",
    "sprig": "sprigs",
    "can": "cans",
    "jar": "jars",
    "package": "packages",
    "pack": "packs",
    "bottle": "bottles",
    "bag": "bags",
    "box": "boxes",
    "stick": "sticks",
    "fillet": "fillets",
    "pinch": "pinches",
    "dash": "dashes",
    "handful": "handfuls",
}

SINGULAR_UNITS: dict[str, str] = {plural: singular for singular, plural in PLURAL_UNITS.items()}


def unit_key(unit: str) -> str:
    """
    Canonical spelling of a normalized unit, used in consolidation keys.

    Examples:
        "cups" -> "cup"
        "tsp." -> "tsp"
        "g" -> "g"
    """
    unit = unit.rstrip(".")
    return SINGULAR_UNITS.get(unit, unit)


def inflect_unit(unit: str, amount: numbers.Real, decimals: int = 2) -> str:
    """
    Singular or plural spelling of a unit for the displayed amount.

    Units outside the table are returned unchanged.
    """
    key = unit_key(unit)
    if key not in PLURAL_UNITS:
        return unit
    return PLURAL_UNITS[key] if round(Fraction(amount), decimals) > 1 else key
