"""Parse free-text quantities and render scaled amounts."""

from recipescaler.normalize.formatting import (
    FractionFormatter,
    decimal_to_fraction,
    format_quantity,
)
from recipescaler.normalize.quantity import (
    QUANTITY_GRAMMAR,
    GrammarRule,
    Quantity,
    QuantityParser,
    normalize_ingredient_name,
    normalize_unit,
    parse_quantity,
    replace_vulgar_fractions,
)
from recipescaler.normalize.units import PLURAL_UNITS, inflect_unit, unit_key

__all__ = [
    "PLURAL_UNITS",
    "QUANTITY_GRAMMAR",
    "FractionFormatter",
    "GrammarRule",
    "Quantity",
    "QuantityParser",
    "decimal_to_fraction",
    "format_quantity",
    "inflect_unit",
    "normalize_ingredient_name",
    "normalize_unit",
    "parse_quantity",
    "replace_vulgar_fractions",
    "unit_key",
]
