"""Recipe quantity parsing, scaling and shopping list consolidation."""

from recipescaler.errors import CallerContractViolation, InvalidAmountError, RecipeScalerError
from recipescaler.normalize import Quantity, format_quantity, parse_quantity
from recipescaler.plan import ConsolidationEngine, ShoppingList, scale, scaling_factor
from recipescaler.schemas import Ingredient, Recipe

__version__ = "0.1.0"

__all__ = [
    "CallerContractViolation",
    "ConsolidationEngine",
    "Ingredient",
    "InvalidAmountError",
    "Quantity",
    "Recipe",
    "RecipeScalerError",
    "ShoppingList",
    "format_quantity",
    "parse_quantity",
    "scale",
    "scaling_factor",
]
