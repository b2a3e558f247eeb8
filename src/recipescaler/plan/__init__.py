"""Recipe scaling and shopping list consolidation."""

from recipescaler.plan.scaler import (
    RecipeScaler,
    RecipeShoppingItem,
    ScaledIngredient,
    ScaledRecipe,
    cooking_time_adjustment,
    scale,
    scale_cooking_time,
    scaling_factor,
)
from recipescaler.plan.shopping_list import (
    ConsolidatedEntry,
    ConsolidationEngine,
    ShoppingList,
    SkippedIngredient,
)

__all__ = [
    "ConsolidatedEntry",
    "ConsolidationEngine",
    "RecipeScaler",
    "RecipeShoppingItem",
    "ScaledIngredient",
    "ScaledRecipe",
    "ShoppingList",
    "SkippedIngredient",
    "cooking_time_adjustment",
    "scale",
    "scale_cooking_time",
    "scaling_factor",
]
