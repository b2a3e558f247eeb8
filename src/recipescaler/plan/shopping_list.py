"""Shopping list consolidation across recipes."""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any

from recipescaler.logging_config import LoggingContext, get_logger
from recipescaler.normalize.formatting import FractionFormatter
from recipescaler.normalize.quantity import (
    QuantityParser,
    normalize_ingredient_name,
    normalize_unit,
)
from recipescaler.normalize.units import inflect_unit, unit_key
from recipescaler.plan.scaler import (
    RecipeScaler,
    ScaledRecipe,
    validate_recipes,
    validate_target_servings,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConsolidatedEntry:
    """A single line of the consolidated shopping list."""

    name: str
    normalized_name: str
    unit: str
    total_amount: Fraction
    quantity: str
    category: str
    recipes: tuple[str, ...] = ()

    @property
    def key(self) -> tuple[str, str]:
        """Consolidation key: entries merge only when both parts are equal."""
        return self.normalized_name, self.unit

    @property
    def notes(self) -> str:
        return f"For: {', '.join(self.recipes)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "category": self.category,
            "notes": self.notes,
            "recipes": list(self.recipes),
        }


@dataclass(frozen=True)
class SkippedIngredient:
    """An ingredient left out of the shopping list because its quantity did not parse."""

    recipe_title: str
    name: str
    quantity: str | None


@dataclass(frozen=True)
class ShoppingList:
    """Consolidated shopping list for a set of recipes."""

    items: tuple[ConsolidatedEntry, ...] = ()
    skipped: tuple[SkippedIngredient, ...] = ()

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def items_by_category(self) -> dict[str, list[ConsolidatedEntry]]:
        """Group items by category, in order of first appearance."""
        grouped: dict[str, list[ConsolidatedEntry]] = {}
        for item in self.items:
            grouped.setdefault(item.category, []).append(item)
        return grouped

    def find(self, name: str, unit: str | None = None) -> list[ConsolidatedEntry]:
        """Return the entries for an ingredient name, optionally restricted to one unit."""
        normalized = normalize_ingredient_name(name)
        return [
            item
            for item in self.items
            if item.normalized_name == normalized
            and (unit is None or item.unit == unit_key(normalize_unit(unit)))
        ]

    def to_dicts(self) -> list[dict[str, Any]]:
        return [item.to_dict() for item in self.items]


@dataclass
class _EntryBuilder:
    """Running total for one consolidation key, owned by a single consolidate() call."""

    name: str
    normalized_name: str
    unit: str
    category: str
    total_amount: Fraction = Fraction(0)
    recipes: list[str] = field(default_factory=list)

    def add(self, amount: Fraction, recipe_title: str) -> None:
        self.total_amount += amount
        if recipe_title not in self.recipes:
            self.recipes.append(recipe_title)

    def freeze(self, formatter: FractionFormatter) -> ConsolidatedEntry:
        display_unit = inflect_unit(self.unit, self.total_amount, formatter.decimals)
        return ConsolidatedEntry(
            name=self.name,
            normalized_name=self.normalized_name,
            unit=self.unit,
            total_amount=self.total_amount,
            quantity=formatter.format(self.total_amount, display_unit),
            category=self.category,
            recipes=tuple(self.recipes),
        )


class ConsolidationEngine:
    """
    Scales recipes and merges their ingredients into a shopping list.

    Two modes:
    - scale_recipes: each recipe scaled on its own, nothing merged, unparsable
      quantities passed through unchanged.
    - consolidate: ingredients merged by (normalized name, unit) across all
      recipes, unparsable quantities dropped from the list.

    The engine holds configuration only; every call builds its own accumulator.
    """

    def __init__(
        self,
        default_servings: int | None = None,
        default_category: str | None = None,
        parser: QuantityParser | None = None,
        formatter: FractionFormatter | None = None,
    ):
        self.parser = parser or QuantityParser()
        self.formatter = formatter or FractionFormatter()
        self.scaler = RecipeScaler(
            default_servings=default_servings,
            default_category=default_category,
            parser=self.parser,
            formatter=self.formatter,
        )

    @property
    def default_servings(self) -> int:
        return self.scaler.default_servings

    @property
    def default_category(self) -> str:
        return self.scaler.default_category

    def scale_recipes(self, recipes: Any, target_servings: int) -> list[ScaledRecipe]:
        """
        Scale each recipe to the target serving count without merging.

        Args:
            recipes: Recipe models or mappings with title, servings, ingredients.
            target_servings: Positive serving count to scale to.

        Returns:
            One ScaledRecipe per input recipe, in input order.
        """
        target = validate_target_servings(target_servings)
        validated = validate_recipes(recipes)
        logger.info(f"Scaling {len(validated)} recipe(s) to {target} servings")
        return [self.scaler.scale_recipe(recipe, target) for recipe in validated]

    def consolidate(self, recipes: Any, target_servings: int) -> ShoppingList:
        """
        Build a consolidated shopping list for recipes scaled to the target.

        Ingredients merge only when their normalized names and units are both
        equal; the same ingredient in another unit becomes its own entry.

        Args:
            recipes: Recipe models or mappings with title, servings, ingredients.
            target_servings: Positive serving count to scale to.

        Returns:
            ShoppingList with entries in order of first occurrence.
        """
        target = validate_target_servings(target_servings)
        validated = validate_recipes(recipes)
        logger.info(f"Consolidating {len(validated)} recipe(s) for {target} servings")

        builders: dict[tuple[str, str], _EntryBuilder] = {}
        skipped: list[SkippedIngredient] = []

        for recipe in validated:
            with LoggingContext(recipe=recipe.title):
                factor, _ = self.scaler.factor_for(recipe, target)

                for ingredient in recipe.ingredients:
                    quantity = self.parser.parse(ingredient.quantity)
                    if quantity is None:
                        logger.warning(
                            f"Dropping {ingredient.name!r}: cannot parse quantity "
                            f"{ingredient.quantity!r}"
                        )
                        skipped.append(
                            SkippedIngredient(
                                recipe_title=recipe.title,
                                name=ingredient.name,
                                quantity=ingredient.quantity,
                            )
                        )
                        continue

                    normalized = normalize_ingredient_name(ingredient.name)
                    key = (normalized, unit_key(quantity.unit))
                    builder = builders.get(key)
                    if builder is None:
                        builder = builders[key] = _EntryBuilder(
                            name=ingredient.name,
                            normalized_name=normalized,
                            unit=key[1],
                            category=ingredient.category or self.default_category,
                        )
                    builder.add(quantity.amount * factor, recipe.title)

        shopping_list = ShoppingList(
            items=tuple(builder.freeze(self.formatter) for builder in builders.values()),
            skipped=tuple(skipped),
        )

        logger.info(
            f"Consolidated shopping list: {len(shopping_list)} items, "
            f"{len(shopping_list.skipped)} skipped"
        )

        return shopping_list
