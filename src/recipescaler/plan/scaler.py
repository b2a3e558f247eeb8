"""Recipe scaling to a target number of servings."""

import math
import numbers
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any

from pydantic import ValidationError

from recipescaler.config import get_settings
from recipescaler.errors import CallerContractViolation, InvalidAmountError
from recipescaler.logging_config import LoggingContext, get_logger
from recipescaler.normalize.formatting import FractionFormatter, int_to_text
from recipescaler.normalize.quantity import QuantityParser
from recipescaler.normalize.units import inflect_unit
from recipescaler.schemas import Ingredient, Recipe

logger = get_logger(__name__)

COOKING_TIME_PATTERN = re.compile(r"(\d+)\s*(minutes?|mins?|hours?|hrs?)", re.IGNORECASE)


# =============================================================================
# Input Validation
# =============================================================================


def validate_target_servings(target_servings: Any) -> int:
    """Check that the target serving count is a positive integer."""
    if (
        isinstance(target_servings, bool)
        or not isinstance(target_servings, numbers.Integral)
        or target_servings <= 0
    ):
        raise CallerContractViolation(
            f"target_servings must be a positive integer, got {target_servings!r}",
            "target_servings",
        )
    return int(target_servings)


def validate_recipes(recipes: Any) -> list[Recipe]:
    """
    Coerce caller input into Recipe models.

    Accepts Recipe instances or plain mappings. Anything that is not a
    collection of recipes, or a recipe without an ingredients list, is a
    broken caller and raises CallerContractViolation.
    """
    if recipes is None or isinstance(recipes, (str, bytes, Mapping)) or not isinstance(
        recipes, Iterable
    ):
        raise CallerContractViolation(
            f"recipes must be a list of recipe records, got {type(recipes).__name__}",
            "recipes",
        )

    validated: list[Recipe] = []
    for index, recipe in enumerate(recipes):
        if isinstance(recipe, Recipe):
            validated.append(recipe)
        elif isinstance(recipe, Mapping):
            try:
                validated.append(Recipe.model_validate(recipe))
            except ValidationError as e:
                raise CallerContractViolation(
                    f"Invalid recipe at index {index}: {e}", "recipes"
                ) from e
        else:
            raise CallerContractViolation(
                f"Recipe at index {index} must be a mapping, got {type(recipe).__name__}",
                "recipes",
            )
    return validated


# =============================================================================
# Scaling Arithmetic
# =============================================================================


def resolve_servings(servings: int | None, default_servings: int | None = None) -> int:
    """Return the recipe's serving count, or the default when it is missing or non-positive."""
    if default_servings is None:
        default_servings = get_settings().default_servings
    if not servings or servings <= 0:
        return default_servings
    return servings


def scaling_factor(
    original_servings: int | None,
    target_servings: int,
    default_servings: int | None = None,
) -> Fraction:
    """Compute target_servings / original_servings as an exact ratio."""
    target = validate_target_servings(target_servings)
    return Fraction(target, resolve_servings(original_servings, default_servings))


def scale(
    amount: numbers.Real,
    original_servings: int | None,
    target_servings: int,
    default_servings: int | None = None,
) -> Fraction:
    """
    Scale an amount from the original serving count to the target.

    Example:
        scale(2, original_servings=4, target_servings=8) -> 4
    """
    if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
        raise InvalidAmountError(amount)
    if not isinstance(amount, Fraction):
        if not math.isfinite(amount):
            raise InvalidAmountError(amount)
        amount = Fraction(amount)
    if amount < 0:
        raise InvalidAmountError(amount)

    return amount * scaling_factor(original_servings, target_servings, default_servings)


def cooking_time_adjustment(factor: numbers.Real) -> float:
    """
    Adjustment applied to cooking times when a recipe is scaled.

    Cooking time grows more slowly than the quantities: +30% per doubling
    when scaling up, -20% per halving when scaling down.
    """
    factor = float(factor)
    if factor > 1:
        return 1 + math.log2(factor) * 0.3
    if factor < 1:
        return 1 - math.log2(1 / factor) * 0.2
    return 1.0


def scale_cooking_time(text: str | None, adjustment: float) -> str | None:
    """
    Rescale the first duration found in a cooking time text.

    Examples:
        scale_cooking_time("30 minutes", 1.3) -> "39 minutes"
        scale_cooking_time("overnight", 1.3) -> "overnight"
    """
    if not text:
        return text

    def _replace(match: re.Match[str]) -> str:
        scaled = max(1, math.floor(int(match.group(1)) * adjustment + 0.5))
        return f"{scaled} {match.group(2)}"

    return COOKING_TIME_PATTERN.sub(_replace, text, count=1)


# =============================================================================
# Scaled Records
# =============================================================================


def json_amount(value: Fraction) -> float | str:
    """Amount as a JSON number, or as exact text when it exceeds the float range."""
    try:
        return float(value)
    except OverflowError:
        if value.denominator == 1:
            return int_to_text(value.numerator)
        return f"{int_to_text(value.numerator)}/{int_to_text(value.denominator)}"


@dataclass(frozen=True)
class ScaledIngredient:
    """
    An ingredient after a scaling pass.

    Unparsable ones carry no amount and keep their own category, which may be None.
    """

    ingredient: Ingredient
    quantity: str | None
    category: str | None
    scaled_amount: Fraction | None = None
    unit: str | None = None
    scaling_factor: Fraction | None = None

    @property
    def name(self) -> str:
        return self.ingredient.name

    @property
    def original_quantity_text(self) -> str | None:
        return self.ingredient.quantity

    @property
    def parsed(self) -> bool:
        """Whether the quantity was understood and scaled."""
        return self.scaled_amount is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the ingredient's own fields preserved."""
        data = self.ingredient.model_dump()
        data["category"] = self.category
        data["quantity"] = self.quantity
        data["parsed"] = self.parsed
        if self.parsed:
            data["original_quantity"] = self.original_quantity_text
            data["scaled_amount"] = json_amount(self.scaled_amount)
            data["unit"] = self.unit
            data["scaling_factor"] = json_amount(self.scaling_factor)
        return data


@dataclass(frozen=True)
class RecipeShoppingItem:
    """Shopping list line for a single scaled recipe."""

    name: str
    quantity: str | None
    category: str
    notes: str


@dataclass(frozen=True)
class ScaledRecipe:
    """A recipe rescaled to a target serving count, without merging."""

    recipe: Recipe
    scaled_ingredients: tuple[ScaledIngredient, ...]
    scaling_factor: Fraction
    original_servings: int
    target_servings: int
    scaled_prep_time: str | None = None
    scaled_cook_time: str | None = None
    default_category: str = "Other"

    @property
    def unparsed_ingredients(self) -> list[ScaledIngredient]:
        return [ing for ing in self.scaled_ingredients if not ing.parsed]

    def to_shopping_list(self) -> list[RecipeShoppingItem]:
        """Build a shopping list for this recipe alone."""
        notes = f"For {self.recipe.title} ({self.target_servings} servings)"
        return [
            RecipeShoppingItem(
                name=ing.name,
                quantity=ing.quantity,
                category=ing.category or self.default_category,
                notes=notes,
            )
            for ing in self.scaled_ingredients
        ]

    def to_dict(self) -> dict[str, Any]:
        """Serialize as the original recipe fields plus the scaling results."""
        data = self.recipe.model_dump()
        data.update(
            scaled_ingredients=[ing.to_dict() for ing in self.scaled_ingredients],
            scaling_factor=float(self.scaling_factor),
            original_servings=self.original_servings,
            target_servings=self.target_servings,
            scaled_prep_time=self.scaled_prep_time,
            scaled_cook_time=self.scaled_cook_time,
        )
        return data


# =============================================================================
# Scaler
# =============================================================================


@dataclass
class RecipeScaler:
    """
    Scales recipes one at a time.

    Ingredients whose quantity cannot be parsed pass through with their
    original text and no scaling applied.
    """

    default_servings: int | None = None
    default_category: str | None = None
    parser: QuantityParser = field(default_factory=QuantityParser)
    formatter: FractionFormatter = field(default_factory=FractionFormatter)

    def __post_init__(self) -> None:
        settings = get_settings()
        if self.default_servings is None:
            self.default_servings = settings.default_servings
        if self.default_category is None:
            self.default_category = settings.default_category
        if self.default_servings <= 0:
            raise CallerContractViolation(
                f"default_servings must be positive, got {self.default_servings}",
                "default_servings",
            )

    def factor_for(self, recipe: Recipe, target_servings: int) -> tuple[Fraction, int]:
        """Return (scaling_factor, original_servings) for a recipe."""
        original = resolve_servings(recipe.servings, self.default_servings)
        if original != recipe.servings:
            logger.debug(
                f"Recipe {recipe.title!r} has servings={recipe.servings!r}, using {original}"
            )
        return scaling_factor(original, target_servings, self.default_servings), original

    def scale_ingredient(self, ingredient: Ingredient, factor: Fraction) -> ScaledIngredient:
        """Scale one ingredient by the given factor."""
        quantity = self.parser.parse(ingredient.quantity)

        if quantity is None:
            logger.debug(f"Passing through unparsable quantity {ingredient.quantity!r}")
            return ScaledIngredient(
                ingredient=ingredient,
                quantity=ingredient.quantity,
                category=ingredient.category,
            )

        scaled_amount = quantity.amount * factor
        display_unit = inflect_unit(quantity.unit, scaled_amount, self.formatter.decimals)
        return ScaledIngredient(
            ingredient=ingredient,
            quantity=self.formatter.format(scaled_amount, display_unit),
            category=ingredient.category or self.default_category,
            scaled_amount=scaled_amount,
            unit=quantity.unit,
            scaling_factor=factor,
        )

    def scale_recipe(self, recipe: Recipe, target_servings: int) -> ScaledRecipe:
        """Scale every ingredient of a recipe to the target serving count."""
        target = validate_target_servings(target_servings)

        with LoggingContext(recipe=recipe.title):
            factor, original = self.factor_for(recipe, target)
            adjustment = cooking_time_adjustment(factor)

            scaled = ScaledRecipe(
                recipe=recipe,
                scaled_ingredients=tuple(
                    self.scale_ingredient(ing, factor) for ing in recipe.ingredients
                ),
                scaling_factor=factor,
                original_servings=original,
                target_servings=target,
                scaled_prep_time=scale_cooking_time(recipe.prep_time, adjustment),
                scaled_cook_time=scale_cooking_time(recipe.cook_time, adjustment),
                default_category=self.default_category,
            )

            if scaled.unparsed_ingredients:
                logger.debug(
                    f"{len(scaled.unparsed_ingredients)} ingredient(s) left unscaled"
                )

        return scaled
