"""Recipe records supplied by the calling layer."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Ingredient(BaseModel):
    """Ingredient line of a recipe, quantity kept as raw text."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str
    quantity: str | None = Field(None, description="Raw quantity text, e.g. '1 1/2 cups'")
    category: str | None = None

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> Any:
        """Accept bare numbers for quantities that were stored unquoted."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Recipe(BaseModel):
    """Recipe with servings and ingredients."""

    model_config = ConfigDict(extra="allow", frozen=True)

    title: str
    servings: int | None = Field(None, description="Missing or non-positive means default")
    ingredients: list[Ingredient]
    prep_time: str | None = None
    cook_time: str | None = None
