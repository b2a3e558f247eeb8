"""API routes for bulk recipe scaling and combined shopping lists."""

import uuid
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from recipescaler.errors import CallerContractViolation
from recipescaler.logging_config import LoggingContext, get_logger
from recipescaler.plan.shopping_list import ConsolidationEngine
from recipescaler.schemas import Recipe

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["scaling"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class ScaleRequest(BaseModel):
    """Recipes to scale and the serving count to scale them to."""

    recipes: list[Recipe]
    target_servings: int = Field(ge=1, description="Serving count to scale every recipe to")


class BulkScaleResponse(BaseModel):
    """Each recipe with its scaled ingredient list."""

    scaled_recipes: list[dict[str, Any]]


class ShoppingListItem(BaseModel):
    """Single consolidated item in the shopping list."""

    name: str
    quantity: str
    category: str
    notes: str
    recipes: list[str] = Field(default_factory=list)


class SkippedItem(BaseModel):
    """Ingredient left out because its quantity could not be parsed."""

    recipe_title: str
    name: str
    quantity: str | None = None


class CombinedShoppingListResponse(BaseModel):
    """Consolidated shopping list across recipes."""

    combined_list: list[ShoppingListItem]
    skipped: list[SkippedItem] = Field(default_factory=list)
    categories: dict[str, list[str]] = Field(default_factory=dict)


def get_engine() -> ConsolidationEngine:
    """Engine dependency, built from the current settings."""
    return ConsolidationEngine()


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/bulk-scale", response_model=BulkScaleResponse)
def bulk_scale(
    request: ScaleRequest,
    engine: ConsolidationEngine = Depends(get_engine),
) -> BulkScaleResponse:
    """Scale each recipe to the target servings without merging ingredients."""
    with LoggingContext(request_id=uuid.uuid4().hex):
        try:
            scaled = engine.scale_recipes(request.recipes, request.target_servings)
        except CallerContractViolation as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(e),
            ) from e

    return BulkScaleResponse(scaled_recipes=[recipe.to_dict() for recipe in scaled])


@router.post("/combined-shopping-list", response_model=CombinedShoppingListResponse)
def combined_shopping_list(
    request: ScaleRequest,
    engine: ConsolidationEngine = Depends(get_engine),
) -> CombinedShoppingListResponse:
    """Merge the ingredients of all recipes, scaled to the target servings."""
    with LoggingContext(request_id=uuid.uuid4().hex):
        try:
            shopping_list = engine.consolidate(request.recipes, request.target_servings)
        except CallerContractViolation as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(e),
            ) from e

    return CombinedShoppingListResponse(
        combined_list=[ShoppingListItem(**item.to_dict()) for item in shopping_list],
        skipped=[
            SkippedItem(recipe_title=s.recipe_title, name=s.name, quantity=s.quantity)
            for s in shopping_list.skipped
        ],
        categories={
            category: [item.name for item in items]
            for category, items in shopping_list.items_by_category.items()
        },
    )
