"""Pytest configuration and shared fixtures."""

import pytest

from recipescaler.config import get_settings
from recipescaler.plan.shopping_list import ConsolidationEngine
from recipescaler.schemas import Recipe

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "api: marks tests that exercise the HTTP layer")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep environment overrides from leaking between tests."""
    for name in (
        "DEFAULT_SERVINGS",
        "DEFAULT_CATEGORY",
        "ROUNDING_DECIMALS",
        "FRACTION_TOLERANCE",
        "FRACTION_MAX_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def recipe_a():
    """Four-serving recipe using flour in cups."""
    return {
        "title": "Recipe A",
        "servings": 4,
        "ingredients": [{"name": "flour", "quantity": "2 cups"}],
    }


@pytest.fixture
def recipe_b():
    """Two-serving recipe using flour in cups."""
    return {
        "title": "Recipe B",
        "servings": 2,
        "ingredients": [{"name": "flour", "quantity": "1 cup"}],
    }


@pytest.fixture
def pancakes():
    """Pancake recipe with a mix of quantity phrasings."""
    return Recipe.model_validate(
        {
            "id": "recipe-pancakes",
            "title": "Pancakes",
            "servings": 4,
            "prep_time": "10 minutes",
            "cook_time": "20 mins",
            "ingredients": [
                {"name": "Flour", "quantity": "1 1/2 cups", "category": "Baking"},
                {"name": "Milk", "quantity": "1.25 cups", "category": "Dairy"},
                {"name": "Eggs", "quantity": "2", "category": "Dairy"},
                {"name": "Salt", "quantity": "a pinch"},
                {"name": "Butter", "quantity": "3 tbsp", "category": "Dairy"},
            ],
        }
    )


@pytest.fixture
def crepes():
    """Crepe recipe sharing ingredients with the pancakes."""
    return Recipe.model_validate(
        {
            "title": "Crepes",
            "servings": 2,
            "ingredients": [
                {"name": "flour", "quantity": "1/2 cup", "category": "Baking"},
                {"name": "milk", "quantity": "200 ml", "category": "Dairy"},
                {"name": "eggs", "quantity": "1", "category": "Dairy"},
                {"name": "Butter", "quantity": "1 tbsp"},
            ],
        }
    )


@pytest.fixture
def engine():
    """Engine with default settings."""
    return ConsolidationEngine()
