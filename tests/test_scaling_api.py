"""Tests for the bulk-scale and combined shopping list endpoints."""

import pytest
from fastapi.testclient import TestClient

from recipescaler.errors import CallerContractViolation
from recipescaler.main import app
from recipescaler.plan.shopping_list import ConsolidationEngine
from recipescaler.routers.scaling import get_engine

pytestmark = pytest.mark.api


@pytest.fixture
def client():
    """Test client with the default engine."""
    return TestClient(app)


def _oversized(quantity):
    return {
        "recipes": [
            {
                "title": "Big",
                "servings": 4,
                "ingredients": [
                    {"name": "flour", "quantity": quantity},
                    {"name": "salt", "quantity": "1 tsp"},
                ],
            }
        ],
        "target_servings": 8,
    }


@pytest.fixture
def payload(recipe_a, recipe_b):
    """Two flour recipes plus one with an unparsable quantity."""
    seasoning = {
        "title": "Seasoning",
        "servings": 2,
        "cook_time": "10 minutes",
        "ingredients": [
            {"name": "salt", "quantity": "a pinch", "category": "Spices"},
            {"name": "pepper", "quantity": "1/4 tsp", "category": "Spices"},
        ],
    }
    return {"recipes": [recipe_a, recipe_b, seasoning], "target_servings": 8}


class TestBulkScale:
    """Tests for POST /api/v1/recipes/bulk-scale."""

    def test_scales_each_recipe(self, client, payload):
        """Test one scaled record per recipe, original fields kept."""
        response = client.post("/api/v1/recipes/bulk-scale", json=payload)
        assert response.status_code == 200

        scaled = response.json()["scaled_recipes"]
        assert [r["title"] for r in scaled] == ["Recipe A", "Recipe B", "Seasoning"]
        assert [r["scaling_factor"] for r in scaled] == [2.0, 4.0, 4.0]
        assert [r["original_servings"] for r in scaled] == [4, 2, 2]
        assert all(r["target_servings"] == 8 for r in scaled)
        assert scaled[0]["ingredients"] == [
            {"name": "flour", "quantity": "2 cups", "category": None}
        ]
        assert scaled[0]["scaled_ingredients"][0]["quantity"] == "4 cups"
        assert scaled[2]["scaled_cook_time"] == "16 minutes"

    def test_unparsable_ingredient_passes_through(self, client, payload):
        """Test that 'a pinch' is returned unchanged."""
        response = client.post("/api/v1/recipes/bulk-scale", json=payload)
        salt, pepper = response.json()["scaled_recipes"][2]["scaled_ingredients"]

        assert salt["quantity"] == "a pinch"
        assert salt["parsed"] is False
        assert pepper["quantity"] == "1 tsp"
        assert pepper["original_quantity"] == "1/4 tsp"
        assert pepper["scaling_factor"] == 4.0

    def test_amount_beyond_float_range(self, client):
        """Test a 400-digit quantity is scaled and serialized as exact text."""
        quantity = "1" + "0" * 400 + " g"
        response = client.post("/api/v1/recipes/bulk-scale", json=_oversized(quantity))
        assert response.status_code == 200

        flour, salt = response.json()["scaled_recipes"][0]["scaled_ingredients"]
        assert flour["quantity"] == "2" + "0" * 400 + " g"
        assert flour["scaled_amount"] == "2" + "0" * 400
        assert flour["scaling_factor"] == 2.0
        assert salt["quantity"] == "2 tsp"

    def test_overlong_literal_passes_through(self, client):
        """Test a 5000-digit quantity is returned unscaled."""
        quantity = "1" * 5000 + " g"
        response = client.post("/api/v1/recipes/bulk-scale", json=_oversized(quantity))
        assert response.status_code == 200

        flour, salt = response.json()["scaled_recipes"][0]["scaled_ingredients"]
        assert flour["quantity"] == quantity
        assert flour["parsed"] is False
        assert salt["quantity"] == "2 tsp"


class TestCombinedShoppingList:
    """Tests for POST /api/v1/recipes/combined-shopping-list."""

    def test_consolidates(self, client, payload):
        """Test merged entries, skipped items and categories."""
        response = client.post("/api/v1/recipes/combined-shopping-list", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert data["combined_list"] == [
            {
                "name": "flour",
                "quantity": "8 cups",
                "category": "Other",
                "notes": "For: Recipe A, Recipe B",
                "recipes": ["Recipe A", "Recipe B"],
            },
            {
                "name": "pepper",
                "quantity": "1 tsp",
                "category": "Spices",
                "notes": "For: Seasoning",
                "recipes": ["Seasoning"],
            },
        ]
        assert data["skipped"] == [
            {"recipe_title": "Seasoning", "name": "salt", "quantity": "a pinch"}
        ]
        assert data["categories"] == {"Other": ["flour"], "Spices": ["pepper"]}

    def test_engine_dependency_override(self, client, recipe_a):
        """Test that the engine's default servings can be swapped per app."""
        app.dependency_overrides[get_engine] = lambda: ConsolidationEngine(default_servings=8)
        try:
            recipe = {"title": "Rice", "ingredients": [{"name": "rice", "quantity": "2 cups"}]}
            response = client.post(
                "/api/v1/recipes/combined-shopping-list",
                json={"recipes": [recipe], "target_servings": 4},
            )
        finally:
            app.dependency_overrides.clear()

        assert response.json()["combined_list"][0]["quantity"] == "1 cup"

    @pytest.mark.parametrize(
        ("quantity", "expected"),
        [
            ("1" + "0" * 400 + " g", ["2" + "0" * 400 + " g", "2 tsp"]),
            ("1" * 5000 + " g", ["2 tsp"]),
        ],
    )
    def test_oversized_quantities(self, client, quantity, expected):
        """Test huge amounts never fail the whole request."""
        response = client.post(
            "/api/v1/recipes/combined-shopping-list", json=_oversized(quantity)
        )
        assert response.status_code == 200
        assert [item["quantity"] for item in response.json()["combined_list"]] == expected


class TestRequestValidation:
    """Tests for malformed requests."""

    @pytest.mark.parametrize(
        "body",
        [
            {"recipes": [], "target_servings": 0},
            {"recipes": "flour", "target_servings": 4},
            {"recipes": [{"title": "No ingredients"}], "target_servings": 4},
            {"target_servings": 4},
        ],
    )
    @pytest.mark.parametrize(
        "path", ["/api/v1/recipes/bulk-scale", "/api/v1/recipes/combined-shopping-list"]
    )
    def test_rejected(self, client, path, body):
        """Test that broken callers get a 422."""
        response = client.post(path, json=body)
        assert response.status_code == 422

    def test_contract_violation_is_mapped(self, client, recipe_a):
        """Test that engine-level caller errors become 422 responses."""
        app.dependency_overrides[get_engine] = lambda: _FailingEngine()
        try:
            response = client.post(
                "/api/v1/recipes/bulk-scale",
                json={"recipes": [recipe_a], "target_servings": 4},
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 422
        assert response.json()["detail"] == "bad caller"


class _FailingEngine(ConsolidationEngine):
    def scale_recipes(self, recipes, target_servings):
        raise CallerContractViolation("bad caller")
