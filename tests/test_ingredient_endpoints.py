"""Tests for ingredient substitution endpoints."""

from fastapi.testclient import TestClient

from recipe_planner.api.app import create_app
from recipe_planner.domain.ingredients import UserProfile
from tests.conftest import (
    ALICE,
    InMemoryIngredientRepository,
    InMemoryProfileRepository,
    InMemoryRecipeRepository,
    make_ingredient,
    make_recipe,
)


def _seed(ingredient_repository: InMemoryIngredientRepository) -> None:
    ingredient_repository.add(make_ingredient("butter", "Butter", ["dairy"]))
    ingredient_repository.add(make_ingredient("oil", "Olive Oil"))


def test_create_and_list_substitutes(
    container, ingredient_repository: InMemoryIngredientRepository
) -> None:
    _seed(ingredient_repository)
    client = TestClient(create_app(container))

    created = client.post(
        "/api/ingredients/butter/substitutes/oil",
        json={"ratio": 0.75, "dietaryBenefit": "dairy-free"},
        headers=ALICE,
    )
    duplicate = client.post(
        "/api/ingredients/butter/substitutes/oil", json={}, headers=ALICE
    )
    listed = client.get("/api/ingredients/butter/substitutes")
    filtered = client.get(
        "/api/ingredients/butter/substitutes?dietaryRestriction=keto"
    )

    assert created.status_code == 201
    assert created.json()["substitution"]["substitute"]["name"] == "Olive Oil"
    assert duplicate.status_code == 400
    assert listed.status_code == 200
    substitutes = listed.json()["substitutes"]
    assert substitutes[0]["id"] == "oil"
    assert substitutes[0]["substitutionInfo"] == {
        "ratio": 0.75,
        "dietaryBenefit": "dairy-free",
        "flavorProfile": None,
    }
    assert filtered.json()["substitutes"] == []


def test_create_substitution_requires_token(
    container, ingredient_repository: InMemoryIngredientRepository
) -> None:
    _seed(ingredient_repository)
    client = TestClient(create_app(container))

    response = client.post("/api/ingredients/butter/substitutes/oil", json={})

    assert response.status_code == 401


def test_substitutes_for_unknown_ingredient(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/api/ingredients/ghost/substitutes")

    assert response.status_code == 404
    assert response.json() == {"message": "Ingredient not found"}


def test_suggest_endpoint(
    container,
    ingredient_repository: InMemoryIngredientRepository,
    recipe_repository: InMemoryRecipeRepository,
    profile_repository: InMemoryProfileRepository,
) -> None:
    _seed(ingredient_repository)
    container.substitution_service.add_substitution("butter", "oil", ratio=0.75)
    recipe_repository.add(make_recipe("toast", "Toast", 1, [("butter", 1, "tbsp")]))
    profile_repository.profiles["alice"] = UserProfile(
        user_id="alice", allergies=["dairy"], dietary_restrictions=["vegan"]
    )
    client = TestClient(create_app(container))

    response = client.get("/api/ingredients/suggest?recipeId=toast", headers=ALICE)

    assert response.status_code == 200
    data = response.json()
    assert data["userRestrictions"] == {"dietary": ["vegan"], "allergies": ["dairy"]}
    assert data["suggestions"][0]["original"]["id"] == "butter"
    assert data["suggestions"][0]["substitutes"][0]["id"] == "oil"


def test_suggest_filters_by_requested_restrictions(
    container,
    ingredient_repository: InMemoryIngredientRepository,
    recipe_repository: InMemoryRecipeRepository,
) -> None:
    _seed(ingredient_repository)
    container.substitution_service.add_substitution(
        "butter", "oil", dietary_benefit="dairy-free"
    )
    recipe_repository.add(make_recipe("toast", "Toast", 1, [("butter", 1, "tbsp")]))
    client = TestClient(create_app(container))

    matching = client.get(
        "/api/ingredients/suggest?recipeId=toast&dietaryRestrictions=keto,Dairy-Free",
        headers=ALICE,
    )
    other = client.get(
        "/api/ingredients/suggest?recipeId=toast&dietaryRestrictions=keto",
        headers=ALICE,
    )

    assert len(matching.json()["suggestions"]) == 1
    assert other.json()["suggestions"] == []
