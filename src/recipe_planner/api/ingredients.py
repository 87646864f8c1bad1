"""Ingredient catalog and substitution endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request, status

from recipe_planner.api.auth import require_user
from recipe_planner.api.models import CreateSubstitutionRequest
from recipe_planner.api.serializers import (
    serialize_ingredient,
    serialize_pagination,
    serialize_substitute,
    serialize_substitution,
    serialize_suggestion,
)

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer

router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


@router.get("")
async def search_ingredients(
    request: Request,
    q: str | None = None,
    category: str | None = None,
    page: int = 1,
    limit: int = 50,
) -> dict[str, object]:
    """Return ingredients ordered by name, filtered by name and category."""
    container: AppContainer = request.app.state.container
    result = container.catalog_service.search_ingredients(
        q, category, page=page, limit=limit
    )
    return {
        "ingredients": [serialize_ingredient(item) for item in result.ingredients],
        "pagination": serialize_pagination(result.pagination),
    }


@router.get("/categories/list")
async def list_categories(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"categories": container.catalog_service.list_categories()}


@router.get("/suggest")
async def suggest_substitutes(
    request: Request,
    recipe_id: str | None = Query(default=None, alias="recipeId"),
    dietary_restrictions: str | None = Query(
        default=None, alias="dietaryRestrictions"
    ),
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Suggest substitutes for recipe ingredients that conflict with the user."""
    container: AppContainer = request.app.state.container
    report = container.substitution_service.suggest(
        user_id,
        recipe_id=recipe_id,
        dietary_restrictions=_split_csv(dietary_restrictions),
    )
    return {
        "suggestions": [serialize_suggestion(item) for item in report.suggestions],
        "userRestrictions": {
            "dietary": report.profile.dietary_restrictions,
            "allergies": report.profile.allergies,
        },
    }


@router.get("/{ingredient_id}")
async def get_ingredient(ingredient_id: str, request: Request) -> dict[str, object]:
    """Return an ingredient with the substitutes recorded for it."""
    container: AppContainer = request.app.state.container
    listing = container.catalog_service.get_ingredient(ingredient_id)
    return {
        "ingredient": {
            **serialize_ingredient(listing.original),
            "substitutes": [
                serialize_substitute(item) for item in listing.substitutes
            ],
        }
    }


@router.get("/{ingredient_id}/substitutes")
async def list_substitutes(
    ingredient_id: str,
    request: Request,
    dietary_restriction: str | None = Query(default=None, alias="dietaryRestriction"),
) -> dict[str, object]:
    """Return substitutes for an ingredient ordered by ratio."""
    container: AppContainer = request.app.state.container
    listing = container.substitution_service.get_substitutes(
        ingredient_id, dietary_restriction=dietary_restriction
    )
    return {
        "original": serialize_ingredient(listing.original),
        "substitutes": [serialize_substitute(item) for item in listing.substitutes],
    }


@router.post(
    "/{original_id}/substitutes/{substitute_id}",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_user)],
)
async def create_substitution(
    original_id: str,
    substitute_id: str,
    payload: CreateSubstitutionRequest,
    request: Request,
) -> dict[str, object]:
    """Record that one ingredient can replace another."""
    container: AppContainer = request.app.state.container
    substitution, original, substitute = (
        container.substitution_service.add_substitution(
            original_id,
            substitute_id,
            ratio=payload.ratio,
            dietary_benefit=payload.dietary_benefit,
            flavor_profile=payload.flavor_profile,
        )
    )
    return {
        "message": "Ingredient substitution created successfully",
        "substitution": {
            **serialize_substitution(substitution),
            "original": serialize_ingredient(original),
            "substitute": serialize_ingredient(substitute),
        },
    }


def _split_csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]
