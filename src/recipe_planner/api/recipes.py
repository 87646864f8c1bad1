"""Recipe browsing endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from recipe_planner.api.serializers import serialize_pagination, serialize_recipe

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("")
async def search_recipes(
    request: Request,
    q: str | None = None,
    page: int = 1,
    limit: int = 12,
) -> dict[str, object]:
    """Return recipes matching the title query, newest first."""
    container: AppContainer = request.app.state.container
    result = container.catalog_service.search_recipes(q, page=page, limit=limit)
    return {
        "recipes": [serialize_recipe(recipe) for recipe in result.recipes],
        "pagination": serialize_pagination(result.pagination),
    }


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    recipe = container.catalog_service.get_recipe(recipe_id)
    return {"recipe": serialize_recipe(recipe)}
