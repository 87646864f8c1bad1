"""Reference data for user dietary profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from recipe_planner.api.serializers import serialize_option

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/allergies")
async def list_allergies(request: Request) -> dict[str, object]:
    """Return the allergies a user can select."""
    container: AppContainer = request.app.state.container
    allergies = container.catalog_service.list_allergies()
    return {"allergies": [serialize_option(option) for option in allergies]}


@router.get("/dietary-restrictions")
async def list_dietary_restrictions(request: Request) -> dict[str, object]:
    """Return the dietary restrictions a user can select."""
    container: AppContainer = request.app.state.container
    restrictions = container.catalog_service.list_dietary_restrictions()
    return {"restrictions": [serialize_option(option) for option in restrictions]}
