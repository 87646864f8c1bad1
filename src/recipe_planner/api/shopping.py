"""Shopping list endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from recipe_planner.api.auth import require_user
from recipe_planner.api.models import (
    CreateShoppingListRequest,
    GenerateShoppingListRequest,
    ShoppingListItemPayload,
    UpdateShoppingListItemRequest,
    UpdateShoppingListRequest,
)
from recipe_planner.api.serializers import (
    serialize_item,
    serialize_pagination,
    serialize_recipe_ref,
    serialize_shopping_list,
)
from recipe_planner.domain.shopping import NewShoppingListItem

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer

router = APIRouter(prefix="/api/shopping", tags=["shopping"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/lists")
async def list_shopping_lists(
    request: Request,
    page: int = 1,
    limit: int | None = None,
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Return the caller's shopping lists, newest first."""
    container = _container(request)
    result = container.shopping_list_service.list_lists(
        user_id,
        page=page,
        limit=container.settings.default_page_size if limit is None else limit,
    )
    return {
        "shoppingLists": [serialize_shopping_list(item) for item in result.lists],
        "pagination": serialize_pagination(result.pagination),
    }


@router.get("/lists/{list_id}")
async def get_shopping_list(
    list_id: str, request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Return a single shopping list with its items."""
    shopping_list = _container(request).shopping_list_service.get_list(
        user_id, list_id
    )
    return {"shoppingList": serialize_shopping_list(shopping_list)}


@router.post("/lists", status_code=status.HTTP_201_CREATED)
async def create_shopping_list(
    payload: CreateShoppingListRequest,
    request: Request,
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Create a shopping list from explicit items."""
    shopping_list = _container(request).shopping_list_service.create_list(
        user_id, payload.name, [_new_item(item) for item in payload.items]
    )
    return {
        "message": "Shopping list created successfully",
        "shoppingList": serialize_shopping_list(shopping_list),
    }


@router.post("/generate-from-recipes", status_code=status.HTTP_201_CREATED)
async def generate_from_recipes(
    payload: GenerateShoppingListRequest,
    request: Request,
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Generate a consolidated shopping list from selected recipes."""
    generated = _container(request).shopping_list_service.generate_from_recipes(
        user_id,
        payload.recipe_ids,
        serving_adjustments=payload.serving_adjustments,
        list_name=payload.list_name,
    )
    return {
        "message": "Shopping list generated successfully",
        "shoppingList": serialize_shopping_list(generated.shopping_list),
        "recipesUsed": [
            serialize_recipe_ref(recipe) for recipe in generated.recipes_used
        ],
        "missingRecipeIds": generated.missing_recipe_ids,
    }


@router.put("/lists/{list_id}")
async def update_shopping_list(
    list_id: str,
    payload: UpdateShoppingListRequest,
    request: Request,
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Rename a shopping list or mark it completed."""
    shopping_list = _container(request).shopping_list_service.update_list(
        user_id, list_id, name=payload.name, completed=payload.completed
    )
    return {
        "message": "Shopping list updated successfully",
        "shoppingList": serialize_shopping_list(shopping_list),
    }


@router.delete("/lists/{list_id}")
async def delete_shopping_list(
    list_id: str, request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Delete a shopping list."""
    _container(request).shopping_list_service.delete_list(user_id, list_id)
    return {"message": "Shopping list deleted successfully"}


@router.post("/lists/{list_id}/items", response_model=None)
async def add_shopping_list_item(
    list_id: str,
    payload: ShoppingListItemPayload,
    request: Request,
    user_id: str = Depends(require_user),
) -> JSONResponse:
    """Add an item to a list, merging with an existing line in the same unit."""
    item, created = _container(request).shopping_list_service.add_item(
        user_id,
        list_id,
        ingredient_id=payload.ingredient_id,
        quantity=payload.quantity,
        unit=payload.unit,
        notes=payload.notes,
    )
    if created:
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content={
                "message": "Item added to shopping list successfully",
                "item": serialize_item(item),
            },
        )
    return JSONResponse(
        content={
            "message": "Shopping list item quantity updated",
            "item": serialize_item(item),
        }
    )


@router.put("/items/{item_id}")
async def update_shopping_list_item(
    item_id: str,
    payload: UpdateShoppingListItemRequest,
    request: Request,
    user_id: str = Depends(require_user),
) -> dict[str, object]:
    """Update quantity, unit, purchase state or notes of an item."""
    item = _container(request).shopping_list_service.update_item(
        user_id,
        item_id,
        quantity=payload.quantity,
        unit=payload.unit,
        purchased=payload.purchased,
        notes=payload.notes,
    )
    return {
        "message": "Shopping list item updated successfully",
        "item": serialize_item(item),
    }


@router.delete("/items/{item_id}")
async def remove_shopping_list_item(
    item_id: str, request: Request, user_id: str = Depends(require_user)
) -> dict[str, object]:
    """Remove an item from its shopping list."""
    _container(request).shopping_list_service.remove_item(user_id, item_id)
    return {"message": "Item removed from shopping list successfully"}


def _new_item(item: ShoppingListItemPayload) -> NewShoppingListItem:
    return NewShoppingListItem(
        ingredient_id=item.ingredient_id,
        quantity=item.quantity,
        unit=item.unit,
        notes=item.notes,
    )
