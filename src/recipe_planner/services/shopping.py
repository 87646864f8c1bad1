"""Shopping list generation and management."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from recipe_planner.domain.errors import (
    IngredientNotFound,
    InvalidInput,
    RecipesNotFound,
    ShoppingListItemNotFound,
    ShoppingListNotFound,
)
from recipe_planner.domain.ingredients import Ingredient
from recipe_planner.domain.recipes import RecipeRecord
from recipe_planner.domain.shopping import (
    NewShoppingListItem,
    ShoppingList,
    ShoppingListItem,
)
from recipe_planner.services.consolidation import consolidate, validate_recipe_ids
from recipe_planner.services.pagination import Pagination, page_offset
from recipe_planner.services.recipes import RecipeRepository

logger = logging.getLogger(__name__)


class ShoppingListRepository(Protocol):
    """Persistence interface for shopping lists and their items."""

    def create_list(
        self, user_id: str, name: str, items: list[NewShoppingListItem]
    ) -> ShoppingList:
        """Create a list with its items and return it."""

    def list_lists(self, user_id: str, offset: int, limit: int) -> list[ShoppingList]:
        """Return a page of the user's lists, newest first."""

    def count_lists(self, user_id: str) -> int:
        """Return how many lists the user owns."""

    def get_list(self, user_id: str, list_id: str) -> ShoppingList | None:
        """Return a list owned by the user, with items."""

    def update_list(self, list_id: str, payload: dict[str, object]) -> ShoppingList:
        """Update list fields and return the list."""

    def delete_list(self, list_id: str) -> None:
        """Delete a list and its items."""

    def get_item(self, user_id: str, item_id: str) -> ShoppingListItem | None:
        """Return an item whose list is owned by the user."""

    def find_item(
        self, list_id: str, ingredient_id: str, unit: str
    ) -> ShoppingListItem | None:
        """Return the item of a list for an ingredient in a unit."""

    def create_item(self, list_id: str, item: NewShoppingListItem) -> ShoppingListItem:
        """Add an item to a list."""

    def update_item(
        self, item_id: str, payload: dict[str, object]
    ) -> ShoppingListItem:
        """Update item fields and return the item."""

    def delete_item(self, item_id: str) -> None:
        """Delete an item."""


class IngredientLookup(Protocol):
    """Minimal ingredient access needed by shopping lists."""

    def get_ingredient(self, ingredient_id: str) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def get_ingredients(self, ingredient_ids: list[str]) -> list[Ingredient]:
        """Return the ingredients found for the ids."""


@dataclass(frozen=True)
class ShoppingListPage:
    """A page of shopping lists."""

    lists: list[ShoppingList]
    pagination: Pagination


@dataclass(frozen=True)
class GeneratedShoppingList:
    """Outcome of generating a shopping list from recipes."""

    shopping_list: ShoppingList
    recipes_used: list[RecipeRecord]
    missing_recipe_ids: list[str]


@dataclass
class ShoppingListService:
    """Application service for shopping lists."""

    recipe_repository: RecipeRepository
    repository: ShoppingListRepository
    ingredient_lookup: IngredientLookup
    max_page_size: int = 50

    def generate_from_recipes(
        self,
        user_id: str,
        recipe_ids: list[str],
        serving_adjustments: Mapping[str, object] | None = None,
        list_name: str | None = None,
    ) -> GeneratedShoppingList:
        """Consolidate the recipes' ingredients and persist them as a new list."""
        requested = validate_recipe_ids(recipe_ids)
        recipes = self.recipe_repository.get_recipes(requested)
        result = consolidate(requested, serving_adjustments, recipes)
        if not result.recipes_used:
            raise RecipesNotFound("No recipes found")
        if result.partial:
            logger.warning(
                "Generating shopping list from a partial recipe set",
                extra={"user_id": user_id, "missing": result.missing_recipe_ids},
            )

        name = list_name or default_list_name(datetime.now(tz=UTC))
        shopping_list = self.repository.create_list(
            user_id,
            name,
            [
                NewShoppingListItem(
                    ingredient_id=item.ingredient_id,
                    quantity=item.quantity,
                    unit=item.unit,
                    notes=item.notes,
                )
                for item in result.items
            ],
        )
        logger.info(
            "Generated shopping list",
            extra={
                "user_id": user_id,
                "list_id": shopping_list.id,
                "items": len(result.items),
            },
        )
        return GeneratedShoppingList(
            shopping_list=self._with_ingredients([shopping_list])[0],
            recipes_used=result.recipes_used,
            missing_recipe_ids=result.missing_recipe_ids,
        )

    def list_lists(
        self, user_id: str, page: int = 1, limit: int = 20
    ) -> ShoppingListPage:
        """Return a page of the user's shopping lists."""
        offset = page_offset(page, limit, self.max_page_size)
        lists = self.repository.list_lists(user_id, offset=offset, limit=limit)
        total = self.repository.count_lists(user_id)
        return ShoppingListPage(
            lists=self._with_ingredients(lists),
            pagination=Pagination(page=page, limit=limit, total_count=total),
        )

    def get_list(self, user_id: str, list_id: str) -> ShoppingList:
        """Return a shopping list owned by the user.

        Items carry their catalog ingredient and are ordered by ingredient
        category, then name.
        """
        shopping_list = self._with_ingredients([self._owned_list(user_id, list_id)])[0]
        return replace(
            shopping_list, items=sorted(shopping_list.items, key=_aisle_order)
        )

    def create_list(
        self, user_id: str, name: str, items: list[NewShoppingListItem]
    ) -> ShoppingList:
        """Create a shopping list from explicit items."""
        if not name.strip():
            raise InvalidInput("Shopping list name is required")
        created = self.repository.create_list(user_id, name, items)
        return self._with_ingredients([created])[0]

    def update_list(
        self,
        user_id: str,
        list_id: str,
        name: str | None = None,
        completed: bool | None = None,
    ) -> ShoppingList:
        """Rename a list or toggle its completion."""
        self._owned_list(user_id, list_id)
        payload: dict[str, object] = {}
        if name is not None:
            payload["name"] = name
        if completed is not None:
            payload["completed"] = completed
        if not payload:
            return self.get_list(user_id, list_id)
        updated = self.repository.update_list(list_id, payload)
        return self._with_ingredients([updated])[0]

    def delete_list(self, user_id: str, list_id: str) -> None:
        """Delete a shopping list owned by the user."""
        self._owned_list(user_id, list_id)
        self.repository.delete_list(list_id)

    def add_item(  # noqa: PLR0913
        self,
        user_id: str,
        list_id: str,
        ingredient_id: str,
        quantity: float,
        unit: str,
        notes: str | None = None,
    ) -> tuple[ShoppingListItem, bool]:
        """Add an item, merging into an existing line with the same unit.

        Returns the item and whether a new row was created.
        """
        self._owned_list(user_id, list_id)
        if quantity < 0:
            raise InvalidInput("quantity must not be negative")
        ingredient = self.ingredient_lookup.get_ingredient(ingredient_id)
        if ingredient is None:
            raise IngredientNotFound("Ingredient not found")
        existing = self.repository.find_item(list_id, ingredient_id, unit)
        if existing is not None:
            item = self.repository.update_item(
                existing.id,
                {
                    "quantity": existing.quantity + quantity,
                    "notes": notes or existing.notes,
                },
            )
            return replace(item, ingredient=ingredient), False
        item = self.repository.create_item(
            list_id,
            NewShoppingListItem(
                ingredient_id=ingredient_id, quantity=quantity, unit=unit, notes=notes
            ),
        )
        return replace(item, ingredient=ingredient), True

    def update_item(  # noqa: PLR0913
        self,
        user_id: str,
        item_id: str,
        quantity: float | None = None,
        unit: str | None = None,
        purchased: bool | None = None,
        notes: str | None = None,
    ) -> ShoppingListItem:
        """Update fields of an item owned by the user."""
        existing = self._get_item(user_id, item_id)
        if quantity is not None and quantity < 0:
            raise InvalidInput("quantity must not be negative")
        payload: dict[str, object] = {}
        if quantity is not None:
            payload["quantity"] = quantity
        if unit is not None:
            payload["unit"] = unit
        if purchased is not None:
            payload["purchased"] = purchased
        if notes is not None:
            payload["notes"] = notes
        if payload:
            existing = self.repository.update_item(item_id, payload)
        ingredient = self.ingredient_lookup.get_ingredient(existing.ingredient_id)
        return replace(existing, ingredient=ingredient)

    def remove_item(self, user_id: str, item_id: str) -> None:
        """Remove an item owned by the user."""
        self._get_item(user_id, item_id)
        self.repository.delete_item(item_id)

    def _get_item(self, user_id: str, item_id: str) -> ShoppingListItem:
        item = self.repository.get_item(user_id, item_id)
        if item is None:
            raise ShoppingListItemNotFound("Shopping list item not found")
        return item

    def _owned_list(self, user_id: str, list_id: str) -> ShoppingList:
        shopping_list = self.repository.get_list(user_id, list_id)
        if shopping_list is None:
            raise ShoppingListNotFound("Shopping list not found")
        return shopping_list

    def _with_ingredients(self, lists: list[ShoppingList]) -> list[ShoppingList]:
        """Attach catalog ingredients to every item with one lookup."""
        ingredient_ids = [item.ingredient_id for sl in lists for item in sl.items]
        if not ingredient_ids:
            return lists
        catalog = {
            ingredient.id: ingredient
            for ingredient in self.ingredient_lookup.get_ingredients(ingredient_ids)
        }
        return [
            replace(
                sl,
                items=[
                    replace(item, ingredient=catalog.get(item.ingredient_id))
                    for item in sl.items
                ],
            )
            for sl in lists
        ]


def default_list_name(now: datetime) -> str:
    """Return the name used when the caller does not provide one."""
    return f"Shopping List - {now.date().isoformat()}"


def _aisle_order(item: ShoppingListItem) -> tuple[bool, str, str]:
    # Items whose ingredient left the catalog sort last.
    if item.ingredient is None:
        return (True, "", item.ingredient_id)
    return (False, item.ingredient.category or "", item.ingredient.name)
