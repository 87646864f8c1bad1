"""Domain models for persisted shopping lists."""

from dataclasses import dataclass, field
from datetime import datetime

from recipe_planner.domain.ingredients import Ingredient


@dataclass(frozen=True)
class ShoppingListItem:
    """Row of a shopping list."""

    id: str
    shopping_list_id: str
    ingredient_id: str
    quantity: float
    unit: str
    purchased: bool = False
    notes: str | None = None
    ingredient: Ingredient | None = None


@dataclass(frozen=True)
class ShoppingList:
    """Shopping list owned by a user."""

    id: str
    name: str
    user_id: str
    completed: bool
    created_at: datetime | None
    updated_at: datetime | None
    items: list[ShoppingListItem] = field(default_factory=list)


@dataclass(frozen=True)
class NewShoppingListItem:
    """Item payload for creating shopping list rows."""

    ingredient_id: str
    quantity: float
    unit: str
    notes: str | None = None
