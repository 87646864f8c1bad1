"""Supabase implementation for shopping lists."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from recipe_planner.domain.shopping import (
    NewShoppingListItem,
    ShoppingList,
    ShoppingListItem,
)
from recipe_planner.services.shopping import ShoppingListRepository


@dataclass
class SupabaseShoppingListRepository(ShoppingListRepository):
    """Supabase-backed repository for shopping lists and items."""

    client: Client

    def create_list(
        self, user_id: str, name: str, items: list[NewShoppingListItem]
    ) -> ShoppingList:
        """Create a list with its items and return it."""
        response = (
            self.client.table("shopping_lists")
            .insert({"user_id": user_id, "name": name, "completed": False})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create shopping list")
        row = response.data[0]
        list_id = str(row["id"])
        created: list[ShoppingListItem] = []
        if items:
            items_response = (
                self.client.table("shopping_list_items")
                .insert([_item_payload(list_id, item) for item in items])
                .execute()
            )
            if not items_response.data:
                self.client.table("shopping_lists").delete().eq("id", list_id).execute()
                raise RuntimeError("Failed to create shopping list items")
            created = [_parse_item(item_row) for item_row in items_response.data]
        return _parse_list(row, created)

    def list_lists(self, user_id: str, offset: int, limit: int) -> list[ShoppingList]:
        """Return a page of the user's lists, newest first."""
        response = (
            self.client.table("shopping_lists")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        rows = response.data or []
        items = self._items_by_list([str(row["id"]) for row in rows])
        return [_parse_list(row, items.get(str(row["id"]), [])) for row in rows]

    def count_lists(self, user_id: str) -> int:
        """Return how many lists the user owns."""
        response = (
            self.client.table("shopping_lists")
            .select("id", count="exact")
            .eq("user_id", user_id)
            .execute()
        )
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])

    def get_list(self, user_id: str, list_id: str) -> ShoppingList | None:
        """Return a list owned by the user, with items."""
        response = (
            self.client.table("shopping_lists")
            .select("*")
            .eq("id", list_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        items = self._items_by_list([list_id])
        return _parse_list(response.data[0], items.get(list_id, []))

    def update_list(self, list_id: str, payload: dict[str, object]) -> ShoppingList:
        """Update list fields and return the list."""
        response = (
            self.client.table("shopping_lists")
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", list_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update shopping list")
        items = self._items_by_list([list_id])
        return _parse_list(response.data[0], items.get(list_id, []))

    def delete_list(self, list_id: str) -> None:
        """Delete a list and its items."""
        self.client.table("shopping_list_items").delete().eq(
            "shopping_list_id", list_id
        ).execute()
        self.client.table("shopping_lists").delete().eq("id", list_id).execute()

    def get_item(self, user_id: str, item_id: str) -> ShoppingListItem | None:
        """Return an item whose list is owned by the user."""
        response = (
            self.client.table("shopping_list_items")
            .select("*")
            .eq("id", item_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        item = _parse_item(response.data[0])
        owner = (
            self.client.table("shopping_lists")
            .select("id")
            .eq("id", item.shopping_list_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not owner.data:
            return None
        return item

    def find_item(
        self, list_id: str, ingredient_id: str, unit: str
    ) -> ShoppingListItem | None:
        """Return the item of a list for an ingredient in a unit."""
        response = (
            self.client.table("shopping_list_items")
            .select("*")
            .eq("shopping_list_id", list_id)
            .eq("ingredient_id", ingredient_id)
            .eq("unit", unit)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def create_item(self, list_id: str, item: NewShoppingListItem) -> ShoppingListItem:
        """Add an item to a list."""
        response = (
            self.client.table("shopping_list_items")
            .insert(_item_payload(list_id, item))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create shopping list item")
        return _parse_item(response.data[0])

    def update_item(
        self, item_id: str, payload: dict[str, object]
    ) -> ShoppingListItem:
        """Update item fields and return the item."""
        response = (
            self.client.table("shopping_list_items")
            .update(payload)
            .eq("id", item_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update shopping list item")
        return _parse_item(response.data[0])

    def delete_item(self, item_id: str) -> None:
        """Delete an item."""
        self.client.table("shopping_list_items").delete().eq("id", item_id).execute()

    def _items_by_list(
        self, list_ids: list[str]
    ) -> dict[str, list[ShoppingListItem]]:
        if not list_ids:
            return {}
        response = (
            self.client.table("shopping_list_items")
            .select("*")
            .in_("shopping_list_id", list_ids)
            .execute()
        )
        grouped: dict[str, list[ShoppingListItem]] = {}
        for row in response.data or []:
            item = _parse_item(row)
            grouped.setdefault(item.shopping_list_id, []).append(item)
        return grouped


def _item_payload(list_id: str, item: NewShoppingListItem) -> dict[str, object]:
    return {
        "shopping_list_id": list_id,
        "ingredient_id": item.ingredient_id,
        "quantity": item.quantity,
        "unit": item.unit,
        "notes": item.notes,
        "purchased": False,
    }


def _parse_list(row: dict[str, object], items: list[ShoppingListItem]) -> ShoppingList:
    """Parse a shopping list row into a domain model."""
    return ShoppingList(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        user_id=str(row.get("user_id", "")),
        completed=bool(row.get("completed", False)),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
        items=items,
    )


def _parse_item(row: dict[str, object]) -> ShoppingListItem:
    """Parse a shopping list item row into a domain model."""
    return ShoppingListItem(
        id=str(row["id"]),
        shopping_list_id=str(row["shopping_list_id"]),
        ingredient_id=str(row["ingredient_id"]),
        quantity=float(row.get("quantity", 0.0)),
        unit=str(row.get("unit", "")),
        purchased=bool(row.get("purchased", False)),
        notes=row.get("notes"),
    )


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
