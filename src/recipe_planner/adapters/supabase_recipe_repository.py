"""Supabase-backed recipe store."""

from dataclasses import dataclass

from supabase import Client

from recipe_planner.domain.recipes import RecipeIngredientLine, RecipeRecord
from recipe_planner.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Reads recipes and their ingredient lines from Supabase."""

    client: Client

    def get_recipes(self, recipe_ids: list[str]) -> list[RecipeRecord]:
        """Return found recipes in the order their ids were requested."""
        if not recipe_ids:
            return []
        response = (
            self.client.table("recipes").select("*").in_("id", recipe_ids).execute()
        )
        recipes = self._with_lines(response.data or [])
        order = {recipe_id: index for index, recipe_id in enumerate(recipe_ids)}
        return sorted(recipes, key=lambda recipe: order.get(recipe.id, len(order)))

    def get_recipe(self, recipe_id: str) -> RecipeRecord | None:
        """Return a single recipe, if present."""
        found = self.get_recipes([recipe_id])
        return found[0] if found else None

    def search_recipes(
        self, query: str | None, offset: int, limit: int
    ) -> list[RecipeRecord]:
        """Return a page of recipes matching the title query, newest first."""
        request = self.client.table("recipes").select("*")
        if query:
            request = request.ilike("title", f"%{query}%")
        response = (
            request.order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return self._with_lines(response.data or [])

    def count_recipes(self, query: str | None) -> int:
        """Return how many recipes match the title query."""
        request = self.client.table("recipes").select("id", count="exact")
        if query:
            request = request.ilike("title", f"%{query}%")
        response = request.execute()
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])

    def _with_lines(self, rows: list[dict[str, object]]) -> list[RecipeRecord]:
        if not rows:
            return []
        lines = self._list_lines([str(row["id"]) for row in rows])
        return [_parse_recipe(row, lines.get(str(row["id"]), [])) for row in rows]

    def _list_lines(
        self, recipe_ids: list[str]
    ) -> dict[str, list[RecipeIngredientLine]]:
        # Ordered by id so repeated reads list lines the same way.
        response = (
            self.client.table("recipe_ingredients")
            .select("id, recipe_id, ingredient_id, quantity, unit, notes")
            .in_("recipe_id", recipe_ids)
            .order("id")
            .execute()
        )
        lines: dict[str, list[RecipeIngredientLine]] = {}
        for row in response.data or []:
            lines.setdefault(str(row["recipe_id"]), []).append(
                RecipeIngredientLine(
                    ingredient_id=str(row["ingredient_id"]),
                    quantity=float(row.get("quantity") or 0.0),
                    unit=str(row.get("unit") or ""),
                    notes=row.get("notes"),
                )
            )
        return lines


def _parse_recipe(
    row: dict[str, object], lines: list[RecipeIngredientLine]
) -> RecipeRecord:
    """Parse a recipe row into a domain model."""
    servings = row.get("servings")
    return RecipeRecord(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        servings=int(servings) if servings is not None else 1,
        ingredients=lines,
        description=row.get("description"),
    )
