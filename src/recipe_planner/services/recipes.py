"""Recipe store interface."""

from typing import Protocol

from recipe_planner.domain.recipes import RecipeRecord


class RecipeRepository(Protocol):
    """Read access to recipes and their ingredient lines."""

    def get_recipes(self, recipe_ids: list[str]) -> list[RecipeRecord]:
        """Return the recipes found for the ids; missing ids are skipped."""

    def get_recipe(self, recipe_id: str) -> RecipeRecord | None:
        """Return a single recipe, if present."""

    def search_recipes(
        self, query: str | None, offset: int, limit: int
    ) -> list[RecipeRecord]:
        """Return a page of recipes whose title matches the query."""

    def count_recipes(self, query: str | None) -> int:
        """Return how many recipes match the query."""
