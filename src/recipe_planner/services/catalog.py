"""Read-only browsing of recipes, ingredients and profile options."""

from dataclasses import dataclass, replace
from typing import Protocol

from recipe_planner.domain.errors import RecipeNotFound
from recipe_planner.domain.ingredients import Ingredient, ProfileOption
from recipe_planner.domain.recipes import RecipeRecord
from recipe_planner.services.pagination import Pagination, page_offset
from recipe_planner.services.recipes import RecipeRepository
from recipe_planner.services.substitutions import (
    SubstituteListing,
    SubstitutionService,
)


class IngredientCatalog(Protocol):
    """Search access to the ingredient catalog."""

    def get_ingredients(self, ingredient_ids: list[str]) -> list[Ingredient]:
        """Return the ingredients found for the ids."""

    def search_ingredients(
        self, query: str | None, category: str | None, offset: int, limit: int
    ) -> list[Ingredient]:
        """Return a page of ingredients ordered by name."""

    def count_ingredients(self, query: str | None, category: str | None) -> int:
        """Return how many ingredients match the filters."""

    def list_categories(self) -> list[str]:
        """Return the distinct ingredient categories."""


class ProfileOptionRepository(Protocol):
    """Read access to the selectable allergies and dietary restrictions."""

    def list_allergies(self) -> list[ProfileOption]:
        """Return every known allergy ordered by name."""

    def list_dietary_restrictions(self) -> list[ProfileOption]:
        """Return every known dietary restriction ordered by name."""


@dataclass(frozen=True)
class RecipePage:
    """A page of recipes."""

    recipes: list[RecipeRecord]
    pagination: Pagination


@dataclass(frozen=True)
class IngredientPage:
    """A page of ingredients."""

    ingredients: list[Ingredient]
    pagination: Pagination


@dataclass
class CatalogService:
    """Lookups used to pick recipes and ingredients for shopping lists."""

    recipe_repository: RecipeRepository
    ingredient_catalog: IngredientCatalog
    option_repository: ProfileOptionRepository
    substitution_service: SubstitutionService
    max_page_size: int = 50

    def search_recipes(
        self, query: str | None = None, page: int = 1, limit: int = 12
    ) -> RecipePage:
        """Return a page of recipes, optionally filtered by title."""
        offset = page_offset(page, limit, self.max_page_size)
        query = _clean(query)
        recipes = self.recipe_repository.search_recipes(query, offset, limit)
        total = self.recipe_repository.count_recipes(query)
        return RecipePage(
            recipes=self._with_ingredients(recipes),
            pagination=Pagination(page=page, limit=limit, total_count=total),
        )

    def get_recipe(self, recipe_id: str) -> RecipeRecord:
        """Return a recipe with catalog details on each ingredient line."""
        recipe = self.recipe_repository.get_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFound("Recipe not found")
        return self._with_ingredients([recipe])[0]

    def search_ingredients(
        self,
        query: str | None = None,
        category: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> IngredientPage:
        """Return a page of ingredients filtered by name and category."""
        offset = page_offset(page, limit, self.max_page_size)
        query, category = _clean(query), _clean(category)
        ingredients = self.ingredient_catalog.search_ingredients(
            query, category, offset, limit
        )
        total = self.ingredient_catalog.count_ingredients(query, category)
        return IngredientPage(
            ingredients=ingredients,
            pagination=Pagination(page=page, limit=limit, total_count=total),
        )

    def get_ingredient(self, ingredient_id: str) -> SubstituteListing:
        """Return an ingredient together with its known substitutes."""
        return self.substitution_service.get_substitutes(ingredient_id)

    def list_categories(self) -> list[str]:
        """Return ingredient categories in alphabetical order."""
        categories = self.ingredient_catalog.list_categories()
        return sorted({category for category in categories if category})

    def list_allergies(self) -> list[ProfileOption]:
        return self.option_repository.list_allergies()

    def list_dietary_restrictions(self) -> list[ProfileOption]:
        return self.option_repository.list_dietary_restrictions()

    def _with_ingredients(self, recipes: list[RecipeRecord]) -> list[RecipeRecord]:
        ingredient_ids = [
            line.ingredient_id for recipe in recipes for line in recipe.ingredients
        ]
        if not ingredient_ids:
            return recipes
        catalog = {
            ingredient.id: ingredient
            for ingredient in self.ingredient_catalog.get_ingredients(ingredient_ids)
        }
        return [
            replace(
                recipe,
                ingredients=[
                    replace(line, ingredient=catalog.get(line.ingredient_id))
                    for line in recipe.ingredients
                ],
            )
            for recipe in recipes
        ]


def _clean(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()
