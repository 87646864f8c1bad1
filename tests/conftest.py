"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from recipe_planner.config import Settings
from recipe_planner.containers import AppContainer
from recipe_planner.domain.ingredients import (
    Ingredient,
    ProfileOption,
    Substitution,
    UserProfile,
)
from recipe_planner.domain.recipes import RecipeIngredientLine, RecipeRecord
from recipe_planner.domain.shopping import (
    NewShoppingListItem,
    ShoppingList,
    ShoppingListItem,
)
from recipe_planner.services.auth import AuthService, TokenVerifier
from recipe_planner.services.catalog import (
    CatalogService,
    IngredientCatalog,
    ProfileOptionRepository,
)
from recipe_planner.services.recipes import RecipeRepository
from recipe_planner.services.shopping import (
    ShoppingListRepository,
    ShoppingListService,
)
from recipe_planner.services.substitutions import (
    IngredientRepository,
    ProfileRepository,
    SubstitutionService,
)

TEST_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


def make_recipe(
    recipe_id: str,
    title: str,
    servings: int,
    lines: list[tuple[str, float, str]],
) -> RecipeRecord:
    """Build a recipe from (ingredient_id, quantity, unit) tuples."""
    return RecipeRecord(
        id=recipe_id,
        title=title,
        servings=servings,
        ingredients=[
            RecipeIngredientLine(ingredient_id=ingredient_id, quantity=qty, unit=unit)
            for ingredient_id, qty, unit in lines
        ],
    )


def make_ingredient(
    ingredient_id: str,
    name: str,
    allergens: list[str] | None = None,
    category: str | None = "pantry",
) -> Ingredient:
    return Ingredient(
        id=ingredient_id,
        name=name,
        category=category,
        unit="cup",
        allergens=allergens or [],
    )


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe store for tests."""

    recipes: dict[str, RecipeRecord] = field(default_factory=dict)
    requested: list[list[str]] = field(default_factory=list)

    def add(self, recipe: RecipeRecord) -> RecipeRecord:
        self.recipes[recipe.id] = recipe
        return recipe

    def get_recipes(self, recipe_ids: list[str]) -> list[RecipeRecord]:
        self.requested.append(list(recipe_ids))
        return [self.recipes[rid] for rid in recipe_ids if rid in self.recipes]

    def get_recipe(self, recipe_id: str) -> RecipeRecord | None:
        return self.recipes.get(recipe_id)

    def _matching(self, query: str | None) -> list[RecipeRecord]:
        return [
            recipe
            for recipe in self.recipes.values()
            if not query or query.lower() in recipe.title.lower()
        ]

    def search_recipes(
        self, query: str | None, offset: int, limit: int
    ) -> list[RecipeRecord]:
        return self._matching(query)[offset : offset + limit]

    def count_recipes(self, query: str | None) -> int:
        return len(self._matching(query))


@dataclass
class InMemoryShoppingListRepository(ShoppingListRepository):
    """In-memory shopping list store for tests."""

    lists: dict[str, ShoppingList] = field(default_factory=dict)
    items: dict[str, ShoppingListItem] = field(default_factory=dict)
    _clock: datetime = field(
        default_factory=lambda: datetime(2026, 1, 1, tzinfo=UTC)
    )

    def _tick(self) -> datetime:
        self._clock += timedelta(minutes=1)
        return self._clock

    def _with_items(self, shopping_list: ShoppingList) -> ShoppingList:
        items = [
            item
            for item in self.items.values()
            if item.shopping_list_id == shopping_list.id
        ]
        return replace(shopping_list, items=items)

    def create_list(
        self, user_id: str, name: str, items: list[NewShoppingListItem]
    ) -> ShoppingList:
        now = self._tick()
        shopping_list = ShoppingList(
            id=str(uuid4()),
            name=name,
            user_id=user_id,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        self.lists[shopping_list.id] = shopping_list
        for item in items:
            self.create_item(shopping_list.id, item)
        return self._with_items(shopping_list)

    def list_lists(self, user_id: str, offset: int, limit: int) -> list[ShoppingList]:
        owned = sorted(
            (sl for sl in self.lists.values() if sl.user_id == user_id),
            key=lambda sl: sl.created_at,
            reverse=True,
        )
        return [self._with_items(sl) for sl in owned[offset : offset + limit]]

    def count_lists(self, user_id: str) -> int:
        return sum(1 for sl in self.lists.values() if sl.user_id == user_id)

    def get_list(self, user_id: str, list_id: str) -> ShoppingList | None:
        shopping_list = self.lists.get(list_id)
        if shopping_list is None or shopping_list.user_id != user_id:
            return None
        return self._with_items(shopping_list)

    def update_list(self, list_id: str, payload: dict[str, object]) -> ShoppingList:
        updated = replace(self.lists[list_id], **payload, updated_at=self._tick())
        self.lists[list_id] = updated
        return self._with_items(updated)

    def delete_list(self, list_id: str) -> None:
        self.lists.pop(list_id, None)
        self.items = {
            item_id: item
            for item_id, item in self.items.items()
            if item.shopping_list_id != list_id
        }

    def get_item(self, user_id: str, item_id: str) -> ShoppingListItem | None:
        item = self.items.get(item_id)
        if item is None:
            return None
        owner = self.lists.get(item.shopping_list_id)
        if owner is None or owner.user_id != user_id:
            return None
        return item

    def find_item(
        self, list_id: str, ingredient_id: str, unit: str
    ) -> ShoppingListItem | None:
        for item in self.items.values():
            if (
                item.shopping_list_id == list_id
                and item.ingredient_id == ingredient_id
                and item.unit == unit
            ):
                return item
        return None

    def create_item(self, list_id: str, item: NewShoppingListItem) -> ShoppingListItem:
        created = ShoppingListItem(
            id=str(uuid4()),
            shopping_list_id=list_id,
            ingredient_id=item.ingredient_id,
            quantity=item.quantity,
            unit=item.unit,
            notes=item.notes,
        )
        self.items[created.id] = created
        return created

    def update_item(
        self, item_id: str, payload: dict[str, object]
    ) -> ShoppingListItem:
        updated = replace(self.items[item_id], **payload)
        self.items[item_id] = updated
        return updated

    def delete_item(self, item_id: str) -> None:
        self.items.pop(item_id, None)


@dataclass
class InMemoryIngredientRepository(IngredientRepository, IngredientCatalog):
    """In-memory ingredient catalog for tests."""

    ingredients: dict[str, Ingredient] = field(default_factory=dict)
    substitutions: list[Substitution] = field(default_factory=list)

    def add(self, ingredient: Ingredient) -> Ingredient:
        self.ingredients[ingredient.id] = ingredient
        return ingredient

    def get_ingredient(self, ingredient_id: str) -> Ingredient | None:
        return self.ingredients.get(ingredient_id)

    def get_ingredients(self, ingredient_ids: list[str]) -> list[Ingredient]:
        return [
            self.ingredients[iid]
            for iid in dict.fromkeys(ingredient_ids)
            if iid in self.ingredients
        ]

    def _matching(self, query: str | None, category: str | None) -> list[Ingredient]:
        return sorted(
            (
                ingredient
                for ingredient in self.ingredients.values()
                if (not query or query.lower() in ingredient.name.lower())
                and (
                    not category
                    or category.lower() in (ingredient.category or "").lower()
                )
            ),
            key=lambda ingredient: ingredient.name,
        )

    def search_ingredients(
        self, query: str | None, category: str | None, offset: int, limit: int
    ) -> list[Ingredient]:
        return self._matching(query, category)[offset : offset + limit]

    def count_ingredients(self, query: str | None, category: str | None) -> int:
        return len(self._matching(query, category))

    def list_categories(self) -> list[str]:
        return [
            ingredient.category
            for ingredient in self.ingredients.values()
            if ingredient.category
        ]

    def list_substitutions(self, original_id: str) -> list[Substitution]:
        return [sub for sub in self.substitutions if sub.original_id == original_id]

    def get_substitution(
        self, original_id: str, substitute_id: str
    ) -> Substitution | None:
        for sub in self.substitutions:
            if sub.original_id == original_id and sub.substitute_id == substitute_id:
                return sub
        return None

    def create_substitution(  # noqa: PLR0913
        self,
        original_id: str,
        substitute_id: str,
        ratio: float,
        dietary_benefit: str | None,
        flavor_profile: str | None,
    ) -> Substitution:
        substitution = Substitution(
            id=str(uuid4()),
            original_id=original_id,
            substitute_id=substitute_id,
            ratio=ratio,
            dietary_benefit=dietary_benefit,
            flavor_profile=flavor_profile,
        )
        self.substitutions.append(substitution)
        return substitution


@dataclass
class InMemoryProfileRepository(ProfileRepository, ProfileOptionRepository):
    """In-memory user profiles for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)
    allergies: list[ProfileOption] = field(default_factory=list)
    dietary_restrictions: list[ProfileOption] = field(default_factory=list)

    def get_profile(self, user_id: str) -> UserProfile:
        return self.profiles.get(user_id, UserProfile(user_id=user_id))

    def list_allergies(self) -> list[ProfileOption]:
        return sorted(self.allergies, key=lambda option: option.name)

    def list_dietary_restrictions(self) -> list[ProfileOption]:
        return sorted(self.dietary_restrictions, key=lambda option: option.name)


@dataclass
class FakeTokenVerifier(TokenVerifier):
    """Maps fixed tokens to user ids."""

    tokens: dict[str, str] = field(
        default_factory=lambda: {"token-alice": "alice", "token-bob": "bob"}
    )

    def verify(self, token: str) -> str | None:
        return self.tokens.get(token)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=TEST_SERVICE_KEY,
    )


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def shopping_list_repository() -> InMemoryShoppingListRepository:
    return InMemoryShoppingListRepository()


@pytest.fixture
def ingredient_repository() -> InMemoryIngredientRepository:
    return InMemoryIngredientRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def shopping_list_service(
    recipe_repository: InMemoryRecipeRepository,
    shopping_list_repository: InMemoryShoppingListRepository,
    ingredient_repository: InMemoryIngredientRepository,
) -> ShoppingListService:
    return ShoppingListService(
        recipe_repository=recipe_repository,
        repository=shopping_list_repository,
        ingredient_lookup=ingredient_repository,
    )


@pytest.fixture
def substitution_service(
    recipe_repository: InMemoryRecipeRepository,
    ingredient_repository: InMemoryIngredientRepository,
    profile_repository: InMemoryProfileRepository,
) -> SubstitutionService:
    return SubstitutionService(
        ingredient_repository=ingredient_repository,
        profile_repository=profile_repository,
        recipe_repository=recipe_repository,
    )


@pytest.fixture
def catalog_service(
    recipe_repository: InMemoryRecipeRepository,
    ingredient_repository: InMemoryIngredientRepository,
    profile_repository: InMemoryProfileRepository,
    substitution_service: SubstitutionService,
) -> CatalogService:
    return CatalogService(
        recipe_repository=recipe_repository,
        ingredient_catalog=ingredient_repository,
        option_repository=profile_repository,
        substitution_service=substitution_service,
    )


@pytest.fixture
def container(
    settings: Settings,
    shopping_list_service: ShoppingListService,
    substitution_service: SubstitutionService,
    catalog_service: CatalogService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(FakeTokenVerifier()),
        shopping_list_service=shopping_list_service,
        substitution_service=substitution_service,
        catalog_service=catalog_service,
        close_resources=close_resources,
    )


ALICE = {"Authorization": "Bearer token-alice"}
BOB = {"Authorization": "Bearer token-bob"}
