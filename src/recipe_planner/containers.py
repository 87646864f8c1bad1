"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from recipe_planner.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from recipe_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from recipe_planner.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from recipe_planner.adapters.supabase_shopping_list_repository import (
    SupabaseShoppingListRepository,
)
from recipe_planner.adapters.supabase_token_verifier import SupabaseTokenVerifier
from recipe_planner.config import Settings
from recipe_planner.services.auth import AuthService
from recipe_planner.services.catalog import CatalogService
from recipe_planner.services.shopping import ShoppingListService
from recipe_planner.services.substitutions import SubstitutionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    shopping_list_service: ShoppingListService
    substitution_service: SubstitutionService
    catalog_service: CatalogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    ingredient_repository = SupabaseIngredientRepository(supabase_client)
    shopping_list_repository = SupabaseShoppingListRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    auth_service = AuthService(SupabaseTokenVerifier(supabase_client))
    shopping_list_service = ShoppingListService(
        recipe_repository=recipe_repository,
        repository=shopping_list_repository,
        ingredient_lookup=ingredient_repository,
        max_page_size=resolved_settings.max_page_size,
    )
    substitution_service = SubstitutionService(
        ingredient_repository=ingredient_repository,
        profile_repository=profile_repository,
        recipe_repository=recipe_repository,
    )
    catalog_service = CatalogService(
        recipe_repository=recipe_repository,
        ingredient_catalog=ingredient_repository,
        option_repository=profile_repository,
        substitution_service=substitution_service,
        max_page_size=resolved_settings.max_page_size,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        shopping_list_service=shopping_list_service,
        substitution_service=substitution_service,
        catalog_service=catalog_service,
        close_resources=close_resources,
    )
