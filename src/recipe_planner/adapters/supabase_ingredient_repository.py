"""Supabase implementation for ingredients and substitutions."""

from dataclasses import dataclass

from supabase import Client

from recipe_planner.domain.ingredients import Ingredient, Substitution, parse_allergens
from recipe_planner.services.catalog import IngredientCatalog
from recipe_planner.services.substitutions import IngredientRepository


@dataclass
class SupabaseIngredientRepository(IngredientRepository, IngredientCatalog):
    """Supabase-backed ingredient catalog."""

    client: Client

    def get_ingredient(self, ingredient_id: str) -> Ingredient | None:
        """Return an ingredient by id, if present."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .eq("id", ingredient_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_ingredient(response.data[0])

    def get_ingredients(self, ingredient_ids: list[str]) -> list[Ingredient]:
        """Return the ingredients found for the ids."""
        if not ingredient_ids:
            return []
        response = (
            self.client.table("ingredients")
            .select("*")
            .in_("id", list(dict.fromkeys(ingredient_ids)))
            .execute()
        )
        return [_parse_ingredient(row) for row in response.data or []]

    def search_ingredients(
        self, query: str | None, category: str | None, offset: int, limit: int
    ) -> list[Ingredient]:
        """Return a page of ingredients ordered by name."""
        request = self.client.table("ingredients").select("*")
        request = _filtered(request, query, category)
        response = request.order("name").range(offset, offset + limit - 1).execute()
        return [_parse_ingredient(row) for row in response.data or []]

    def count_ingredients(self, query: str | None, category: str | None) -> int:
        """Return how many ingredients match the filters."""
        request = self.client.table("ingredients").select("id", count="exact")
        response = _filtered(request, query, category).execute()
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])

    def list_categories(self) -> list[str]:
        """Return the distinct ingredient categories."""
        response = self.client.table("ingredients").select("category").execute()
        return list(
            dict.fromkeys(
                str(row["category"])
                for row in response.data or []
                if row.get("category")
            )
        )

    def list_substitutions(self, original_id: str) -> list[Substitution]:
        """Return substitutions recorded for an ingredient."""
        response = (
            self.client.table("ingredient_substitutions")
            .select("*")
            .eq("original_id", original_id)
            .order("ratio")
            .execute()
        )
        return [_parse_substitution(row) for row in response.data or []]

    def get_substitution(
        self, original_id: str, substitute_id: str
    ) -> Substitution | None:
        """Return the substitution for a pair, if present."""
        response = (
            self.client.table("ingredient_substitutions")
            .select("*")
            .eq("original_id", original_id)
            .eq("substitute_id", substitute_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_substitution(response.data[0])

    def create_substitution(  # noqa: PLR0913
        self,
        original_id: str,
        substitute_id: str,
        ratio: float,
        dietary_benefit: str | None,
        flavor_profile: str | None,
    ) -> Substitution:
        """Create a substitution and return it."""
        response = (
            self.client.table("ingredient_substitutions")
            .insert(
                {
                    "original_id": original_id,
                    "substitute_id": substitute_id,
                    "ratio": ratio,
                    "dietary_benefit": dietary_benefit,
                    "flavor_profile": flavor_profile,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create ingredient substitution")
        return _parse_substitution(response.data[0])


def _filtered(  # type: ignore[no-untyped-def]
    request, query: str | None, category: str | None
):
    if query:
        request = request.ilike("name", f"%{query}%")
    if category:
        request = request.ilike("category", f"%{category}%")
    return request


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse an ingredient row into a domain model."""
    return Ingredient(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        category=row.get("category"),
        unit=str(row.get("unit") or "piece"),
        allergens=parse_allergens(row.get("allergens")),
        calories_per_unit=_optional_float(row.get("calories_per_unit")),
        protein_per_unit=_optional_float(row.get("protein_per_unit")),
        carbs_per_unit=_optional_float(row.get("carbs_per_unit")),
        fat_per_unit=_optional_float(row.get("fat_per_unit")),
    )


def _parse_substitution(row: dict[str, object]) -> Substitution:
    return Substitution(
        id=str(row["id"]),
        original_id=str(row["original_id"]),
        substitute_id=str(row["substitute_id"]),
        ratio=float(row.get("ratio") or 1.0),
        dietary_benefit=row.get("dietary_benefit"),
        flavor_profile=row.get("flavor_profile"),
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None
