"""Supabase repository for user dietary profiles."""

from dataclasses import dataclass

from supabase import Client

from recipe_planner.domain.ingredients import ProfileOption, UserProfile
from recipe_planner.services.catalog import ProfileOptionRepository
from recipe_planner.services.substitutions import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository, ProfileOptionRepository):
    """Supabase implementation for allergies and dietary restrictions."""

    client: Client

    def get_profile(self, user_id: str) -> UserProfile:
        """Return the user's allergies and dietary restrictions."""
        allergies = (
            self.client.table("user_allergies")
            .select("name")
            .eq("user_id", user_id)
            .execute()
        )
        restrictions = (
            self.client.table("user_dietary_restrictions")
            .select("name")
            .eq("user_id", user_id)
            .execute()
        )
        return UserProfile(
            user_id=user_id,
            allergies=[str(row["name"]) for row in allergies.data or []],
            dietary_restrictions=[str(row["name"]) for row in restrictions.data or []],
        )

    def list_allergies(self) -> list[ProfileOption]:
        """Return every known allergy ordered by name."""
        return self._options("allergies")

    def list_dietary_restrictions(self) -> list[ProfileOption]:
        """Return every known dietary restriction ordered by name."""
        return self._options("dietary_restrictions")

    def _options(self, table: str) -> list[ProfileOption]:
        response = self.client.table(table).select("*").order("name").execute()
        return [
            ProfileOption(
                id=str(row["id"]),
                name=str(row["name"]),
                description=row.get("description"),
            )
            for row in response.data or []
        ]
