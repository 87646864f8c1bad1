"""Domain models for ingredients and substitutions."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Ingredient:
    """Ingredient catalog entry."""

    id: str
    name: str
    category: str | None
    unit: str
    allergens: list[str] = field(default_factory=list)
    calories_per_unit: float | None = None
    protein_per_unit: float | None = None
    carbs_per_unit: float | None = None
    fat_per_unit: float | None = None

    def has_allergen(self, allergies: list[str]) -> bool:
        """Return True when any of the given allergies is listed."""
        listed = {allergen.lower() for allergen in self.allergens}
        return any(allergy.lower() in listed for allergy in allergies)


@dataclass(frozen=True)
class Substitution:
    """Substitution edge between two ingredients."""

    id: str
    original_id: str
    substitute_id: str
    ratio: float
    dietary_benefit: str | None
    flavor_profile: str | None


@dataclass(frozen=True)
class SubstituteOption:
    """Substitute ingredient with the substitution that links it."""

    ingredient: Ingredient
    substitution: Substitution


@dataclass(frozen=True)
class SubstitutionSuggestion:
    """Substitutes proposed for one ingredient of a recipe."""

    original: Ingredient
    quantity: float
    unit: str
    substitutes: list[SubstituteOption]


@dataclass(frozen=True)
class UserProfile:
    """Dietary profile of a user."""

    user_id: str
    allergies: list[str] = field(default_factory=list)
    dietary_restrictions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ProfileOption:
    """Selectable allergy or dietary restriction."""

    id: str
    name: str
    description: str | None = None


def parse_allergens(raw: object) -> list[str]:
    """Parse a stored allergen value into a list of names."""
    if raw is None:
        return []
    if isinstance(raw, list):
        return [str(value).strip() for value in raw if str(value).strip()]
    return [chunk.strip() for chunk in str(raw).split(",") if chunk.strip()]
