"""Ingredient substitution lookup and suggestions."""

from dataclasses import dataclass
from typing import Protocol

from recipe_planner.domain.errors import (
    IngredientNotFound,
    InvalidInput,
    SubstitutionExists,
)
from recipe_planner.domain.ingredients import (
    Ingredient,
    SubstituteOption,
    Substitution,
    SubstitutionSuggestion,
    UserProfile,
)
from recipe_planner.services.recipes import RecipeRepository


class IngredientRepository(Protocol):
    """Persistence interface for ingredients and substitutions."""

    def get_ingredient(self, ingredient_id: str) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def get_ingredients(self, ingredient_ids: list[str]) -> list[Ingredient]:
        """Return the ingredients found for the ids."""

    def list_substitutions(self, original_id: str) -> list[Substitution]:
        """Return substitutions recorded for an ingredient."""

    def get_substitution(
        self, original_id: str, substitute_id: str
    ) -> Substitution | None:
        """Return the substitution for a pair, if present."""

    def create_substitution(  # noqa: PLR0913
        self,
        original_id: str,
        substitute_id: str,
        ratio: float,
        dietary_benefit: str | None,
        flavor_profile: str | None,
    ) -> Substitution:
        """Create a substitution and return it."""


class ProfileRepository(Protocol):
    """Read access to users' allergies and dietary restrictions."""

    def get_profile(self, user_id: str) -> UserProfile:
        """Return the user's profile; unknown users have an empty one."""


@dataclass(frozen=True)
class SubstituteListing:
    """Substitutes for one ingredient."""

    original: Ingredient
    substitutes: list[SubstituteOption]


@dataclass(frozen=True)
class SuggestionReport:
    """Suggestions for a recipe together with the user's restrictions."""

    suggestions: list[SubstitutionSuggestion]
    profile: UserProfile


@dataclass
class SubstitutionService:
    """Application service for ingredient substitutions."""

    ingredient_repository: IngredientRepository
    profile_repository: ProfileRepository
    recipe_repository: RecipeRepository

    def get_substitutes(
        self, ingredient_id: str, dietary_restriction: str | None = None
    ) -> SubstituteListing:
        """Return substitutes for an ingredient ordered by ratio."""
        original = self.ingredient_repository.get_ingredient(ingredient_id)
        if original is None:
            raise IngredientNotFound("Ingredient not found")
        options = self._options(original.id)
        if dietary_restriction:
            options = [
                option
                for option in options
                if _benefit_matches(option.substitution, [dietary_restriction])
            ]
        options.sort(key=lambda option: option.substitution.ratio)
        return SubstituteListing(original=original, substitutes=options)

    def add_substitution(  # noqa: PLR0913
        self,
        original_id: str,
        substitute_id: str,
        ratio: float = 1.0,
        dietary_benefit: str | None = None,
        flavor_profile: str | None = None,
    ) -> tuple[Substitution, Ingredient, Ingredient]:
        """Record that one ingredient can replace another."""
        if ratio <= 0:
            raise InvalidInput("ratio must be positive")
        if original_id == substitute_id:
            raise InvalidInput("An ingredient cannot substitute itself")
        original = self.ingredient_repository.get_ingredient(original_id)
        substitute = self.ingredient_repository.get_ingredient(substitute_id)
        if original is None or substitute is None:
            raise IngredientNotFound("One or both ingredients not found")
        if self.ingredient_repository.get_substitution(original_id, substitute_id):
            raise SubstitutionExists("Substitution already exists")
        substitution = self.ingredient_repository.create_substitution(
            original_id=original_id,
            substitute_id=substitute_id,
            ratio=ratio,
            dietary_benefit=dietary_benefit,
            flavor_profile=flavor_profile,
        )
        return substitution, original, substitute

    def suggest(
        self,
        user_id: str,
        recipe_id: str | None = None,
        dietary_restrictions: list[str] | None = None,
    ) -> SuggestionReport:
        """Suggest substitutes for recipe ingredients that conflict with the user.

        An ingredient is considered when it carries one of the user's allergens,
        or always when dietary restrictions are requested. Substitutes carrying
        an allergen are dropped, and with restrictions only substitutes whose
        dietary benefit matches one of them are kept.
        """
        profile = self.profile_repository.get_profile(user_id)
        restrictions = [r.strip() for r in dietary_restrictions or [] if r.strip()]
        suggestions: list[SubstitutionSuggestion] = []
        recipe = self.recipe_repository.get_recipe(recipe_id) if recipe_id else None
        if recipe is None:
            return SuggestionReport(suggestions=suggestions, profile=profile)

        ingredients = {
            ingredient.id: ingredient
            for ingredient in self.ingredient_repository.get_ingredients(
                [line.ingredient_id for line in recipe.ingredients]
            )
        }
        for line in recipe.ingredients:
            ingredient = ingredients.get(line.ingredient_id)
            if ingredient is None:
                continue
            if not (ingredient.has_allergen(profile.allergies) or restrictions):
                continue
            suitable = [
                option
                for option in self._options(ingredient.id)
                if not option.ingredient.has_allergen(profile.allergies)
                and (
                    not restrictions
                    or _benefit_matches(option.substitution, restrictions)
                )
            ]
            if suitable:
                suggestions.append(
                    SubstitutionSuggestion(
                        original=ingredient,
                        quantity=line.quantity,
                        unit=line.unit,
                        substitutes=suitable,
                    )
                )
        return SuggestionReport(suggestions=suggestions, profile=profile)

    def _options(self, original_id: str) -> list[SubstituteOption]:
        substitutions = self.ingredient_repository.list_substitutions(original_id)
        if not substitutions:
            return []
        substitutes = {
            ingredient.id: ingredient
            for ingredient in self.ingredient_repository.get_ingredients(
                [sub.substitute_id for sub in substitutions]
            )
        }
        return [
            SubstituteOption(
                ingredient=substitutes[sub.substitute_id], substitution=sub
            )
            for sub in substitutions
            if sub.substitute_id in substitutes
        ]


def _benefit_matches(substitution: Substitution, restrictions: list[str]) -> bool:
    if not substitution.dietary_benefit:
        return False
    benefit = substitution.dietary_benefit.lower()
    return any(restriction.lower() in benefit for restriction in restrictions)
