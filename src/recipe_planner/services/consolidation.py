"""Shopping list consolidation across recipes."""

import math
from collections.abc import Mapping, Sequence

from recipe_planner.domain.errors import InvalidInput, InvalidServing
from recipe_planner.domain.recipes import (
    ConsolidatedItem,
    ConsolidationResult,
    RecipeRecord,
)


def consolidate(
    recipe_ids: Sequence[str],
    serving_overrides: Mapping[str, object] | None,
    recipes: Sequence[RecipeRecord],
) -> ConsolidationResult:
    """Merge ingredient quantities of the given recipes into shopping items.

    Quantities are scaled by ``override / recipe.servings`` and grouped by
    ``(ingredient_id, unit)``. Groups keep the provenance note of the first
    recipe that contributed to them and are returned in first-encounter order.
    Recipes missing from ``recipes`` are reported in ``missing_recipe_ids``.
    """
    requested = validate_recipe_ids(recipe_ids)
    overrides = serving_overrides or {}

    used: list[RecipeRecord] = []
    seen: set[str] = set()
    for recipe in recipes:
        if recipe.id in requested and recipe.id not in seen:
            used.append(recipe)
            seen.add(recipe.id)
    missing = [recipe_id for recipe_id in requested if recipe_id not in seen]

    # All ratios are validated before anything is accumulated.
    ratios = {
        recipe.id: serving_ratio(recipe, overrides.get(recipe.id)) for recipe in used
    }
    for recipe_id in missing:
        _validate_serving(recipe_id, overrides.get(recipe_id))

    groups: dict[tuple[str, str], ConsolidatedItem] = {}
    for recipe in used:
        ratio = ratios[recipe.id]
        for ref in recipe.refs():
            key = (ref.ingredient_id, ref.unit)
            adjusted = ref.quantity * ratio
            existing = groups.get(key)
            if existing is not None:
                existing.quantity += adjusted
                continue
            groups[key] = ConsolidatedItem(
                ingredient_id=ref.ingredient_id,
                unit=ref.unit,
                quantity=adjusted,
                notes=f"From {ref.recipe_title}",
            )

    return ConsolidationResult(
        items=list(groups.values()),
        recipes_used=used,
        missing_recipe_ids=missing,
    )


def validate_recipe_ids(recipe_ids: object) -> list[str]:
    """Return the de-duplicated recipe ids or raise InvalidInput."""
    if isinstance(recipe_ids, str) or not isinstance(recipe_ids, Sequence):
        raise InvalidInput("Recipe IDs array is required")
    if not recipe_ids:
        raise InvalidInput("Recipe IDs array is required")
    for recipe_id in recipe_ids:
        if not isinstance(recipe_id, str) or not recipe_id.strip():
            raise InvalidInput("Recipe IDs must be non-empty strings")
    return list(dict.fromkeys(recipe_ids))


def serving_ratio(recipe: RecipeRecord, override: object) -> float:
    """Return the multiplier applied to every ingredient of the recipe."""
    servings = _validate_serving(recipe.id, override)
    if servings is None:
        return 1.0
    if recipe.servings <= 0:
        raise InvalidInput(f"Recipe {recipe.id} has no valid serving count")
    return servings / recipe.servings


def _validate_serving(recipe_id: str, override: object) -> float | None:
    if override is None:
        return None
    if isinstance(override, bool) or not isinstance(override, int | float):
        raise InvalidServing(f"Serving count for recipe {recipe_id} must be a number")
    if not math.isfinite(override) or override <= 0:
        raise InvalidServing(
            f"Serving count for recipe {recipe_id} must be positive, got {override}"
        )
    return float(override)
