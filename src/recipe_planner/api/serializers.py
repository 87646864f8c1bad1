"""JSON serialization of domain records for API responses."""

from recipe_planner.domain.ingredients import (
    Ingredient,
    ProfileOption,
    SubstituteOption,
    Substitution,
    SubstitutionSuggestion,
)
from recipe_planner.domain.recipes import RecipeIngredientLine, RecipeRecord
from recipe_planner.domain.shopping import ShoppingList, ShoppingListItem
from recipe_planner.services.pagination import Pagination


def serialize_shopping_list(shopping_list: ShoppingList) -> dict[str, object]:
    """Serialize a shopping list with its items."""
    return {
        "id": shopping_list.id,
        "name": shopping_list.name,
        "userId": shopping_list.user_id,
        "completed": shopping_list.completed,
        "createdAt": shopping_list.created_at.isoformat()
        if shopping_list.created_at
        else None,
        "updatedAt": shopping_list.updated_at.isoformat()
        if shopping_list.updated_at
        else None,
        "items": [serialize_item(item) for item in shopping_list.items],
    }


def serialize_item(item: ShoppingListItem) -> dict[str, object]:
    """Serialize a shopping list item with a summary of its ingredient."""
    return {
        "id": item.id,
        "shoppingListId": item.shopping_list_id,
        "ingredientId": item.ingredient_id,
        "quantity": item.quantity,
        "unit": item.unit,
        "purchased": item.purchased,
        "notes": item.notes,
        "ingredient": _ingredient_summary(item.ingredient),
    }


def serialize_pagination(pagination: Pagination) -> dict[str, object]:
    """Serialize page metadata."""
    return {
        "page": pagination.page,
        "limit": pagination.limit,
        "totalCount": pagination.total_count,
        "totalPages": pagination.total_pages,
        "hasNext": pagination.has_next,
        "hasPrev": pagination.has_prev,
    }


def serialize_recipe_ref(recipe: RecipeRecord) -> dict[str, object]:
    """Serialize the id and title of a recipe."""
    return {"id": recipe.id, "title": recipe.title}


def serialize_recipe(recipe: RecipeRecord) -> dict[str, object]:
    """Serialize a recipe with its ingredient lines."""
    return {
        "id": recipe.id,
        "title": recipe.title,
        "description": recipe.description,
        "servings": recipe.servings,
        "ingredients": [_serialize_line(line) for line in recipe.ingredients],
    }


def serialize_ingredient(ingredient: Ingredient) -> dict[str, object]:
    """Serialize an ingredient with its nutrition and allergens."""
    return {
        "id": ingredient.id,
        "name": ingredient.name,
        "category": ingredient.category,
        "unit": ingredient.unit,
        "allergens": ingredient.allergens,
        "caloriesPerUnit": ingredient.calories_per_unit,
        "proteinPerUnit": ingredient.protein_per_unit,
        "carbsPerUnit": ingredient.carbs_per_unit,
        "fatPerUnit": ingredient.fat_per_unit,
    }


def serialize_substitute(option: SubstituteOption) -> dict[str, object]:
    """Serialize a substitute ingredient with its substitution details."""
    return {
        **serialize_ingredient(option.ingredient),
        "substitutionInfo": {
            "ratio": option.substitution.ratio,
            "dietaryBenefit": option.substitution.dietary_benefit,
            "flavorProfile": option.substitution.flavor_profile,
        },
    }


def serialize_substitution(substitution: Substitution) -> dict[str, object]:
    """Serialize a substitution record."""
    return {
        "id": substitution.id,
        "originalId": substitution.original_id,
        "substituteId": substitution.substitute_id,
        "ratio": substitution.ratio,
        "dietaryBenefit": substitution.dietary_benefit,
        "flavorProfile": substitution.flavor_profile,
    }


def serialize_suggestion(suggestion: SubstitutionSuggestion) -> dict[str, object]:
    """Serialize the substitutes proposed for one recipe ingredient."""
    return {
        "original": serialize_ingredient(suggestion.original),
        "quantity": suggestion.quantity,
        "unit": suggestion.unit,
        "substitutes": [
            serialize_substitute(option) for option in suggestion.substitutes
        ],
    }


def serialize_option(option: ProfileOption) -> dict[str, object]:
    """Serialize an allergy or dietary restriction."""
    return {"id": option.id, "name": option.name, "description": option.description}


def _serialize_line(line: RecipeIngredientLine) -> dict[str, object]:
    return {
        "ingredientId": line.ingredient_id,
        "quantity": line.quantity,
        "unit": line.unit,
        "notes": line.notes,
        "ingredient": _ingredient_summary(line.ingredient),
    }


def _ingredient_summary(ingredient: Ingredient | None) -> dict[str, object] | None:
    if ingredient is None:
        return None
    return {
        "id": ingredient.id,
        "name": ingredient.name,
        "category": ingredient.category,
        "unit": ingredient.unit,
    }
