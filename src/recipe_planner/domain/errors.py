"""Error taxonomy for recipe planner operations."""


class RecipePlannerError(Exception):
    """Base class for errors surfaced to API callers."""


class InvalidInput(RecipePlannerError):
    """Raised when request data is empty or malformed."""


class InvalidServing(InvalidInput):
    """Raised when a serving override is not a positive number."""


class NotFoundError(RecipePlannerError):
    """Base class for missing records."""


class RecipesNotFound(NotFoundError):
    """Raised when none of the requested recipes exist."""


class RecipeNotFound(NotFoundError):
    """Raised when a single recipe id does not resolve."""


class IngredientNotFound(NotFoundError):
    """Raised when an ingredient id does not resolve."""


class ShoppingListNotFound(NotFoundError):
    """Raised when a shopping list is absent or owned by another user."""


class ShoppingListItemNotFound(NotFoundError):
    """Raised when a shopping list item is absent or owned by another user."""


class SubstitutionExists(RecipePlannerError):
    """Raised when a substitution pair is already recorded."""
