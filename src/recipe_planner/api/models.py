"""Pydantic models for API request payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GenerateShoppingListRequest(_CamelModel):
    """Payload for generating a shopping list from recipes."""

    # Validated by the consolidator so malformed ids surface as client errors.
    recipe_ids: Any = Field(default=None, alias="recipeIds")
    serving_adjustments: dict[str, Any] = Field(
        default_factory=dict, alias="servingAdjustments"
    )
    list_name: str | None = Field(default=None, alias="listName")


class ShoppingListItemPayload(_CamelModel):
    """Item supplied when creating or extending a list."""

    ingredient_id: str = Field(alias="ingredientId", min_length=1)
    quantity: float = Field(ge=0)
    unit: str = Field(min_length=1)
    notes: str | None = None


class CreateShoppingListRequest(_CamelModel):
    """Payload for creating a shopping list by hand."""

    name: str = Field(min_length=1, max_length=100)
    items: list[ShoppingListItemPayload] = Field(default_factory=list)


class UpdateShoppingListRequest(_CamelModel):
    """Payload for renaming or completing a shopping list."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    completed: bool | None = None


class UpdateShoppingListItemRequest(_CamelModel):
    """Payload for updating a shopping list item."""

    quantity: float | None = Field(default=None, ge=0)
    unit: str | None = Field(default=None, min_length=1)
    purchased: bool | None = None
    notes: str | None = None


class CreateSubstitutionRequest(_CamelModel):
    """Payload for recording an ingredient substitution."""

    ratio: float = Field(default=1.0, gt=0)
    dietary_benefit: str | None = Field(default=None, alias="dietaryBenefit")
    flavor_profile: str | None = Field(default=None, alias="flavorProfile")
