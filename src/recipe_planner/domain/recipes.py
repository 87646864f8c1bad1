"""Domain models for recipes and consolidated shopping items."""

from dataclasses import dataclass, field

from recipe_planner.domain.ingredients import Ingredient


@dataclass(frozen=True)
class RecipeIngredientLine:
    """Single ingredient line as stored on a recipe."""

    ingredient_id: str
    quantity: float
    unit: str
    notes: str | None = None
    ingredient: Ingredient | None = None


@dataclass(frozen=True)
class RecipeIngredientRef:
    """Ingredient line flattened with the recipe it came from."""

    ingredient_id: str
    quantity: float
    unit: str
    recipe_id: str
    recipe_title: str
    recipe_servings: int


@dataclass(frozen=True)
class RecipeRecord:
    """Recipe with its ingredient lines, as returned by the recipe store."""

    id: str
    title: str
    servings: int
    ingredients: list[RecipeIngredientLine] = field(default_factory=list)
    description: str | None = None

    def refs(self) -> list[RecipeIngredientRef]:
        """Return the ingredient lines annotated with recipe provenance."""
        return [
            RecipeIngredientRef(
                ingredient_id=line.ingredient_id,
                quantity=line.quantity,
                unit=line.unit,
                recipe_id=self.id,
                recipe_title=self.title,
                recipe_servings=self.servings,
            )
            for line in self.ingredients
        ]


@dataclass
class ConsolidatedItem:
    """Merged shopping line for one ingredient in one unit."""

    ingredient_id: str
    unit: str
    quantity: float
    notes: str


@dataclass(frozen=True)
class ConsolidationResult:
    """Consolidated items plus the recipes that were actually used."""

    items: list[ConsolidatedItem]
    recipes_used: list[RecipeRecord]
    missing_recipe_ids: list[str]

    @property
    def partial(self) -> bool:
        """Return True when some requested recipes had no record."""
        return bool(self.missing_recipe_ids)
