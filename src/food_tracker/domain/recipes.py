"""Domain models for recipes and their nutrition rollups."""

from dataclasses import dataclass, field

from food_tracker.domain.errors import InvalidRecipe
from food_tracker.domain.nutrition import NutrientVector


@dataclass(frozen=True)
class ByPackageCount:
    """Quantity given as a (possibly fractional) number of packages."""

    count: float


@dataclass(frozen=True)
class ByGrams:
    """Quantity given directly in grams."""

    grams: float


Quantity = ByPackageCount | ByGrams


@dataclass(frozen=True)
class RecipeUsage:
    """One recipe line: how much of one ingredient the recipe consumes."""

    ingredient_id: int
    quantity: Quantity


@dataclass(frozen=True)
class Recipe:
    """A recipe with its ordered usages."""

    id: int | None
    name: str
    servings: int = 1
    meal_type: str = ""
    description: str = ""
    prep_time_minutes: int = 0
    cook_time_minutes: int = 0
    tags: tuple[str, ...] = ()
    instructions: tuple[str, ...] = ()
    usages: tuple[RecipeUsage, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.servings, bool) or not isinstance(self.servings, int):
            raise InvalidRecipe(f"Servings must be an integer, got {self.servings!r}")
        if self.servings < 1:
            raise InvalidRecipe(f"Servings must be at least 1, got {self.servings}")

    @property
    def total_time_minutes(self) -> int:
        """Preparation plus cooking time."""
        return self.prep_time_minutes + self.cook_time_minutes


@dataclass(frozen=True)
class UsageContribution:
    """Resolved amount, nutrients, and cost of a single usage."""

    usage_index: int
    ingredient_id: int
    ingredient_name: str
    grams: float
    nutrients: NutrientVector
    cost: float


@dataclass(frozen=True)
class RollupResult:
    """Recipe-level and per-serving nutrition and cost."""

    total_nutrients: NutrientVector
    total_cost: float
    per_serving_nutrients: NutrientVector
    per_serving_cost: float
    usage_count: int
    contributions: tuple[UsageContribution, ...] = field(default=())
