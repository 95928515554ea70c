"""Domain models for ingredients."""

from dataclasses import dataclass, field

from food_tracker.domain.errors import DuplicateLabel, InvalidLabel
from food_tracker.domain.nutrition import NutrientVector


@dataclass(frozen=True)
class Ingredient:
    """An ingredient with nutrients per 100 g, package info, and labels."""

    id: int | None
    name: str
    nutrients: NutrientVector = field(default_factory=NutrientVector)
    package_size_g: float = 0.0
    package_price: float = 0.0
    labels: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for label in self.labels:
            if not label:
                raise InvalidLabel(f"Empty label on ingredient {self.name!r}")
            if label in seen:
                raise DuplicateLabel(
                    f"Ingredient {self.name!r} already has label {label!r}"
                )
            seen.add(label)

    def per_100kcal(self, value_per_100g: float) -> float:
        """Return a nutrient amount per 100 kcal of this ingredient."""
        if self.nutrients.calories > 0:
            return value_per_100g / self.nutrients.calories * 100.0
        return 0.0
