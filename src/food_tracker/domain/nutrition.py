"""Nutrition domain models."""

from collections.abc import Iterable
from dataclasses import dataclass, fields


@dataclass(frozen=True)
class NutrientVector:
    """Fixed nutrient record; per 100 g on ingredients, absolute on rollups."""

    calories: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    saturated_fat_g: float = 0.0
    carbs_g: float = 0.0
    sugar_g: float = 0.0
    fiber_g: float = 0.0
    salt_g: float = 0.0

    @classmethod
    def zero(cls) -> "NutrientVector":
        """Return the additive identity."""
        return cls()

    def scale(self, factor: float) -> "NutrientVector":
        """Multiply every field by ``factor``."""
        return scale(self, factor)

    def __add__(self, other: "NutrientVector") -> "NutrientVector":
        if not isinstance(other, NutrientVector):
            return NotImplemented
        return add(self, other)

    def as_dict(self) -> dict[str, float]:
        """Return the fields as a plain mapping."""
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}


NUTRIENT_FIELDS: tuple[str, ...] = tuple(item.name for item in fields(NutrientVector))


def scale(vector: NutrientVector, factor: float) -> NutrientVector:
    """Return ``vector`` with every field multiplied by ``factor``."""
    return NutrientVector(
        **{name: getattr(vector, name) * factor for name in NUTRIENT_FIELDS}
    )


def add(a: NutrientVector, b: NutrientVector) -> NutrientVector:
    """Return the field-wise sum of two vectors."""
    return NutrientVector(
        **{name: getattr(a, name) + getattr(b, name) for name in NUTRIENT_FIELDS}
    )


def sum_vectors(vectors: Iterable[NutrientVector]) -> NutrientVector:
    """Fold ``add`` over ``vectors`` starting from zero."""
    total = NutrientVector.zero()
    for vector in vectors:
        total = add(total, vector)
    return total
