"""Services for managing ingredients."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from food_tracker.domain.errors import DuplicateIngredient, IngredientInUse, NotFound
from food_tracker.domain.ingredients import Ingredient
from food_tracker.services.labels import all_labels, filter_by_labels

_logger = logging.getLogger(__name__)


class SortColumn(str, Enum):
    """Ingredient table column to sort by."""

    NAME = "name"
    CALORIES = "calories"
    PROTEIN = "protein_g"
    FAT = "fat_g"
    SATURATED_FAT = "saturated_fat_g"
    CARBS = "carbs_g"
    SUGAR = "sugar_g"
    FIBER = "fiber_g"
    SALT = "salt_g"
    PACKAGE_SIZE = "package_size_g"
    PRICE = "package_price"


class SortDirection(str, Enum):
    """Sort order; NONE falls back to name ascending."""

    NONE = "none"
    ASCENDING = "asc"
    DESCENDING = "desc"


class NutrientView(str, Enum):
    """Whether nutrient columns are read per 100 g or per 100 kcal."""

    PER_100G = "per100g"
    PER_100KCAL = "per100kcal"


# Columns that keep their raw value in the per-100 kcal view.
_ABSOLUTE_COLUMNS = {SortColumn.CALORIES, SortColumn.PACKAGE_SIZE, SortColumn.PRICE}


class IngredientRepository(Protocol):
    """Persistence interface for ingredients and their labels."""

    def list_ingredients(self) -> list[Ingredient]:
        """Return all ingredients with labels."""

    def get_ingredient(self, ingredient_id: int) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def get_by_name(self, name: str) -> Ingredient | None:
        """Return an ingredient by its unique name, if present."""

    def create_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """Insert an ingredient with its labels and return it with its id."""

    def update_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """Replace an ingredient's fields and labels."""

    def delete_ingredient(self, ingredient_id: int) -> None:
        """Delete an ingredient and its labels."""

    def replace_labels(self, ingredient_id: int, labels: list[str]) -> None:
        """Replace the label set of an ingredient."""

    def count_usages(self, ingredient_id: int) -> int:
        """Return how many recipe usages reference an ingredient."""


@dataclass
class IngredientService:
    """Application service for ingredient operations."""

    repository: IngredientRepository

    def list_ingredients(
        self,
        labels: list[str] | None = None,
        sort_column: SortColumn = SortColumn.NAME,
        direction: SortDirection = SortDirection.NONE,
        view: NutrientView = NutrientView.PER_100G,
    ) -> list[Ingredient]:
        """Return ingredients filtered by labels and sorted for display."""
        filtered = filter_by_labels(self.repository.list_ingredients(), labels or [])
        return sort_ingredients(filtered, sort_column, direction, view)

    def get(self, ingredient_id: int) -> Ingredient:
        """Return an ingredient or raise NotFound."""
        ingredient = self.repository.get_ingredient(ingredient_id)
        if ingredient is None:
            raise NotFound(f"Ingredient {ingredient_id} not found")
        return ingredient

    def lookup(self, ingredient_id: int) -> Ingredient | None:
        """Return an ingredient or None; usable as a rollup lookup."""
        return self.repository.get_ingredient(ingredient_id)

    def create(self, ingredient: Ingredient) -> Ingredient:
        """Create an ingredient with a unique name."""
        if self.repository.get_by_name(ingredient.name) is not None:
            raise DuplicateIngredient(
                f"Ingredient {ingredient.name!r} already exists"
            )
        created = self.repository.create_ingredient(ingredient)
        _logger.info("Created ingredient %r (id: %s)", created.name, created.id)
        return created

    def update(self, ingredient: Ingredient) -> Ingredient:
        """Update an existing ingredient."""
        if ingredient.id is None:
            raise NotFound("Ingredient has no id")
        self.get(ingredient.id)
        same_name = self.repository.get_by_name(ingredient.name)
        if same_name is not None and same_name.id != ingredient.id:
            raise DuplicateIngredient(
                f"Ingredient {ingredient.name!r} already exists"
            )
        updated = self.repository.update_ingredient(ingredient)
        _logger.info("Updated ingredient %r (id: %s)", updated.name, updated.id)
        return updated

    def delete(self, ingredient_id: int) -> None:
        """Delete an ingredient no recipe references."""
        self.get(ingredient_id)
        usages = self.repository.count_usages(ingredient_id)
        if usages:
            raise IngredientInUse(
                f"Ingredient {ingredient_id} is used by {usages} recipe line(s)"
            )
        self.repository.delete_ingredient(ingredient_id)
        _logger.info("Deleted ingredient %s", ingredient_id)

    def bulk_upsert(self, ingredients: list[Ingredient]) -> int:
        """Insert or update ingredients by name; returns how many were written."""
        count = 0
        for ingredient in ingredients:
            existing = self.repository.get_by_name(ingredient.name)
            if existing is None:
                created = self.repository.create_ingredient(ingredient)
                _logger.info("Inserted ingredient: %s", created.name)
            else:
                self.repository.update_ingredient(
                    Ingredient(
                        id=existing.id,
                        name=existing.name,
                        nutrients=ingredient.nutrients,
                        package_size_g=ingredient.package_size_g,
                        package_price=ingredient.package_price,
                        labels=ingredient.labels,
                    )
                )
                _logger.info(
                    "Updated ingredient: %s (id: %s)", existing.name, existing.id
                )
            count += 1
        return count

    def all_labels(self) -> list[str]:
        """Return every label in use, sorted."""
        return all_labels(self.repository.list_ingredients())


def sort_ingredients(
    ingredients: list[Ingredient],
    sort_column: SortColumn = SortColumn.NAME,
    direction: SortDirection = SortDirection.NONE,
    view: NutrientView = NutrientView.PER_100G,
) -> list[Ingredient]:
    """Sort ingredients for the ingredient table."""
    if direction is SortDirection.NONE:
        return sorted(ingredients, key=lambda item: item.name)
    reverse = direction is SortDirection.DESCENDING
    if sort_column is SortColumn.NAME:
        return sorted(ingredients, key=lambda item: item.name, reverse=reverse)
    return sorted(
        ingredients,
        key=lambda item: _column_value(item, sort_column, view),
        reverse=reverse,
    )


def _column_value(
    ingredient: Ingredient, column: SortColumn, view: NutrientView
) -> float:
    if column is SortColumn.PACKAGE_SIZE:
        return ingredient.package_size_g
    if column is SortColumn.PRICE:
        return ingredient.package_price
    raw = getattr(ingredient.nutrients, column.value)
    if view is NutrientView.PER_100KCAL and column not in _ABSOLUTE_COLUMNS:
        return ingredient.per_100kcal(raw)
    return raw
