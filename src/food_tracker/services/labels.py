"""Ingredient label index and label editing."""

import dataclasses
import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from food_tracker.domain.errors import DuplicateLabel, InvalidLabel, NotFound
from food_tracker.domain.ingredients import Ingredient

if TYPE_CHECKING:
    from food_tracker.services.ingredients import IngredientRepository

_logger = logging.getLogger(__name__)


def labels_of(ingredient: Ingredient) -> frozenset[str]:
    """Return the label set of an ingredient."""
    return frozenset(ingredient.labels)


def filter_by_labels(
    ingredients: Iterable[Ingredient], required_labels: Collection[str]
) -> list[Ingredient]:
    """Return ingredients carrying every required label, in input order."""
    if isinstance(required_labels, str):
        raise TypeError("required_labels must be a collection of labels, not a str")
    required = frozenset(required_labels)
    if not required:
        return list(ingredients)
    return [item for item in ingredients if required <= labels_of(item)]


def add_label(ingredient: Ingredient, label: str) -> Ingredient:
    """Return a copy of ``ingredient`` with ``label`` appended."""
    if not label:
        raise InvalidLabel("Label must not be empty")
    if label in ingredient.labels:
        raise DuplicateLabel(
            f"Ingredient {ingredient.name!r} already has label {label!r}"
        )
    return dataclasses.replace(ingredient, labels=(*ingredient.labels, label))


def remove_label(ingredient: Ingredient, label: str) -> Ingredient:
    """Return a copy of ``ingredient`` without ``label``; absent labels are fine."""
    if label not in ingredient.labels:
        return ingredient
    return dataclasses.replace(
        ingredient, labels=tuple(item for item in ingredient.labels if item != label)
    )


def all_labels(ingredients: Iterable[Ingredient]) -> list[str]:
    """Return every distinct label in sorted order."""
    return sorted({label for item in ingredients for label in item.labels})


@dataclass
class LabelService:
    """Application service that persists label edits."""

    repository: "IngredientRepository"

    def add_label(self, ingredient_id: int, label: str) -> Ingredient:
        """Attach a label to a stored ingredient."""
        updated = add_label(self._require(ingredient_id), label)
        self.repository.replace_labels(ingredient_id, list(updated.labels))
        _logger.info("Added label %r to ingredient %s", label, ingredient_id)
        return updated

    def remove_label(self, ingredient_id: int, label: str) -> Ingredient:
        """Detach a label from a stored ingredient."""
        current = self._require(ingredient_id)
        updated = remove_label(current, label)
        if updated is not current:
            self.repository.replace_labels(ingredient_id, list(updated.labels))
            _logger.info("Removed label %r from ingredient %s", label, ingredient_id)
        return updated

    def list_labels(self) -> list[str]:
        """Return all labels in use."""
        return all_labels(self.repository.list_ingredients())

    def _require(self, ingredient_id: int) -> Ingredient:
        ingredient = self.repository.get_ingredient(ingredient_id)
        if ingredient is None:
            raise NotFound(f"Ingredient {ingredient_id} not found")
        return ingredient
