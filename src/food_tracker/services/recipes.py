"""Recipe service."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from food_tracker.domain.errors import FoodTrackerError, NotFound
from food_tracker.domain.recipes import Recipe, RollupResult
from food_tracker.services.food_logs import FoodLogRepository
from food_tracker.services.ingredients import IngredientRepository
from food_tracker.services.rollup import describe_failure, rollup

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes and their usages."""

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes with usages."""

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe with its ordered usages, if present."""

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe and its usages."""


@dataclass
class RecipeService:
    """Application service for recipes and their nutrition."""

    repository: RecipeRepository
    ingredient_repository: IngredientRepository
    food_log_repository: FoodLogRepository
    debug: bool = False

    def get_recipe(self, recipe_id: int) -> Recipe:
        """Return a recipe or raise NotFound."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise NotFound(f"Recipe {recipe_id} not found")
        return recipe

    def list_recipes(self, filters: list[str] | None = None) -> list[Recipe]:
        """Return recipes matching every filter by meal type or tag."""
        return filter_recipes(self.repository.list_recipes(), filters or [])

    def nutrition(self, recipe_id: int) -> RollupResult:
        """Roll up nutrition and cost for a stored recipe."""
        recipe = self.get_recipe(recipe_id)
        try:
            result = rollup(recipe, self.ingredient_repository.get_ingredient)
        except FoodTrackerError as exc:
            _logger.warning(
                "Rollup failed for recipe %s: %s", recipe_id, describe_failure(exc)
            )
            raise
        if self.debug:
            _logger.info(
                "Rollup recipe=%s usages=%s calories=%.1f cost=%.2f",
                recipe_id,
                result.usage_count,
                result.total_nutrients.calories,
                result.total_cost,
            )
        return result

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe; food logs keep their entries without the reference."""
        self.get_recipe(recipe_id)
        self.food_log_repository.detach_recipe(recipe_id)
        self.repository.delete_recipe(recipe_id)
        _logger.info("Deleted recipe %s", recipe_id)


def filter_recipes(recipes: Iterable[Recipe], filters: Iterable[str]) -> list[Recipe]:
    """Return recipes where every filter equals the meal type or is a tag."""
    wanted = list(filters)
    return [
        recipe
        for recipe in recipes
        if all(item == recipe.meal_type or item in recipe.tags for item in wanted)
    ]
