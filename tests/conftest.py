"""Shared test fixtures."""

import dataclasses
import logging
from dataclasses import dataclass, field

import pytest

from food_tracker.config import Settings
from food_tracker.containers import AppContainer
from food_tracker.domain.food_logs import FoodLogEntry
from food_tracker.domain.ingredients import Ingredient
from food_tracker.domain.nutrition import NutrientVector
from food_tracker.domain.recipes import Recipe
from food_tracker.services.food_logs import FoodLogRepository, FoodLogService
from food_tracker.services.ingredients import IngredientRepository, IngredientService
from food_tracker.services.labels import LabelService
from food_tracker.services.recipes import RecipeRepository, RecipeService


def make_ingredient(  # noqa: PLR0913
    ingredient_id: int | None = 1,
    name: str = "chicken breast",
    calories: float = 165,
    protein_g: float = 31,
    fat_g: float = 3.6,
    package_size_g: float = 500,
    package_price: float = 5.0,
    labels: tuple[str, ...] = (),
) -> Ingredient:
    return Ingredient(
        id=ingredient_id,
        name=name,
        nutrients=NutrientVector(calories=calories, protein_g=protein_g, fat_g=fat_g),
        package_size_g=package_size_g,
        package_price=package_price,
        labels=labels,
    )


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[int, Recipe] = field(default_factory=dict)

    def add(self, recipe: Recipe) -> Recipe:
        self.recipes[recipe.id] = recipe
        return recipe

    def list_recipes(self) -> list[Recipe]:
        return list(self.recipes.values())

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        return self.recipes.get(recipe_id)

    def delete_recipe(self, recipe_id: int) -> None:
        self.recipes.pop(recipe_id, None)


@dataclass
class InMemoryIngredientRepository(IngredientRepository):
    """In-memory ingredient repository for tests."""

    ingredients: dict[int, Ingredient] = field(default_factory=dict)
    recipe_repository: InMemoryRecipeRepository | None = None
    next_id: int = 1

    def list_ingredients(self) -> list[Ingredient]:
        return list(self.ingredients.values())

    def get_ingredient(self, ingredient_id: int) -> Ingredient | None:
        return self.ingredients.get(ingredient_id)

    def get_by_name(self, name: str) -> Ingredient | None:
        for ingredient in self.ingredients.values():
            if ingredient.name == name:
                return ingredient
        return None

    def create_ingredient(self, ingredient: Ingredient) -> Ingredient:
        created = dataclasses.replace(ingredient, id=self.next_id)
        self.ingredients[created.id] = created
        self.next_id += 1
        return created

    def update_ingredient(self, ingredient: Ingredient) -> Ingredient:
        self.ingredients[ingredient.id] = ingredient
        return ingredient

    def delete_ingredient(self, ingredient_id: int) -> None:
        self.ingredients.pop(ingredient_id, None)

    def replace_labels(self, ingredient_id: int, labels: list[str]) -> None:
        current = self.ingredients[ingredient_id]
        self.ingredients[ingredient_id] = dataclasses.replace(
            current, labels=tuple(labels)
        )

    def count_usages(self, ingredient_id: int) -> int:
        if self.recipe_repository is None:
            return 0
        return sum(
            1
            for recipe in self.recipe_repository.recipes.values()
            for usage in recipe.usages
            if usage.ingredient_id == ingredient_id
        )


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository for tests."""

    logs: dict[int, FoodLogEntry] = field(default_factory=dict)
    next_id: int = 1

    def list_logs(self) -> list[FoodLogEntry]:
        return list(self.logs.values())

    def get_log(self, log_id: int) -> FoodLogEntry | None:
        return self.logs.get(log_id)

    def create_log(self, entry: FoodLogEntry) -> FoodLogEntry:
        created = dataclasses.replace(entry, id=self.next_id)
        self.logs[created.id] = created
        self.next_id += 1
        return created

    def update_log(self, entry: FoodLogEntry) -> FoodLogEntry:
        self.logs[entry.id] = entry
        return entry

    def delete_log(self, log_id: int) -> None:
        self.logs.pop(log_id, None)

    def detach_recipe(self, recipe_id: int) -> None:
        for log_id, entry in list(self.logs.items()):
            if entry.recipe_id == recipe_id:
                self.logs[log_id] = dataclasses.replace(
                    entry, recipe_id=None, recipe_name=None
                )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
            ".eyJyb2xlIjoic2VydmljZV9yb2xlIn0"
            ".c2lnbmF0dXJl"
        ),
    )


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def ingredient_repository(
    recipe_repository: InMemoryRecipeRepository,
) -> InMemoryIngredientRepository:
    return InMemoryIngredientRepository(recipe_repository=recipe_repository)


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def container(
    settings: Settings,
    ingredient_repository: InMemoryIngredientRepository,
    recipe_repository: InMemoryRecipeRepository,
    food_log_repository: InMemoryFoodLogRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        ingredient_service=IngredientService(ingredient_repository),
        label_service=LabelService(ingredient_repository),
        recipe_service=RecipeService(
            repository=recipe_repository,
            ingredient_repository=ingredient_repository,
            food_log_repository=food_log_repository,
        ),
        food_log_service=FoodLogService(food_log_repository),
        close_resources=close_resources,
    )


@pytest.fixture
def app_caplog(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> pytest.LogCaptureFixture:
    """caplog that also sees records after configure_logging disabled propagation."""
    monkeypatch.setattr(logging.getLogger("food_tracker"), "propagate", True)
    caplog.set_level(logging.INFO, logger="food_tracker")
    return caplog
