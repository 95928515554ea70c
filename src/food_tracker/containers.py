"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_tracker.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from food_tracker.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from food_tracker.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from food_tracker.config import Settings
from food_tracker.services.food_logs import FoodLogService
from food_tracker.services.ingredients import IngredientService
from food_tracker.services.labels import LabelService
from food_tracker.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ingredient_service: IngredientService
    label_service: LabelService
    recipe_service: RecipeService
    food_log_service: FoodLogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    ingredient_repository = SupabaseIngredientRepository(supabase_client)
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    food_log_repository = SupabaseFoodLogRepository(supabase_client)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        ingredient_service=IngredientService(ingredient_repository),
        label_service=LabelService(ingredient_repository),
        recipe_service=RecipeService(
            repository=recipe_repository,
            ingredient_repository=ingredient_repository,
            food_log_repository=food_log_repository,
            debug=resolved_settings.debug,
        ),
        food_log_service=FoodLogService(
            repository=food_log_repository,
            image_base_path=resolved_settings.food_image_base_path,
        ),
        close_resources=close_resources,
    )
