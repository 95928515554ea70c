"""Recipe endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from food_tracker.api.models import RollupResponse
from food_tracker.config import parse_label_filter

if TYPE_CHECKING:
    from food_tracker.containers import AppContainer

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("")
async def list_recipes(request: Request, filters: str | None = None) -> dict:
    """Return recipes matching every meal type or tag in ``filters``."""
    container: AppContainer = request.app.state.container
    recipes = container.recipe_service.list_recipes(parse_label_filter(filters))
    return {
        "recipes": [
            {
                "id": recipe.id,
                "name": recipe.name,
                "meal_type": recipe.meal_type,
                "servings": recipe.servings,
                "tags": list(recipe.tags),
                "total_time_minutes": recipe.total_time_minutes,
            }
            for recipe in recipes
        ]
    }


@router.get("/{recipe_id}/nutrition")
async def recipe_nutrition(recipe_id: int, request: Request) -> RollupResponse:
    """Return total and per-serving nutrition and cost of a recipe."""
    container: AppContainer = request.app.state.container
    result = container.recipe_service.nutrition(recipe_id)
    return RollupResponse.from_domain(recipe_id, result)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(recipe_id: int, request: Request) -> None:
    """Delete a recipe and detach its food logs."""
    container: AppContainer = request.app.state.container
    container.recipe_service.delete_recipe(recipe_id)
