"""Ingredient and label endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from food_tracker.api.models import (
    ImportPayload,
    IngredientPayload,
    IngredientResponse,
    LabelPayload,
)
from food_tracker.config import parse_label_filter
from food_tracker.services.importer import parse_tsv_ingredients, parsed_ingredients
from food_tracker.services.ingredients import NutrientView, SortColumn, SortDirection

if TYPE_CHECKING:
    from food_tracker.containers import AppContainer

router = APIRouter(tags=["ingredients"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/ingredients")
async def list_ingredients(
    request: Request,
    labels: str | None = None,
    sort: SortColumn | None = None,
    direction: SortDirection = SortDirection.NONE,
    view: NutrientView = NutrientView.PER_100G,
) -> dict[str, list[IngredientResponse]]:
    """Return ingredients carrying every label in ``labels`` (comma-separated)."""
    container = _container(request)
    sort_column = sort
    if sort_column is None:
        sort_column = container.settings.default_ingredient_sort
        if direction is SortDirection.NONE and sort_column is not SortColumn.NAME:
            direction = SortDirection.ASCENDING
    ingredients = container.ingredient_service.list_ingredients(
        labels=parse_label_filter(labels),
        sort_column=sort_column,
        direction=direction,
        view=view,
    )
    return {
        "ingredients": [IngredientResponse.from_domain(item) for item in ingredients]
    }


@router.post("/ingredients", status_code=status.HTTP_201_CREATED)
async def create_ingredient(
    payload: IngredientPayload, request: Request
) -> IngredientResponse:
    """Create an ingredient."""
    created = _container(request).ingredient_service.create(payload.to_domain())
    return IngredientResponse.from_domain(created)


@router.post("/ingredients/import")
async def import_ingredients(payload: ImportPayload, request: Request) -> dict:
    """Bulk upsert ingredients from tab-separated text."""
    lines = parse_tsv_ingredients(payload.text)
    count = _container(request).ingredient_service.bulk_upsert(
        parsed_ingredients(lines)
    )
    errors = [
        {"line": line.line, "error": line.error}
        for line in lines
        if line.kind == "error"
    ]
    return {"imported": count, "errors": errors}


@router.get("/ingredients/{ingredient_id}")
async def get_ingredient(ingredient_id: int, request: Request) -> IngredientResponse:
    """Return one ingredient."""
    ingredient = _container(request).ingredient_service.get(ingredient_id)
    return IngredientResponse.from_domain(ingredient)


@router.put("/ingredients/{ingredient_id}")
async def update_ingredient(
    ingredient_id: int, payload: IngredientPayload, request: Request
) -> IngredientResponse:
    """Replace an ingredient's fields and labels."""
    updated = _container(request).ingredient_service.update(
        payload.to_domain(ingredient_id)
    )
    return IngredientResponse.from_domain(updated)


@router.delete(
    "/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_ingredient(ingredient_id: int, request: Request) -> None:
    """Delete an ingredient that no recipe uses."""
    _container(request).ingredient_service.delete(ingredient_id)


@router.post("/ingredients/{ingredient_id}/labels")
async def add_label(
    ingredient_id: int, payload: LabelPayload, request: Request
) -> IngredientResponse:
    """Attach a label to an ingredient."""
    updated = _container(request).label_service.add_label(
        ingredient_id, payload.label
    )
    return IngredientResponse.from_domain(updated)


@router.delete("/ingredients/{ingredient_id}/labels/{label}")
async def remove_label(
    ingredient_id: int, label: str, request: Request
) -> IngredientResponse:
    """Detach a label from an ingredient."""
    updated = _container(request).label_service.remove_label(ingredient_id, label)
    return IngredientResponse.from_domain(updated)


@router.get("/labels")
async def list_labels(request: Request) -> dict[str, list[str]]:
    """Return every label in use."""
    return {"labels": _container(request).label_service.list_labels()}
