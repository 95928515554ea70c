"""Food log endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from food_tracker.api.models import FoodLogPayload, FoodLogResponse

if TYPE_CHECKING:
    from food_tracker.containers import AppContainer
    from food_tracker.services.food_logs import FoodLogService

router = APIRouter(prefix="/food-logs", tags=["food-logs"])


@router.get("")
async def list_food_logs(request: Request) -> dict[str, list[FoodLogResponse]]:
    """Return food log entries, newest first."""
    service = _service(request)
    return {
        "food_logs": [
            FoodLogResponse.from_domain(entry, service.image_url(entry))
            for entry in service.list_logs()
        ]
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food_log(payload: FoodLogPayload, request: Request) -> FoodLogResponse:
    """Create a food log entry."""
    service = _service(request)
    created = service.create_log(payload.to_domain())
    return FoodLogResponse.from_domain(created, service.image_url(created))


@router.put("/{log_id}")
async def update_food_log(
    log_id: int, payload: FoodLogPayload, request: Request
) -> FoodLogResponse:
    """Replace a food log entry."""
    service = _service(request)
    updated = service.update_log(payload.to_domain(log_id))
    return FoodLogResponse.from_domain(updated, service.image_url(updated))


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food_log(log_id: int, request: Request) -> None:
    """Delete a food log entry."""
    _service(request).delete_log(log_id)


def _service(request: Request) -> FoodLogService:
    container: AppContainer = request.app.state.container
    return container.food_log_service
