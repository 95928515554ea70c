"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from food_tracker.api.food_logs import router as food_logs_router
from food_tracker.api.ingredients import router as ingredients_router
from food_tracker.api.recipes import router as recipes_router
from food_tracker.app_logging import configure_logging
from food_tracker.containers import AppContainer
from food_tracker.domain.errors import (
    DuplicateIngredient,
    DuplicateLabel,
    FoodTrackerError,
    IngredientInUse,
    NotFound,
)

_CONFLICT_ERRORS = (DuplicateIngredient, DuplicateLabel, IngredientInUse)
_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(ingredients_router)
    app.include_router(recipes_router)
    app.include_router(food_logs_router)

    @app.exception_handler(FoodTrackerError)
    async def handle_domain_error(
        request: Request, exc: FoodTrackerError
    ) -> JSONResponse:
        if isinstance(exc, NotFound):
            status_code = status.HTTP_404_NOT_FOUND
        elif isinstance(exc, _CONFLICT_ERRORS):
            status_code = status.HTTP_409_CONFLICT
        else:
            status_code = _UNPROCESSABLE
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        body: dict[str, object] = {"error": exc.kind, "detail": str(exc)}
        usage_index = getattr(exc, "usage_index", None)
        if usage_index is not None:
            body["usage_index"] = usage_index
        return JSONResponse(status_code=status_code, content=body)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
