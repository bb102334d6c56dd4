"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from pet_food_tracker.api.food import router as food_router
from pet_food_tracker.app_logging import configure_logging
from pet_food_tracker.containers import AppContainer
from pet_food_tracker.domain.errors import (
    FoodEngineError,
    FoodEntryNotFoundError,
    FoodValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(food_router)

    @app.exception_handler(FoodValidationError)
    async def validation_error(
        request: Request, exc: FoodValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

    @app.exception_handler(FoodEngineError)
    async def engine_error(request: Request, exc: FoodEngineError) -> JSONResponse:
        logger.warning(
            "Food calculation rejected: path=%s error=%s", request.url.path, exc
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

    @app.exception_handler(FoodEntryNotFoundError)
    async def not_found(request: Request, exc: FoodEntryNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
