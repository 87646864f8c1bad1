"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from recipe_planner.api.ingredients import router as ingredients_router
from recipe_planner.api.recipes import router as recipes_router
from recipe_planner.api.shopping import router as shopping_router
from recipe_planner.api.users import router as users_router
from recipe_planner.app_logging import configure_logging
from recipe_planner.containers import AppContainer
from recipe_planner.domain.errors import (
    InvalidInput,
    NotFoundError,
    RecipePlannerError,
    SubstitutionExists,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(shopping_router)
    app.include_router(ingredients_router)
    app.include_router(recipes_router)
    app.include_router(users_router)

    @app.exception_handler(RecipePlannerError)
    async def handle_domain_error(
        request: Request, exc: RecipePlannerError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=_status_for(exc), content={"message": str(exc)}
        )

    @app.exception_handler(RuntimeError)
    async def handle_store_error(request: Request, exc: RuntimeError) -> JSONResponse:
        logger.exception(
            "Request failed",
            extra={"path": request.url.path},
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": _error_message(container, exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: RecipePlannerError) -> int:
    """Map a domain error to an HTTP status code."""
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, InvalidInput | SubstitutionExists):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_message(container: AppContainer, exc: Exception) -> str:
    """Return a user-facing error message with local debug info."""
    fallback = "Request failed"
    if container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
