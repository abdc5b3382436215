from fastapi import APIRouter, FastAPI

from clearspeak.core.config import Settings

from . import health, messages


def get_api_router() -> APIRouter:
    """
    Aggregate and return the root API router.
    """
    root_router = APIRouter()

    root_router.include_router(
        health.router,
        prefix="",
        tags=["health"],
    )

    root_router.include_router(
        messages.router,
        prefix="",
        tags=["messages"],
    )

    return root_router


def register_routes(app: FastAPI, settings: Settings) -> None:
    """
    Attach all API routes to the FastAPI application.
    """
    api_router = get_api_router()
    app.include_router(api_router, prefix=settings.api_prefix)
