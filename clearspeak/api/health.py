from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", summary="Service health check", tags=["health"])
async def health_check(request: Request) -> dict:
    """
    Lightweight health check for readiness and liveness checks.

    Also reports the run mode and which providers have credentials.
    """
    settings = request.app.state.settings
    orchestrator = request.app.state.message_service.orchestrator
    providers: dict = {
        name: provider.enabled for name, provider in request.app.state.providers.items()
    }
    providers["order"] = list(orchestrator.order)

    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
        "time": datetime.now(timezone.utc).isoformat(),
        "mode": "MOCK" if settings.use_mock else "LIVE",
        "providers": providers,
    }
