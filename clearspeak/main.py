"""
Single entrypoint for the ClearSpeak service.

Run from project root: uvicorn clearspeak.main:app --reload
"""
import logging
from typing import Mapping, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from clearspeak.api import register_routes
from clearspeak.core.config import Settings, get_settings
from clearspeak.core.logging_config import configure_logging
from clearspeak.core.rate_limit import build_limiter, rate_limit_exceeded_handler
from clearspeak.providers import LLMProvider, build_providers
from clearspeak.services.message_service import MessageService
from clearspeak.services.orchestrator import ProviderOrchestrator

logger = logging.getLogger(__name__)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map body validation errors to a 400 with a short fixed code."""
    # A missing body means a missing text as well.
    text_errors = [
        err for err in exc.errors()
        if "text" in err.get("loc", ()) or tuple(err.get("loc", ())) == ("body",)
    ]
    code = "NO_TEXT" if text_errors else "INVALID_REQUEST"
    logger.info("Rejected request to %s: %s", request.url.path, code)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": code})


def create_app(
    settings: Optional[Settings] = None,
    providers: Optional[Mapping[str, LLMProvider]] = None,
) -> FastAPI:
    """
    Application factory for the FastAPI app.

    ``settings`` and ``providers`` default to the environment configuration
    and the SDK-backed adapters; tests pass their own.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    registry = dict(providers) if providers is not None else build_providers(settings)
    orchestrator = ProviderOrchestrator(
        registry,
        settings.providers,
        settings.timeout_ms,
        strategy=settings.failover_strategy,
    )

    app = FastAPI(
        title="ClearSpeak",
        description=(
            "Rewrites and analyzes short business messages using the first "
            "available LLM provider (OpenAI, Anthropic, Gemini or Groq)."
        ),
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.providers = registry
    app.state.message_service = MessageService(orchestrator, use_mock=settings.use_mock)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    # Rate limiter
    app.state.limiter = build_limiter(settings)
    app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    max_body_bytes = settings.max_body_bytes

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > max_body_bytes:
            logger.info("Rejected %s byte body on %s", declared, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"detail": "PAYLOAD_TOO_LARGE"},
            )
        return await call_next(request)

    register_routes(app, settings)

    logger.info(
        "ClearSpeak ready (mode=%s, order=%s, timeout_ms=%s, strategy=%s, rate_limit=%s/min)",
        "MOCK" if settings.use_mock else "LIVE",
        ",".join(settings.providers) or "-",
        settings.timeout_ms,
        settings.failover_strategy,
        settings.rate_limit_per_min,
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "clearspeak.main:app",
        host=get_settings().host,
        port=get_settings().port,
        reload=False,
    )
