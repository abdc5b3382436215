import logging
from typing import List
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Request, status

from clearspeak.core.errors import AllProvidersFailedError, ClearSpeakError
from clearspeak.schemas.message import (
    AnalysisResult,
    AnalyzeRequest,
    Preset,
    RewriteRequest,
    RewriteResponse,
)
from clearspeak.services.message_service import MessageService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_service(request: Request) -> MessageService:
    """Return the MessageService built at application startup."""
    return request.app.state.message_service


def _server_error(exc: ClearSpeakError, req_id: str, route: str) -> HTTPException:
    attempts = exc.attempts if isinstance(exc, AllProvidersFailedError) else ()
    logger.error(
        "Request %s on %s failed: %s",
        req_id,
        route,
        exc,
        extra={"req_id": req_id, "route": route, "kind": exc.kind, "attempts": [a.describe() for a in attempts]},
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc) or "AI_FAILED",
    )


@router.get(
    "/presets",
    response_model=List[Preset],
    summary="Ready-made rewrite presets for the frontend",
)
async def list_presets(service: MessageService = Depends(get_service)) -> List[Preset]:
    return service.presets()


@router.post(
    "/rewrite-email",
    response_model=RewriteResponse,
    summary="Rewrite a business message",
)
async def rewrite_email(
    payload: RewriteRequest,
    service: MessageService = Depends(get_service),
) -> RewriteResponse:
    """
    Rewrite the message for the given tone and audience using the first
    available LLM provider.
    """
    req_id = str(uuid4())
    try:
        response = await service.rewrite(payload)
    except ClearSpeakError as exc:
        raise _server_error(exc, req_id, "rewrite-email") from exc
    logger.info("Request %s on rewrite-email ok", req_id, extra={"req_id": req_id, "route": "rewrite-email"})
    return response


@router.post(
    "/analyze-tone",
    response_model=AnalysisResult,
    summary="Analyze the tone of a business message",
)
async def analyze_tone(
    payload: AnalyzeRequest,
    service: MessageService = Depends(get_service),
) -> AnalysisResult:
    """
    Return tone label, a 0-100 clarity score and up to three suggestions.
    """
    req_id = str(uuid4())
    try:
        result = await service.analyze(payload)
    except ClearSpeakError as exc:
        raise _server_error(exc, req_id, "analyze-tone") from exc
    logger.info("Request %s on analyze-tone ok", req_id, extra={"req_id": req_id, "route": "analyze-tone"})
    return result
