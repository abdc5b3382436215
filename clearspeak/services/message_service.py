import logging
from typing import List

from clearspeak.schemas.message import (
    AnalysisResult,
    AnalyzeRequest,
    CallRequest,
    Preset,
    RewriteRequest,
    RewriteResponse,
)
from clearspeak.services.normalizer import normalize_analysis
from clearspeak.services.orchestrator import ProviderOrchestrator
from clearspeak.utils.prompt_builder import build_analyze_prompt, build_rewrite_prompt

logger = logging.getLogger(__name__)

PRESETS: tuple[Preset, ...] = (
    Preset(
        name="Follow-up (Client)",
        tone="friendly",
        context="client",
        hint="Short, polite reminder asking for status/ETA.",
    ),
    Preset(
        name="Escalation (Boss)",
        tone="assertive",
        context="boss",
        hint="Clear blocker + needed decision + concise next steps.",
    ),
    Preset(
        name="Nudge (Colleague)",
        tone="neutral",
        context="colleague",
        hint="Gentle reminder about a task with a concrete ask.",
    ),
    Preset(
        name="Warm ping (Friend)",
        tone="friendly",
        context="friend",
        hint="Casual, warm check-in. Keep it short.",
    ),
)

MOCK_ANALYSIS = AnalysisResult(
    tone="Neutral",
    score=72,
    suggestions=["Make it shorter.", "Clarify the ask/CTA.", "Offer a specific deadline."],
)


class MessageService:
    """
    Application service behind the rewrite and analyze endpoints.

    Builds prompts, runs them through the provider orchestrator and shapes
    the result. In mock mode the orchestrator is never called.
    """

    def __init__(self, orchestrator: ProviderOrchestrator, use_mock: bool = False) -> None:
        self._orchestrator = orchestrator
        self._use_mock = use_mock

    @property
    def orchestrator(self) -> ProviderOrchestrator:
        return self._orchestrator

    async def rewrite(self, payload: RewriteRequest) -> RewriteResponse:
        if self._use_mock:
            logger.debug("Mock mode: rewrite served without providers")
            return RewriteResponse(result=f"(mock {payload.tone}/{payload.context}) {payload.text}")

        request = CallRequest(
            prompt_text=build_rewrite_prompt(payload.text, payload.tone, payload.context),
            wants_structured_output=False,
        )
        resolution = await self._orchestrator.resolve(request)
        return RewriteResponse(result=resolution.text)

    async def analyze(self, payload: AnalyzeRequest) -> AnalysisResult:
        if self._use_mock:
            logger.debug("Mock mode: analysis served without providers")
            return MOCK_ANALYSIS.model_copy(deep=True)

        request = CallRequest(
            prompt_text=build_analyze_prompt(payload.text, payload.context),
            wants_structured_output=True,
        )
        resolution = await self._orchestrator.resolve(request)
        return normalize_analysis(resolution.text)

    def presets(self) -> List[Preset]:
        return list(PRESETS)
