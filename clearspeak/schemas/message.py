from typing import Annotated, List, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, conint, constr

MessageContext = Literal["boss", "client", "colleague", "friend"]

ToneLabel = Literal[
    "Friendly",
    "Professional",
    "Neutral",
    "Direct",
    "Formal",
    "Informal",
    "Apologetic",
]
TONE_LABELS: tuple[str, ...] = (
    "Friendly",
    "Professional",
    "Neutral",
    "Direct",
    "Formal",
    "Informal",
    "Apologetic",
)
DEFAULT_TONE_LABEL: ToneLabel = "Neutral"
MAX_SUGGESTIONS = 3


class CallRequest(BaseModel):
    """
    Prompt and output mode handed to the provider orchestrator.

    Built once per inbound request and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    prompt_text: constr(min_length=1)
    wants_structured_output: bool = False


def _require_text(value: object) -> object:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("NO_TEXT")
    return value


NonBlankText = Annotated[str, BeforeValidator(_require_text)]


class RewriteRequest(BaseModel):
    text: NonBlankText = Field(
        ...,
        description="Message to rewrite. Must contain non-whitespace characters.",
    )
    tone: str = Field(
        default="neutral",
        description="Target tone, free-form (e.g. 'friendly', 'assertive').",
    )
    context: MessageContext = Field(
        default="colleague",
        description="Who the message is addressed to: boss, client, colleague or friend.",
    )


class AnalyzeRequest(BaseModel):
    text: NonBlankText = Field(
        ...,
        description="Message to analyze. Must contain non-whitespace characters.",
    )
    context: MessageContext = Field(default="colleague")


class RewriteResponse(BaseModel):
    result: str


class AnalysisResult(BaseModel):
    """
    Tone analysis returned to clients.

    Always well-formed: the normalizer fills defaults for anything the
    model got wrong.
    """

    tone: ToneLabel = DEFAULT_TONE_LABEL
    score: conint(ge=0, le=100) = 0
    suggestions: List[str] = Field(default_factory=list, max_length=MAX_SUGGESTIONS)


class Preset(BaseModel):
    """Ready-made rewrite settings offered to the frontend."""

    name: str
    tone: str
    context: MessageContext
    hint: str
