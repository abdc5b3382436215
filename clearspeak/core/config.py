import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

KNOWN_PROVIDERS: tuple[str, ...] = ("openai", "anthropic", "gemini", "groq")

FailoverStrategy = Literal["sequential", "race"]


@dataclass(frozen=True)
class GenerationParams:
    """Model name and sampling parameters for one provider."""

    model: str
    max_tokens: int
    temperature: float


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Read once at startup; the instance is frozen afterwards.
    """

    # Core app settings
    app_name: str = Field(default="clearspeak")
    environment: str = Field(default="development")  # development | staging | production
    debug: bool = Field(default=False)

    # HTTP server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)
    api_prefix: str = Field(default="")
    cors_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=("http://localhost:3000", "http://localhost:3001"),
    )
    frontend_origin: Optional[str] = Field(
        default=None,
        description="Extra allowed CORS origin for the deployed frontend.",
    )

    # Abuse protection
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_per_min: int = Field(default=60, gt=0)
    max_body_bytes: int = Field(
        default=512 * 1024,
        gt=0,
        description="Requests declaring a larger Content-Length are rejected with 413.",
    )

    # Observability
    log_level: str = Field(default="INFO")

    # Canned responses instead of provider calls
    use_mock: bool = Field(default=False)

    # Failover
    providers: Annotated[tuple[str, ...], NoDecode] = Field(
        default=("openai", "anthropic", "gemini"),
        description="Provider order, comma separated (e.g. 'anthropic,openai').",
    )
    timeout_ms: int = Field(default=8000, gt=0)
    failover_strategy: FailoverStrategy = Field(default="sequential")

    # OpenAI
    openai_api_key: Optional[str] = Field(default=None)
    openai_model: str = Field(default="gpt-4o-mini")
    openai_max_tokens: int = Field(default=400, gt=0)
    openai_temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    # Anthropic
    anthropic_api_key: Optional[str] = Field(default=None)
    anthropic_model: str = Field(default="claude-3-5-sonnet-20240620")
    anthropic_max_tokens: int = Field(default=400, gt=0)
    anthropic_temperature: float = Field(default=0.3, ge=0.0, le=1.0)

    # Gemini
    gemini_api_key: Optional[str] = Field(default=None)
    gemini_model: str = Field(default="gemini-1.5-flash")
    gemini_max_tokens: int = Field(default=400, gt=0)
    gemini_temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    # Groq
    groq_api_key: Optional[str] = Field(default=None)
    groq_model: str = Field(default="llama-3.3-70b-versatile")
    groq_max_tokens: int = Field(default=400, gt=0)
    groq_temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    model_config = SettingsConfigDict(
        env_prefix="CLEARSPEAK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("providers", mode="before")
    @classmethod
    def parse_provider_order(cls, value: object) -> tuple[str, ...]:
        if value is None:
            return ()
        items = value.split(",") if isinstance(value, str) else list(value)
        order: list[str] = []
        for item in items:
            name = str(item).strip().lower()
            if not name or name in order:
                continue
            if name not in KNOWN_PROVIDERS:
                logger.warning("Ignoring unknown provider %r in provider order", name)
                continue
            order.append(name)
        return tuple(order)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: object) -> tuple[str, ...]:
        if value is None:
            return ()
        items = value.split(",") if isinstance(value, str) else list(value)
        return tuple(s for s in (str(i).strip() for i in items) if s)

    @property
    def allowed_origins(self) -> list[str]:
        origins = list(self.cors_origins)
        if self.frontend_origin and self.frontend_origin not in origins:
            origins.append(self.frontend_origin)
        return origins

    def api_key_for(self, provider: str) -> Optional[str]:
        """Return the configured credential for a provider, or None."""
        if provider not in KNOWN_PROVIDERS:
            return None
        return getattr(self, f"{provider}_api_key") or None

    def generation_params(self, provider: str) -> GenerationParams:
        if provider not in KNOWN_PROVIDERS:
            raise ValueError(f"Unsupported LLM provider: {provider!r}.")
        return GenerationParams(
            model=getattr(self, f"{provider}_model"),
            max_tokens=getattr(self, f"{provider}_max_tokens"),
            temperature=getattr(self, f"{provider}_temperature"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached settings instance for use as a dependency.
    """
    return Settings()
