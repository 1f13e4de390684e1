"""Request, response and configuration models for LLM calls."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from cv_atlas.models.cv import CVExtractionResponse


class ProviderName(str, Enum):
    """Backing LLM vendors."""

    GEMINI = "gemini"
    OPENAI = "openai"
    GROK = "grok"


class LLMRequest(BaseModel):
    """A single completion request. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    prompt: str
    system_prompt: str | None = None
    temperature: float | None = Field(default=None, ge=0, le=2)
    max_tokens: int | None = Field(default=None, gt=0)
    top_p: float | None = Field(default=None, ge=0, le=1)


class TokenUsage(BaseModel):
    """Token accounting reported by the vendor."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class LLMResponse(BaseModel):
    """Normalized completion result, whichever vendor served it."""

    content: str
    model: str
    provider: str
    usage: TokenUsage | None = None


class LLMConfiguration(BaseModel):
    """Admin-managed settings for one provider.

    Persisted and validated elsewhere; the orchestration layer only reads it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    provider: ProviderName
    api_key: str | None = None
    name: str | None = None
    model: str | None = None
    temperature: float | None = Field(default=None, ge=0, le=2)
    max_tokens: int | None = Field(default=None, gt=0)
    top_p: float | None = Field(default=None, ge=0, le=1)
    is_active: bool = True
    priority: int = 0
    extraction_prompt: str | None = None  # Replaces the built-in extraction instructions
    summary_prompt: str | None = None  # Replaces the built-in summary instructions


class GenerationParams(BaseModel):
    """Fully resolved parameters for one vendor call."""

    model_config = ConfigDict(frozen=True)

    model: str
    temperature: float
    max_tokens: int
    top_p: float
    api_key: str | None = Field(default=None, repr=False)


class ExtractionResult(BaseModel):
    """Extraction outcome plus the adapter and model that actually served it."""

    result: CVExtractionResponse
    provider: str
    model: str


class ConnectionTestResult(BaseModel):
    """Outcome of an admin "test configuration" action."""

    available: bool
    provider: str
    model: str | None = None
    response: str | None = None
    latency_ms: float | None = None
    error: str | None = None
