"""Configuration management for CV Atlas."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.logging import RichHandler

ProviderLiteral = Literal["gemini", "openai", "grok"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CV_ATLAS_",
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # API Keys (no prefix, standard env vars)
    gemini_api_key: str | None = Field(
        default=None, validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY")
    )
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    grok_api_key: str | None = Field(
        default=None, validation_alias=AliasChoices("XAI_API_KEY", "GROK_API_KEY")
    )

    # Provider selection
    default_provider: ProviderLiteral = "gemini"
    fallback_order: list[ProviderLiteral] = Field(
        default_factory=lambda: ["gemini", "openai", "grok"],
        description="Order in which providers are tried when the requested one is missing",
    )

    # Per-vendor default models
    gemini_model: str = "gemini-1.5-flash"
    openai_model: str = "gpt-4o-mini"
    grok_model: str = "grok-2-latest"
    grok_base_url: str = "https://api.x.ai/v1"

    # Vendor client behaviour
    llm_timeout: float = Field(
        default=120.0,
        ge=5,
        le=600,
        description="Per-request timeout in seconds handed to the vendor client",
    )
    llm_max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retries performed by the vendor client on transient errors",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # LangSmith tracing (no prefix - standard env vars)
    langsmith_api_key: str | None = Field(default=None, alias="LANGSMITH_API_KEY")
    langsmith_tracing: bool = Field(default=False, alias="LANGSMITH_TRACING")
    langsmith_endpoint: str = Field(
        default="https://api.smith.langchain.com", alias="LANGSMITH_ENDPOINT"
    )
    langsmith_project: str = Field(default="cv-atlas", alias="LANGSMITH_PROJECT")

    @property
    def langsmith_enabled(self) -> bool:
        """Check if LangSmith tracing is enabled and configured."""
        return bool(self.langsmith_api_key and self.langsmith_tracing)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Route library logging through rich for CLI use."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
