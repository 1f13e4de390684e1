"""LLM orchestration across providers.

Resolves which adapter serves a call, applies per-call configuration and
delegates. Resolution order for the provider is: explicit ``provider``
argument, then ``config.provider``, then the default provider, then the first
available adapter in fallback order.

The orchestrator never retries and never downgrades an error to an empty
result. The one exception is ``test_configuration``, whose whole purpose is
to report failures to an admin.
"""

import logging
import time
from functools import lru_cache
from typing import Any

from cv_atlas.config import get_settings
from cv_atlas.exceptions import LLMError, NoProviderAvailableError, ProviderUnavailableError
from cv_atlas.extractors.cv_extractor import build_extraction_request, build_summary_request
from cv_atlas.llm.base import LLMProvider
from cv_atlas.llm.registry import ProviderRegistry, build_registry
from cv_atlas.llm.resolution import merge_request, resolve_generation_params
from cv_atlas.models.llm import (
    ConnectionTestResult,
    ExtractionResult,
    LLMConfiguration,
    LLMRequest,
    LLMResponse,
    ProviderName,
)
from cv_atlas.prompts.extraction import CONNECTION_TEST_MAX_TOKENS, CONNECTION_TEST_PROMPT

logger = logging.getLogger(__name__)


def _as_provider_name(value: ProviderName | str) -> ProviderName | str:
    try:
        return ProviderName(value.lower())
    except ValueError:
        return value


class LLMOrchestrator:
    """Pluggable multi-provider LLM service."""

    def __init__(
        self,
        registry: ProviderRegistry,
        default_provider: ProviderName | str = ProviderName.GEMINI,
    ):
        """Initialize the orchestrator.

        Args:
            registry: Adapters available to serve calls.
            default_provider: Provider used when a call names none. It may be
                unavailable; calls then fall back to the first available adapter.
        """
        self.registry = registry
        self._default_provider = _as_provider_name(default_provider)

    @property
    def default_provider(self) -> ProviderName | str:
        """Provider used when neither the call nor the configuration names one."""
        return self._default_provider

    def available_providers(self) -> list[ProviderName]:
        """Providers that can currently serve calls, in fallback order."""
        return self.registry.names()

    def is_provider_available(self, provider: ProviderName | str) -> bool:
        """Check whether a provider can currently serve calls."""
        return provider in self.registry

    def get_provider(self, requested: ProviderName | str | None = None) -> LLMProvider:
        """Resolve the adapter that serves a call.

        Args:
            requested: Explicitly requested provider. Uses the default when None.

        Returns:
            LLMProvider: The requested adapter, or a fallback if it is unavailable.

        Raises:
            NoProviderAvailableError: If no adapter is available at all.
        """
        target = requested if requested is not None else self._default_provider
        adapter = self.registry.get(target)
        if adapter is not None:
            return adapter

        fallback = self.registry.first()
        if fallback is None:
            raise NoProviderAvailableError(str(getattr(target, "value", target)))

        logger.warning(
            f"Provider {getattr(target, 'value', target)} not available, "
            f"falling back to {fallback.name.value}"
        )
        return fallback

    def _resolve(
        self, config: LLMConfiguration | None, provider: ProviderName | str | None
    ) -> LLMProvider:
        requested = provider if provider is not None else (config.provider if config else None)
        return self.get_provider(requested)

    async def generate_completion(
        self,
        request: LLMRequest,
        config: LLMConfiguration | None = None,
        provider: ProviderName | str | None = None,
    ) -> LLMResponse:
        """Generate a completion using the resolved provider.

        Request-level generation parameters win over the configuration's,
        which win over the adapter defaults.

        Raises:
            NoProviderAvailableError: If no adapter is available.
            ProviderError: If the vendor call fails.
        """
        adapter = self._resolve(config, provider)
        merged = merge_request(request, config)
        params = resolve_generation_params(merged, config, adapter)
        return await adapter.generate_completion(merged, params)

    async def extract_cv_data(
        self,
        cv_text: str,
        config: LLMConfiguration | None = None,
        provider: ProviderName | str | None = None,
    ) -> ExtractionResult:
        """Extract structured CV data and report which adapter and model served it.

        Raises:
            NoProviderAvailableError: If no adapter is available.
            ProviderError: If the vendor call fails.
            ExtractionParseError: If the response does not match the CV schema.
        """
        adapter = self._resolve(config, provider)
        params = resolve_generation_params(
            build_extraction_request(cv_text, config), config, adapter
        )

        logger.info(
            f"Extracting CV data ({len(cv_text)} chars) with {adapter.name.value}/{params.model}"
        )
        result = await adapter.extract_cv_data(cv_text, config, params)

        return ExtractionResult(result=result, provider=adapter.name.value, model=params.model)

    async def generate_summary(
        self,
        extracted_data: Any,
        config: LLMConfiguration | None = None,
        provider: ProviderName | str | None = None,
    ) -> str:
        """Generate a professional summary from extracted CV data."""
        adapter = self._resolve(config, provider)
        params = resolve_generation_params(
            build_summary_request(extracted_data, config), config, adapter
        )
        return await adapter.generate_summary(extracted_data, config, params)

    def set_default_provider(self, provider: ProviderName | str) -> None:
        """Change the default provider.

        Raises:
            ProviderUnavailableError: If the provider cannot currently serve
                calls. The default is left unchanged.
        """
        if not self.is_provider_available(provider):
            raise ProviderUnavailableError(str(getattr(provider, "value", provider)))
        self._default_provider = _as_provider_name(provider)
        logger.info(f"Default LLM provider set to: {self._default_provider.value}")

    async def test_configuration(self, config: LLMConfiguration) -> ConnectionTestResult:
        """Send a trivial prompt through a configuration and report the outcome.

        Failures are returned in the result rather than raised.
        """
        provider_name = config.provider.value
        if not self.is_provider_available(config.provider):
            return ConnectionTestResult(
                available=False,
                provider=provider_name,
                model=config.model,
                error=f"Provider {provider_name} is not configured",
            )

        request = LLMRequest(prompt=CONNECTION_TEST_PROMPT, max_tokens=CONNECTION_TEST_MAX_TOKENS)
        start = time.perf_counter()
        try:
            response = await self.generate_completion(request, config)
        except LLMError as e:
            logger.warning(f"Connection test failed for {provider_name}: {e}")
            return ConnectionTestResult(
                available=False,
                provider=provider_name,
                model=config.model,
                latency_ms=(time.perf_counter() - start) * 1000,
                error=str(e),
            )

        return ConnectionTestResult(
            available=True,
            provider=response.provider,
            model=response.model,
            response=response.content,
            latency_ms=(time.perf_counter() - start) * 1000,
        )


@lru_cache
def get_orchestrator() -> LLMOrchestrator:
    """Get the process-wide orchestrator built from settings."""
    settings = get_settings()
    return LLMOrchestrator(build_registry(settings), settings.default_provider)
