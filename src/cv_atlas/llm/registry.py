"""Provider registry.

Holds the adapters that were available when the registry was built, in
fallback order. Unavailable adapters are left out entirely rather than
marked inactive. The set is fixed after construction; individual adapters
can still have their credentials rotated.
"""

import logging
from collections.abc import Iterable, Iterator

from cv_atlas.config import Settings
from cv_atlas.exceptions import ProviderUnavailableError
from cv_atlas.llm.base import LLMProvider
from cv_atlas.llm.google import GeminiProvider
from cv_atlas.llm.grok import GrokProvider
from cv_atlas.llm.openai import OpenAIProvider
from cv_atlas.models.llm import ProviderName

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Read-only mapping from provider name to available adapter."""

    def __init__(self, adapters: Iterable[LLMProvider]):
        self._adapters: dict[ProviderName, LLMProvider] = {}
        for adapter in adapters:
            if adapter.name in self._adapters:
                logger.warning(f"Duplicate adapter for {adapter.name.value} ignored")
                continue
            if not adapter.is_available():
                logger.debug(f"{adapter.display_name} provider unavailable, not registered")
                continue
            self._adapters[adapter.name] = adapter

        names = ", ".join(name.value for name in self._adapters) or "none"
        logger.info(f"LLM registry initialized with providers: {names}")

    def _lookup(self, name: ProviderName | str | None) -> LLMProvider | None:
        if name is None:
            return None
        try:
            return self._adapters.get(ProviderName(name.lower()))
        except ValueError:
            return None

    def _selectable(self) -> list[LLMProvider]:
        # A rotated-out credential makes an adapter unselectable until reconfigured
        return [adapter for adapter in self._adapters.values() if adapter.is_available()]

    def get(self, name: ProviderName | str | None) -> LLMProvider | None:
        """Return the adapter for a provider, or None if it cannot serve calls."""
        adapter = self._lookup(name)
        if adapter is None or not adapter.is_available():
            return None
        return adapter

    def first(self) -> LLMProvider | None:
        """Return the first adapter in fallback order."""
        return next(iter(self._selectable()), None)

    def names(self) -> list[ProviderName]:
        """Selectable provider names in fallback order."""
        return [adapter.name for adapter in self._selectable()]

    def reconfigure(self, name: ProviderName | str, api_key: str) -> None:
        """Rotate the credential of a registered adapter.

        Raises:
            ProviderUnavailableError: If the provider is not registered.
        """
        adapter = self._lookup(name)
        if adapter is None:
            raise ProviderUnavailableError(str(getattr(name, "value", name)))
        adapter.configure(api_key)

    def __contains__(self, name: object) -> bool:
        return self.get(name) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[LLMProvider]:
        return iter(self._selectable())

    def __len__(self) -> int:
        return len(self._selectable())


def build_registry(settings: Settings) -> ProviderRegistry:
    """Build one adapter per vendor from settings and register them.

    Adapters are registered in ``settings.fallback_order``; vendors missing
    from that list are appended in their declaration order.

    Args:
        settings: Application settings carrying API keys and default models.

    Returns:
        ProviderRegistry: Registry holding the adapters that have credentials.
    """
    adapters: dict[ProviderName, LLMProvider] = {
        ProviderName.GEMINI: GeminiProvider(
            model=settings.gemini_model,
            api_key=settings.gemini_api_key,
            timeout=settings.llm_timeout,
            max_retries=settings.llm_max_retries,
        ),
        ProviderName.OPENAI: OpenAIProvider(
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            timeout=settings.llm_timeout,
            max_retries=settings.llm_max_retries,
        ),
        ProviderName.GROK: GrokProvider(
            model=settings.grok_model,
            api_key=settings.grok_api_key,
            base_url=settings.grok_base_url,
            timeout=settings.llm_timeout,
            max_retries=settings.llm_max_retries,
        ),
    }

    order = [ProviderName(name) for name in settings.fallback_order]
    order += [name for name in ProviderName if name not in order]
    return ProviderRegistry(adapters[name] for name in dict.fromkeys(order))
