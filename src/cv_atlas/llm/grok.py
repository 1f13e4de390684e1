"""xAI Grok LLM provider.

Grok exposes an OpenAI-compatible chat completions API, so the OpenAI
LangChain client is reused with xAI's base URL.
"""

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from cv_atlas.llm.base import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, LLMProvider
from cv_atlas.models.llm import GenerationParams, ProviderName

XAI_BASE_URL = "https://api.x.ai/v1"


class GrokProvider(LLMProvider):
    """xAI Grok provider."""

    name = ProviderName.GROK
    display_name = "Grok"

    def __init__(
        self,
        model: str = "grok-2-latest",
        api_key: str | None = None,
        base_url: str = XAI_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        super().__init__(model=model, api_key=api_key, timeout=timeout, max_retries=max_retries)
        self.base_url = base_url

    def _create_chat_model(self, params: GenerationParams) -> BaseChatModel:
        """Create Grok chat model via the OpenAI-compatible endpoint."""
        return ChatOpenAI(
            model=params.model,
            api_key=params.api_key,
            base_url=self.base_url,
            temperature=params.temperature,
            max_tokens=params.max_tokens,
            top_p=params.top_p,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )
