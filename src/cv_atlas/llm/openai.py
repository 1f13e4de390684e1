"""OpenAI LLM provider."""

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from cv_atlas.llm.base import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, LLMProvider
from cv_atlas.models.llm import GenerationParams, ProviderName


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider."""

    name = ProviderName.OPENAI
    display_name = "OpenAI"

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        super().__init__(model=model, api_key=api_key, timeout=timeout, max_retries=max_retries)

    def _create_chat_model(self, params: GenerationParams) -> BaseChatModel:
        """Create OpenAI chat model."""
        return ChatOpenAI(
            model=params.model,
            api_key=params.api_key,
            temperature=params.temperature,
            max_tokens=params.max_tokens,
            top_p=params.top_p,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )
