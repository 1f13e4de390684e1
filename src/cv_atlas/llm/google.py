"""Google Gemini LLM provider."""

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from cv_atlas.llm.base import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, LLMProvider
from cv_atlas.models.llm import GenerationParams, LLMRequest, ProviderName


class GeminiProvider(LLMProvider):
    """Google Gemini provider using langchain-google-genai."""

    name = ProviderName.GEMINI
    display_name = "Gemini"

    def __init__(
        self,
        model: str = "gemini-1.5-flash",
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        """Initialize the Gemini provider.

        Args:
            model: Model name (default: gemini-1.5-flash).
            api_key: Gemini API key. The adapter is unavailable without one.
            timeout: Request timeout in seconds.
            max_retries: Maximum number of retries on failure.
        """
        super().__init__(model=model, api_key=api_key, timeout=timeout, max_retries=max_retries)

    def _build_messages(self, request: LLMRequest) -> list[BaseMessage]:
        """Merge the system prompt into a single user turn."""
        text = (
            f"{request.system_prompt}\n\n{request.prompt}"
            if request.system_prompt
            else request.prompt
        )
        return [HumanMessage(content=text)]

    def _create_chat_model(self, params: GenerationParams) -> BaseChatModel:
        """Create a Gemini chat model instance."""
        return ChatGoogleGenerativeAI(
            model=params.model,
            google_api_key=params.api_key,
            temperature=params.temperature,
            max_output_tokens=params.max_tokens,
            top_p=params.top_p,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )
