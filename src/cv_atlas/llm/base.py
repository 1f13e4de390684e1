"""Base LLM provider abstraction.

Every vendor adapter exposes the same flat interface: availability check,
model selection, raw completion, CV extraction and summary generation. Vendor
SDK differences stay inside ``_create_chat_model`` and ``_build_messages``.

A chat model is built per call from resolved GenerationParams, so the model
name and credential travel with the call rather than being read from shared
adapter state mid-flight.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from cv_atlas.exceptions import ProviderError, ProviderUnconfiguredError
from cv_atlas.extractors.cv_extractor import (
    build_extraction_request,
    build_summary_request,
    parse_cv_extraction,
)
from cv_atlas.llm.resolution import resolve_generation_params
from cv_atlas.models.cv import CVExtractionResponse
from cv_atlas.models.llm import (
    GenerationParams,
    LLMConfiguration,
    LLMRequest,
    LLMResponse,
    ProviderName,
    TokenUsage,
)

logger = logging.getLogger(__name__)

# Default timeout in seconds for API requests
DEFAULT_TIMEOUT = 120.0  # 2 minutes per request
DEFAULT_MAX_RETRIES = 2


def _message_text(message: BaseMessage) -> str:
    """Flatten message content, which some vendors return as content blocks."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type", "text") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


def _usage(message: BaseMessage) -> TokenUsage | None:
    metadata = getattr(message, "usage_metadata", None)
    if not metadata:
        return None
    return TokenUsage(
        prompt_tokens=metadata.get("input_tokens", 0),
        completion_tokens=metadata.get("output_tokens", 0),
        total_tokens=metadata.get("total_tokens", 0),
    )


class LLMProvider(ABC):
    """Abstract base class for vendor adapters."""

    name: ClassVar[ProviderName]
    display_name: ClassVar[str]

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        self._model = model
        self.api_key = api_key or None
        self.timeout = timeout
        self.max_retries = max_retries

    @property
    def model(self) -> str:
        """Default model used when a call does not name one."""
        return self._model

    def is_available(self) -> bool:
        """Check for a usable credential. Local state only, no network I/O."""
        return bool(self.api_key)

    def configure(self, api_key: str | None) -> None:
        """Replace the adapter's credential. An empty key makes it unavailable."""
        self.api_key = api_key or None
        if self.api_key:
            logger.info(f"{self.display_name} provider configured")
        else:
            logger.info(f"{self.display_name} provider credential cleared")

    def set_model(self, name: str) -> None:
        """Change the default model for subsequent calls."""
        if name and name != self._model:
            logger.debug(f"{self.display_name} default model: {self._model} -> {name}")
            self._model = name

    @abstractmethod
    def _create_chat_model(self, params: GenerationParams) -> BaseChatModel:
        """Create a vendor chat model bound to the given parameters."""
        pass

    def _build_messages(self, request: LLMRequest) -> list[BaseMessage]:
        """Build the vendor payload. Override when the vendor wants a single turn."""
        messages: list[BaseMessage] = []
        if request.system_prompt:
            messages.append(SystemMessage(content=request.system_prompt))
        messages.append(HumanMessage(content=request.prompt))
        return messages

    async def generate_completion(
        self,
        request: LLMRequest,
        params: GenerationParams | None = None,
    ) -> LLMResponse:
        """Send one completion request to the vendor.

        Args:
            request: Prompt, optional system prompt and generation overrides.
            params: Pre-resolved parameters. Resolved from the request and the
                adapter defaults when omitted.

        Returns:
            LLMResponse: Normalized response attributed to this adapter.

        Raises:
            ProviderUnconfiguredError: If the adapter holds no credential.
            ProviderError: If the vendor call fails.
        """
        if not self.is_available():
            raise ProviderUnconfiguredError(self.display_name)

        params = params or resolve_generation_params(request, None, self)
        messages = self._build_messages(request)

        try:
            chat_model = self._create_chat_model(params)
            message = await chat_model.ainvoke(messages)
        except Exception as e:
            logger.error(f"{self.display_name} completion error ({params.model}): {e}")
            raise ProviderError(self.display_name, str(e) or type(e).__name__) from e

        return LLMResponse(
            content=_message_text(message),
            model=params.model,
            provider=self.name.value,
            usage=_usage(message),
        )

    async def extract_cv_data(
        self,
        cv_text: str,
        config: LLMConfiguration | None = None,
        params: GenerationParams | None = None,
    ) -> CVExtractionResponse:
        """Extract structured CV data from raw text.

        Raises:
            ProviderError: If the vendor call fails.
            ExtractionParseError: If the answer does not match the CV schema.
        """
        request = build_extraction_request(cv_text, config)
        params = params or resolve_generation_params(request, config, self)
        response = await self.generate_completion(request, params)
        return parse_cv_extraction(response.content)

    async def generate_summary(
        self,
        extracted_data: Any,
        config: LLMConfiguration | None = None,
        params: GenerationParams | None = None,
    ) -> str:
        """Generate a short professional summary from extracted CV data."""
        request = build_summary_request(extracted_data, config)
        params = params or resolve_generation_params(request, config, self)
        response = await self.generate_completion(request, params)
        return response.content.strip()
