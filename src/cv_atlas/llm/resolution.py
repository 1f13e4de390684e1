"""Per-call configuration resolution.

Each generation parameter is resolved independently, highest wins:

1. the value given on the call itself (LLMRequest field),
2. the value on the supplied LLMConfiguration record,
3. the adapter's built-in default.

Nothing here is cached; configuration records may change between calls.
"""

from typing import TYPE_CHECKING, TypeVar

from cv_atlas.models.llm import GenerationParams, LLMConfiguration, LLMRequest

if TYPE_CHECKING:
    from cv_atlas.llm.base import LLMProvider

DEFAULT_TEMPERATURE = 0.1
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TOP_P = 0.95

V = TypeVar("V")


def _first_set(*values: V | None) -> V | None:
    """Return the first value that is not None (0 and "" count as set)."""
    for value in values:
        if value is not None:
            return value
    return None


def merge_request(request: LLMRequest, config: LLMConfiguration | None) -> LLMRequest:
    """Fill the request's unset generation fields from the configuration record.

    Returns a new request; the original is never modified.
    """
    if config is None:
        return request
    return request.model_copy(
        update={
            "temperature": _first_set(request.temperature, config.temperature),
            "max_tokens": _first_set(request.max_tokens, config.max_tokens),
            "top_p": _first_set(request.top_p, config.top_p),
        }
    )


def resolve_generation_params(
    request: LLMRequest,
    config: LLMConfiguration | None,
    provider: "LLMProvider",
) -> GenerationParams:
    """Resolve the effective parameters for one vendor call.

    Args:
        request: The immediate request.
        config: Optional stored configuration record.
        provider: Adapter supplying the default model and credential. The
            configuration's key is only used when this adapter serves the
            configured vendor; a fallback adapter keeps its own key.

    Returns:
        GenerationParams: Parameters to send to the vendor.
    """
    own_vendor = config is not None and config.provider == provider.name
    return GenerationParams(
        model=(config.model if config else None) or provider.model,
        temperature=_first_set(
            request.temperature, config.temperature if config else None, DEFAULT_TEMPERATURE
        ),
        max_tokens=_first_set(
            request.max_tokens, config.max_tokens if config else None, DEFAULT_MAX_TOKENS
        ),
        top_p=_first_set(request.top_p, config.top_p if config else None, DEFAULT_TOP_P),
        api_key=(config.api_key if own_vendor else None) or provider.api_key,
    )
