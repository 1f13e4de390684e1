"""Error taxonomy for the LLM orchestration layer.

Every error is rooted at LLMError so callers can catch broadly
(``except LLMError``) or branch on the specific kind.
"""


class LLMError(Exception):
    """Base exception for all orchestration errors."""


class ProviderUnconfiguredError(LLMError):
    """Raised when an adapter is asked to call its vendor without a credential."""

    def __init__(self, vendor: str):
        self.vendor = vendor
        super().__init__(f"{vendor} provider not configured")


class NoProviderAvailableError(LLMError):
    """Raised when the registry holds no available adapter at resolution time."""

    def __init__(self, requested: str | None = None):
        self.requested = requested
        super().__init__(f"No LLM provider available. Requested: {requested or 'default'}")


class ProviderError(LLMError):
    """Raised when the vendor API call itself fails.

    The vendor's native message is preserved so an admin sees e.g.
    "Gemini API error: quota exceeded" rather than a generic failure.
    """

    def __init__(self, vendor: str, message: str):
        self.vendor = vendor
        self.message = message
        super().__init__(f"{vendor} API error: {message}")


class ExtractionParseError(LLMError):
    """Raised when the vendor answered but the text does not match the CV schema."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class ProviderUnavailableError(LLMError):
    """Raised when a provider that is not in the registry is made the default."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Provider {provider} is not available")
