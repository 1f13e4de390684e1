"""Data models for CV Atlas."""

from cv_atlas.models.cv import (
    Certification,
    CVExtractionResponse,
    CVMetadata,
    Education,
    Experience,
    Internship,
    Language,
    PersonalInfo,
)
from cv_atlas.models.llm import (
    ConnectionTestResult,
    ExtractionResult,
    GenerationParams,
    LLMConfiguration,
    LLMRequest,
    LLMResponse,
    ProviderName,
    TokenUsage,
)

__all__ = [
    "Certification",
    "CVExtractionResponse",
    "CVMetadata",
    "Education",
    "Experience",
    "Internship",
    "Language",
    "PersonalInfo",
    "ConnectionTestResult",
    "ExtractionResult",
    "GenerationParams",
    "LLMConfiguration",
    "LLMRequest",
    "LLMResponse",
    "ProviderName",
    "TokenUsage",
]
