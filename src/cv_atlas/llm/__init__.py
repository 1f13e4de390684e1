"""LLM provider abstraction and orchestration."""

from cv_atlas.llm.base import LLMProvider
from cv_atlas.llm.orchestrator import LLMOrchestrator, get_orchestrator
from cv_atlas.llm.registry import ProviderRegistry, build_registry

__all__ = [
    "LLMProvider",
    "LLMOrchestrator",
    "ProviderRegistry",
    "build_registry",
    "get_orchestrator",
]
