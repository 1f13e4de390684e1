"""Pytest configuration and fixtures."""

import json
from collections.abc import Callable
from typing import Any

import pytest
from langchain_core.messages import AIMessage

from cv_atlas.llm.base import LLMProvider
from cv_atlas.models.llm import GenerationParams, LLMConfiguration, ProviderName

DISPLAY_NAMES = {
    ProviderName.GEMINI: "Gemini",
    ProviderName.OPENAI: "OpenAI",
    ProviderName.GROK: "Grok",
}


class FakeChatModel:
    """Stand-in for a LangChain chat model that records what it was sent."""

    def __init__(
        self,
        content: Any = "",
        usage: dict[str, int] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.content = content
        self.usage = usage
        self.error = error
        self.messages: list | None = None

    async def ainvoke(self, messages: list, **kwargs: Any) -> AIMessage:
        self.messages = messages
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.content, usage_metadata=self.usage)


class StubProvider(LLMProvider):
    """Adapter double that returns canned content without network I/O."""

    def __init__(
        self,
        name: ProviderName,
        content: Any = "",
        api_key: str | None = "test-key",
        model: str = "stub-model",
        error: Exception | None = None,
        usage: dict[str, int] | None = None,
    ) -> None:
        super().__init__(model=model, api_key=api_key)
        self.name = name  # type: ignore[misc]
        self.display_name = DISPLAY_NAMES[name]  # type: ignore[misc]
        self.content = content
        self.error = error
        self.usage = usage
        self.params_seen: list[GenerationParams] = []
        self.chat_models: list[FakeChatModel] = []

    def _create_chat_model(self, params: GenerationParams) -> FakeChatModel:
        self.params_seen.append(params)
        chat_model = FakeChatModel(self.content, usage=self.usage, error=self.error)
        self.chat_models.append(chat_model)
        return chat_model


@pytest.fixture
def make_provider() -> Callable[..., StubProvider]:
    """Factory for stub adapters."""
    return StubProvider


@pytest.fixture
def fake_chat_model() -> type[FakeChatModel]:
    """The fake chat model class, for patching vendor clients."""
    return FakeChatModel


@pytest.fixture
def sample_cv_text() -> str:
    """A short but realistic CV."""
    return (
        "Jane Smith\n"
        "jane.smith@example.com | +44 20 7946 0958 | London, UK\n\n"
        "EXPERIENCE\n"
        "Senior Backend Engineer, Acme Ltd (2019 - Present)\n"
        "- Led migration of payment services to Kubernetes, cutting costs by 30%\n"
        "Software Engineer, Widgets Inc (2015 - 2019)\n\n"
        "EDUCATION\n"
        "BSc Computer Science, University of Leeds (2011 - 2015)\n\n"
        "SKILLS\n"
        "Python, PostgreSQL, Docker, Kubernetes, Leadership, Jira\n\n"
        "LANGUAGES\n"
        "English (native), French (B2)\n"
    )


@pytest.fixture
def extraction_payload() -> dict[str, Any]:
    """A schema-conforming extraction payload."""
    return {
        "personal_info": {
            "full_name": "Jane Smith",
            "email": "jane.smith@example.com",
            "phone": "+44 20 7946 0958",
            "location": "London, UK",
            "age": None,
            "gender": None,
        },
        "education": [
            {
                "institution": "University of Leeds",
                "degree": "BSc",
                "field_of_study": "Computer Science",
                "start_date": "2011",
                "end_date": "2015",
                "grade": None,
            }
        ],
        "experience": [
            {
                "company": "Acme Ltd",
                "position": "Senior Backend Engineer",
                "location": None,
                "start_date": "2019",
                "end_date": None,
                "is_current": True,
                "description": "Payments platform",
                "achievements": ["Led migration of payment services to Kubernetes"],
            },
            {
                "company": "Widgets Inc",
                "position": "Software Engineer",
                "start_date": "2015",
                "end_date": "2019",
                "is_current": False,
            },
        ],
        "skills": ["Python", "PostgreSQL", "Docker", "Kubernetes", "Leadership", "Jira"],
        "languages": [
            {"language": "English", "proficiency": "native"},
            {"language": "French", "proficiency": "B2"},
        ],
        "certifications": [],
        "internships": [],
        "metadata": {
            "total_experience_years": 9,
            "seniority_level": "senior",
            "industry": "FinTech",
            "keywords": ["backend", "payments"],
        },
        "photo_detected": False,
        "confidence_score": 0.87,
    }


@pytest.fixture
def extraction_json(extraction_payload: dict[str, Any]) -> str:
    """The extraction payload as the model would return it."""
    return json.dumps(extraction_payload)


@pytest.fixture
def openai_config() -> LLMConfiguration:
    """A stored configuration record for OpenAI."""
    return LLMConfiguration(
        id="cfg-openai",
        name="OpenAI production",
        provider=ProviderName.OPENAI,
        api_key="sk-config",
        model="gpt-4o",
        temperature=0.4,
        max_tokens=2048,
        is_active=True,
        priority=1,
    )
