"""CV processing pipeline.

Takes text that an upstream stage already pulled out of a document, runs
extraction and summary generation through the orchestrator, and turns the
outcome into a COMPLETED or FAILED record. Orchestration errors are caught
here and surfaced as the record's error message so an admin can triage them.
"""

import logging
import re
from enum import Enum

from pydantic import BaseModel, Field

from cv_atlas.exceptions import LLMError
from cv_atlas.llm.orchestrator import LLMOrchestrator
from cv_atlas.models.cv import CVExtractionResponse
from cv_atlas.models.llm import LLMConfiguration

logger = logging.getLogger(__name__)

EXTRACTION_VERSION = "1.0.0"
MIN_TEXT_LENGTH = 50

TECHNICAL_PATTERNS = [
    r"javascript|typescript|python|java|c\+\+|ruby|\bgo\b|rust|php|swift|kotlin",
    r"react|angular|vue|node|express|django|flask|spring|rails",
    r"sql|mongodb|postgresql|mysql|redis|elasticsearch",
    r"aws|azure|gcp|docker|kubernetes|terraform",
    r"html|css|sass|less|tailwind|bootstrap",
    r"\bgit\b|linux|unix|bash|shell",
    r"\bapi\b|rest|graphql|grpc|websocket",
    r"machine learning|deep learning|nlp|\bai\b|data science",
]

SOFT_PATTERNS = [
    r"communication|leadership|teamwork|collaboration",
    r"problem.?solving|critical thinking|analytical",
    r"time management|organization|planning",
    r"adaptability|flexibility|creativity",
    r"presentation|public speaking|negotiation",
]

TOOL_PATTERNS = [
    r"jira|confluence|trello|asana|notion",
    r"figma|sketch|adobe|photoshop|illustrator",
    r"vs code|intellij|eclipse|vim|emacs",
    r"slack|teams|zoom|discord",
    r"excel|word|powerpoint|google sheets",
]


class ProcessingStatus(str, Enum):
    """Final state of a processed CV."""

    COMPLETED = "completed"
    FAILED = "failed"


class SkillCategories(BaseModel):
    """Skills split by kind. A skill may appear in several categories."""

    technical: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)


class ProcessingResult(BaseModel):
    """Outcome of processing one CV."""

    status: ProcessingStatus
    extraction: CVExtractionResponse | None = None
    summary: str | None = None
    provider: str | None = None
    model: str | None = None
    confidence_score: float | None = None
    skill_categories: SkillCategories | None = None
    extraction_version: str = EXTRACTION_VERSION
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == ProcessingStatus.COMPLETED


def _matches(skill: str, patterns: list[str]) -> bool:
    return any(re.search(pattern, skill, re.IGNORECASE) for pattern in patterns)


def classify_skills(skills: list[str]) -> SkillCategories:
    """Heuristically split skills into technical, soft and tool categories."""
    return SkillCategories(
        technical=[s for s in skills if _matches(s, TECHNICAL_PATTERNS)],
        soft=[s for s in skills if _matches(s, SOFT_PATTERNS)],
        tools=[s for s in skills if _matches(s, TOOL_PATTERNS)],
    )


def clean_text(text: str) -> str:
    """Normalize whitespace left behind by document text extraction."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t\f\v]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


class CVProcessor:
    """Run extraction and summary generation for CV text."""

    def __init__(self, orchestrator: LLMOrchestrator, generate_summary: bool = True):
        self.orchestrator = orchestrator
        self.generate_summary = generate_summary

    async def process(
        self,
        cv_text: str,
        config: LLMConfiguration | None = None,
        photo_detected: bool | None = None,
    ) -> ProcessingResult:
        """Process CV text into a stored-ready result.

        Args:
            cv_text: Text extracted from the CV document.
            config: Optional stored LLM configuration.
            photo_detected: Result of the upstream photo detector. When given it
                overrides the model's guess.

        Returns:
            ProcessingResult: COMPLETED with extraction data, or FAILED with the
                specific error message.
        """
        cleaned = clean_text(cv_text)
        if len(cleaned) < MIN_TEXT_LENGTH:
            logger.warning(f"CV text too short to process ({len(cleaned)} chars)")
            return ProcessingResult(
                status=ProcessingStatus.FAILED,
                error="Insufficient text extracted from document",
            )

        try:
            extraction = await self.orchestrator.extract_cv_data(cleaned, config)
            cv_data = extraction.result
            if photo_detected is not None:
                cv_data = cv_data.model_copy(update={"photo_detected": photo_detected})

            summary = None
            if self.generate_summary:
                summary = await self.orchestrator.generate_summary(cv_data, config)
                logger.info(f"AI summary generated: {len(summary)} chars")
        except LLMError as e:
            logger.error(f"CV processing failed: {e}")
            return ProcessingResult(status=ProcessingStatus.FAILED, error=str(e))

        logger.info(
            f"CV processing completed with {extraction.provider}/{extraction.model} "
            f"(confidence {cv_data.confidence_score:.2f})"
        )
        return ProcessingResult(
            status=ProcessingStatus.COMPLETED,
            extraction=cv_data,
            summary=summary,
            provider=extraction.provider,
            model=extraction.model,
            confidence_score=cv_data.confidence_score,
            skill_categories=classify_skills(cv_data.skills),
        )
