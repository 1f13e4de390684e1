"""CV processing pipeline."""

from cv_atlas.pipeline.processor import (
    CVProcessor,
    ProcessingResult,
    ProcessingStatus,
    SkillCategories,
    classify_skills,
    clean_text,
)

__all__ = [
    "CVProcessor",
    "ProcessingResult",
    "ProcessingStatus",
    "SkillCategories",
    "classify_skills",
    "clean_text",
]
