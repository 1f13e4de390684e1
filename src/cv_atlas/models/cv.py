"""Structured CV extraction schema.

The top level is strict: every key must be present and unknown keys are
rejected. Nested entries are lenient because models routinely omit optional
details such as an end date or a location.
"""

import json
import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_to_list(v: Any) -> list[str]:
    """Coerce various inputs to list of strings for LLM output robustness."""
    if v is None:
        return []
    if isinstance(v, list):
        return [str(item) for item in v if item is not None]
    if isinstance(v, str):
        # Try to parse as JSON array first
        v = v.strip()
        if v.startswith("["):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(item) for item in parsed]
            except json.JSONDecodeError:
                pass
        # Treat as comma-separated or single item
        if "," in v:
            return [item.strip() for item in v.split(",") if item.strip()]
        return [v] if v else []
    return [str(v)]


def _coerce_to_model_list(v: Any) -> Any:
    """Coerce a JSON-encoded array into a list for nested model parsing."""
    if isinstance(v, str):
        stripped = v.strip()
        if stripped.startswith("["):
            try:
                parsed = json.loads(stripped)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
    return v


class _Entry(BaseModel):
    """Lenient base for nested entries."""

    model_config = ConfigDict(extra="ignore")


class PersonalInfo(_Entry):
    """Candidate identity and contact details."""

    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    age: int | None = None
    gender: str | None = None

    @field_validator("age", mode="before")
    @classmethod
    def coerce_age(cls, v: Any) -> Any:
        # Models answer "32", "32 years", "32 (born 1991)", 32.5 or "" for age
        if isinstance(v, float):
            return int(v) if math.isfinite(v) else None
        if isinstance(v, str):
            match = re.search(r"\d+", v)
            return int(match.group()) if match else None
        return v


class Education(_Entry):
    """Education entry."""

    institution: str | None = None
    degree: str | None = None
    field_of_study: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    grade: str | None = None


class Experience(_Entry):
    """Work experience entry."""

    company: str | None = None
    position: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool | None = None
    description: str | None = None
    achievements: list[str] = Field(default_factory=list)

    @field_validator("achievements", mode="before")
    @classmethod
    def coerce_to_list(cls, v: Any) -> list[str]:
        return _coerce_to_list(v)


class Language(_Entry):
    """Spoken language and proficiency."""

    language: str
    proficiency: str | None = None


class Certification(_Entry):
    """Certification or credential."""

    name: str
    issuer: str | None = None
    date: str | None = None


class Internship(_Entry):
    """Internship entry."""

    company: str | None = None
    position: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None


class CVMetadata(_Entry):
    """Derived profile attributes."""

    total_experience_years: float | None = None
    seniority_level: str | None = None
    industry: str | None = None
    keywords: list[str] = Field(default_factory=list)

    @field_validator("keywords", mode="before")
    @classmethod
    def coerce_to_list(cls, v: Any) -> list[str]:
        return _coerce_to_list(v)


class CVExtractionResponse(BaseModel):
    """Canonical extraction output every adapter must produce."""

    model_config = ConfigDict(extra="forbid")

    personal_info: PersonalInfo
    education: list[Education]
    experience: list[Experience]
    skills: list[str]
    languages: list[Language]
    certifications: list[Certification]
    internships: list[Internship]
    metadata: CVMetadata
    photo_detected: bool
    confidence_score: float = Field(ge=0, le=1)

    @field_validator("skills", mode="before")
    @classmethod
    def coerce_skills(cls, v: Any) -> Any:
        # A null or missing list is a contract violation, not an empty list
        if isinstance(v, str):
            return _coerce_to_list(v)
        return v

    @field_validator(
        "education", "experience", "languages", "certifications", "internships", mode="before"
    )
    @classmethod
    def coerce_model_lists(cls, v: Any) -> Any:
        return _coerce_to_model_list(v)

    @field_validator("confidence_score", mode="before")
    @classmethod
    def clamp_confidence(cls, v: Any) -> Any:
        try:
            score = float(v)
        except (TypeError, ValueError):
            return v
        if math.isnan(score):
            raise ValueError("confidence_score is not a number")
        return min(max(score, 0.0), 1.0)
