"""Tests for the CV extraction schema."""

from typing import Any

import pytest
from pydantic import ValidationError

from cv_atlas.models.cv import (
    CVExtractionResponse,
    CVMetadata,
    Experience,
    PersonalInfo,
    _coerce_to_list,
)


class TestCoerceToList:
    """Tests for the list coercion helper."""

    def test_none_becomes_empty(self) -> None:
        assert _coerce_to_list(None) == []

    def test_list_items_stringified(self) -> None:
        assert _coerce_to_list(["a", 1, None]) == ["a", "1"]

    def test_json_array_string(self) -> None:
        assert _coerce_to_list('["Python", "Go"]') == ["Python", "Go"]

    def test_comma_separated_string(self) -> None:
        assert _coerce_to_list("Python, Go , ,SQL") == ["Python", "Go", "SQL"]

    def test_single_value(self) -> None:
        assert _coerce_to_list("Python") == ["Python"]
        assert _coerce_to_list("") == []


class TestNestedModels:
    """Nested entries are lenient."""

    def test_personal_info_all_optional(self) -> None:
        info = PersonalInfo()
        assert info.full_name is None
        assert info.age is None

    def test_age_parsed_from_text(self) -> None:
        assert PersonalInfo(age="32 years").age == 32
        assert PersonalInfo(age="").age is None
        assert PersonalInfo(age="unknown").age is None

    def test_age_takes_first_number(self) -> None:
        """Only the leading number counts, never digits glued together."""
        assert PersonalInfo.model_validate({"age": "32 (born 1991)"}).age == 32
        assert PersonalInfo(age="about 40, 18 years experience").age == 40

    @pytest.mark.parametrize(("raw", "expected"), [(32.0, 32), (32.5, 32), (float("nan"), None)])
    def test_age_from_float(self, raw: float, expected: int | None) -> None:
        assert PersonalInfo(age=raw).age == expected

    def test_fractional_age_keeps_extraction(self, extraction_payload: dict[str, Any]) -> None:
        extraction_payload["personal_info"]["age"] = 32.5
        result = CVExtractionResponse.model_validate(extraction_payload)
        assert result.personal_info.age == 32

    def test_experience_ignores_unknown_keys(self) -> None:
        exp = Experience(company="Acme", position="Engineer", team_size=5)
        assert exp.company == "Acme"
        assert not hasattr(exp, "team_size")

    def test_experience_achievements_coerced(self) -> None:
        exp = Experience(company="Acme", achievements="Shipped v2, Cut costs")
        assert exp.achievements == ["Shipped v2", "Cut costs"]

    def test_metadata_keywords_default(self) -> None:
        assert CVMetadata().keywords == []


class TestCVExtractionResponse:
    """The top level is strict."""

    def test_valid_payload(self, extraction_payload: dict[str, Any]) -> None:
        result = CVExtractionResponse.model_validate(extraction_payload)

        assert result.personal_info.full_name == "Jane Smith"
        assert len(result.experience) == 2
        assert result.experience[0].is_current is True
        assert result.languages[1].proficiency == "B2"
        assert result.metadata.total_experience_years == 9
        assert result.confidence_score == pytest.approx(0.87)

    @pytest.mark.parametrize(
        "key",
        ["personal_info", "skills", "metadata", "confidence_score", "internships"],
    )
    def test_missing_top_level_key_rejected(
        self, extraction_payload: dict[str, Any], key: str
    ) -> None:
        del extraction_payload[key]
        with pytest.raises(ValidationError):
            CVExtractionResponse.model_validate(extraction_payload)

    def test_extra_top_level_key_rejected(self, extraction_payload: dict[str, Any]) -> None:
        extraction_payload["hobbies"] = ["chess"]
        with pytest.raises(ValidationError):
            CVExtractionResponse.model_validate(extraction_payload)

    def test_null_skills_rejected(self, extraction_payload: dict[str, Any]) -> None:
        """A null list is not silently replaced with an empty one."""
        extraction_payload["skills"] = None
        with pytest.raises(ValidationError):
            CVExtractionResponse.model_validate(extraction_payload)

    def test_skills_string_coerced(self, extraction_payload: dict[str, Any]) -> None:
        extraction_payload["skills"] = "Python, SQL"
        result = CVExtractionResponse.model_validate(extraction_payload)
        assert result.skills == ["Python", "SQL"]

    def test_json_encoded_nested_list(self, extraction_payload: dict[str, Any]) -> None:
        extraction_payload["languages"] = '[{"language": "German"}]'
        result = CVExtractionResponse.model_validate(extraction_payload)
        assert result.languages[0].language == "German"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(1.7, 1.0), (-0.3, 0.0), ("0.5", 0.5), (85, 1.0), (0, 0.0)],
    )
    def test_confidence_clamped(
        self, extraction_payload: dict[str, Any], raw: Any, expected: float
    ) -> None:
        extraction_payload["confidence_score"] = raw
        result = CVExtractionResponse.model_validate(extraction_payload)
        assert result.confidence_score == expected
        assert 0.0 <= result.confidence_score <= 1.0

    @pytest.mark.parametrize("raw", [None, "high", float("nan")])
    def test_confidence_unusable_rejected(
        self, extraction_payload: dict[str, Any], raw: Any
    ) -> None:
        extraction_payload["confidence_score"] = raw
        with pytest.raises(ValidationError):
            CVExtractionResponse.model_validate(extraction_payload)
