"""CV extraction request building and strict response parsing."""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from cv_atlas.exceptions import ExtractionParseError
from cv_atlas.models.cv import CVExtractionResponse
from cv_atlas.models.llm import LLMConfiguration, LLMRequest
from cv_atlas.prompts.extraction import (
    CV_EXTRACTION_SYSTEM_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    SUMMARY_USER_PROMPT,
)

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^\s*```(?:json|JSON)?\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)

# Length of raw model output quoted back in parse errors
RAW_EXCERPT_CHARS = 300


def build_extraction_request(cv_text: str, config: LLMConfiguration | None = None) -> LLMRequest:
    """Build the extraction request. CV text is passed through verbatim."""
    system_prompt = (config.extraction_prompt if config else None) or CV_EXTRACTION_SYSTEM_PROMPT
    return LLMRequest(
        prompt=cv_text,
        system_prompt=system_prompt,
    )


def build_summary_request(
    extracted_data: Any, config: LLMConfiguration | None = None
) -> LLMRequest:
    """Build the summary request from already-extracted data."""
    if hasattr(extracted_data, "model_dump_json"):
        data_json = extracted_data.model_dump_json(indent=2)
    else:
        data_json = json.dumps(extracted_data, indent=2, ensure_ascii=False, default=str)

    system_prompt = (config.summary_prompt if config else None) or SUMMARY_SYSTEM_PROMPT
    return LLMRequest(
        prompt=SUMMARY_USER_PROMPT.format(extracted_data=data_json),
        system_prompt=system_prompt,
    )


def _strip_fences(text: str) -> str:
    match = _FENCE_RE.match(text)
    return match.group(1) if match else text


def _excerpt(text: str) -> str:
    return text if len(text) <= RAW_EXCERPT_CHARS else text[:RAW_EXCERPT_CHARS] + "..."


def parse_cv_extraction(text: str) -> CVExtractionResponse:
    """Parse model output strictly as a CVExtractionResponse.

    Args:
        text: Raw text returned by the vendor.

    Returns:
        CVExtractionResponse: Validated extraction with confidence clamped to [0, 1].

    Raises:
        ExtractionParseError: If the text holds no valid JSON object, carries the
            model's "not a CV" error marker, or does not match the schema.
    """
    candidate = _strip_fences(text.strip())

    # Tolerate prose around the object, but not a missing object
    start, end = candidate.find("{"), candidate.rfind("}")
    if start == -1 or end < start:
        raise ExtractionParseError(
            f"Model response contains no JSON object: {_excerpt(text)!r}", raw=text
        )

    try:
        payload = json.loads(candidate[start : end + 1])
    except json.JSONDecodeError as e:
        raise ExtractionParseError(f"Model response is not valid JSON: {e.msg}", raw=text) from e

    if "error" in payload and "personal_info" not in payload:
        reason = payload.get("reason") or payload["error"]
        raise ExtractionParseError(f"Model declined extraction: {reason}", raw=text)

    try:
        result = CVExtractionResponse.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()[:5]
        )
        raise ExtractionParseError(
            f"Model response does not match CV schema: {problems}", raw=text
        ) from e

    logger.debug(
        f"Parsed CV extraction: {len(result.experience)} roles, {len(result.skills)} skills, "
        f"confidence={result.confidence_score:.2f}"
    )
    return result
