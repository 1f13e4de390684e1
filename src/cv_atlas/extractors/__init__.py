"""Extraction request building and response parsing."""

from cv_atlas.extractors.cv_extractor import (
    build_extraction_request,
    build_summary_request,
    parse_cv_extraction,
)

__all__ = ["build_extraction_request", "build_summary_request", "parse_cv_extraction"]
