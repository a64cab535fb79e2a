"""Relevance classification for LATAM remote job postings.

This module provides:
- Pattern matchers: detect_restrictive_pattern, contains_inclusive_signal
- Signal checkers: check_metadata, check_location, check_content
- resolve_relevance: combines channel verdicts into an assessment
- RelevanceClassifier: end-to-end classification of a RawPosting
- ChannelResult / RelevanceResult and build_result_dict for serialization
"""

from .checkers import check_content, check_location, check_metadata
from .engine import RelevanceClassifier
from .models import ChannelResult, RelevanceResult
from .patterns import (
    PatternMatch,
    contains_inclusive_signal,
    detect_restrictive_pattern,
    iter_keyword_matches,
)
from .resolver import resolve_relevance
from .utils import build_result_dict

__all__ = [
    "RelevanceClassifier",
    "ChannelResult",
    "RelevanceResult",
    "PatternMatch",
    "detect_restrictive_pattern",
    "contains_inclusive_signal",
    "iter_keyword_matches",
    "check_metadata",
    "check_location",
    "check_content",
    "resolve_relevance",
    "build_result_dict",
]
