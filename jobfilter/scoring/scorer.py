"""Numeric relevance scoring from weighted keywords and patterns.

The score is independent of the resolver. It sums the weights of every
configured keyword contained in the posting text and every pattern that
matches it. There is no clamping and the category order does not change
the result.
"""

import re
from functools import lru_cache
from typing import Any, Optional, Pattern, Union

from jobfilter.config.models import KeywordConfig, ScoringSignals
from jobfilter.domain.models import RawPosting
from jobfilter.logging import get_logger
from jobfilter.normalization.text import normalize_text, strip_html

logger = get_logger(__name__, component="scoring")

Score = Union[int, float]


@lru_cache(maxsize=1024)
def _compile_pattern(pattern: str) -> Optional[Pattern[str]]:
    """Compile a scoring pattern, returning None (logged once) when invalid."""
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        logger.warning(
            "Invalid scoring pattern skipped",
            extra={"event": "scoring.pattern.invalid", "pattern": pattern, "error": str(e)},
        )
        return None


def calculate_relevance_score(
    title: Any,
    description: Any,
    location: Any,
    signals: Optional[ScoringSignals],
) -> Optional[Score]:
    """Score a posting's text against the configured scoring signals.

    Args:
        title: Job title
        description: Plain-text description
        location: Location text
        signals: Scoring signals; None disables scoring

    Returns:
        Sum of matched weights, or None when no signals are configured
        (distinct from a legitimate score of 0)
    """
    if signals is None:
        return None

    text = normalize_text(" ".join(part for part in (title, description, location) if isinstance(part, str)))
    score: Score = 0

    for _, category in signals.categories():
        for keyword in category.keywords:
            term = normalize_text(keyword.term)
            if term and term in text:
                score += keyword.weight
        for entry in category.patterns:
            compiled = _compile_pattern(entry.pattern)
            if compiled is not None and compiled.search(text):
                score += entry.weight

    return score


def score_posting(posting: RawPosting, config: Optional[KeywordConfig]) -> Optional[Score]:
    """Score a RawPosting: description is the stripped content, location
    includes the office names."""
    signals = config.scoring_signals if config is not None else None
    location = " ".join([posting.location_text or "", *posting.office_names])
    return calculate_relevance_score(posting.title, strip_html(posting.content), location, signals)
