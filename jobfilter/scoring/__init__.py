"""Weighted keyword/pattern relevance scoring."""

from .scorer import calculate_relevance_score, score_posting

__all__ = ["calculate_relevance_score", "score_posting"]
