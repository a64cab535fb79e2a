"""Text normalization for classification and lookup keys.

This module provides:
- strip_html, collapse_whitespace, normalize_text: classification text
- normalize_for_search, normalize_company_name: dedup/lookup keys
- extract_snippet: audit excerpt around a keyword match
- PostingText: per-channel text prepared from a RawPosting
"""

from .models import PostingText
from .text import (
    collapse_whitespace,
    extract_snippet,
    normalize_company_name,
    normalize_for_search,
    normalize_text,
    strip_html,
)

__all__ = [
    "PostingText",
    "collapse_whitespace",
    "extract_snippet",
    "normalize_company_name",
    "normalize_for_search",
    "normalize_text",
    "strip_html",
]
