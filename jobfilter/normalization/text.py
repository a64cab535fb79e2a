"""Text normalization utilities.

Two families live here:
- strip_html / collapse_whitespace / normalize_text prepare text for the
  classification channels and the scorer;
- normalize_for_search / normalize_company_name build lookup keys and are
  never used for classification.
"""

import html
import re
from typing import Any

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
# Tag-shaped spans only; comparison signs in prose ("< 100k", "&lt;10 people") survive
_TAG_RE = re.compile(r"</?[A-Za-z][A-Za-z0-9:-]*(?:\s[^<>]*)?/?>|<![A-Za-z][^<>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_SEARCH_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")

COMPANY_SUFFIXES = frozenset({"inc", "llc", "ltd", "corp", "corporation", "sa", "ltda"})


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def collapse_whitespace(value: Any) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return _WHITESPACE_RE.sub(" ", _as_text(value)).strip()


def strip_html(html_text: Any) -> str:
    """Convert HTML (possibly entity-encoded) to plain text.

    Greenhouse ships markup entity-encoded (``&lt;p&gt;``), so entities are
    decoded before tags are removed, and once more afterwards for entities
    that were double-encoded. Only tag-shaped spans are removed, so a
    literal "<" or ">" in prose (decoded or not) keeps the text around it.

    Args:
        html_text: HTML string; None or non-strings yield ""

    Returns:
        Plain text with tags removed and whitespace collapsed

    Example:
        >>> strip_html("&lt;p&gt;Remote &amp;amp; async&lt;/p&gt;")
        'Remote & async'
    """
    text = _as_text(html_text)
    if not text:
        return ""

    text = html.unescape(text)
    text = _SCRIPT_STYLE_RE.sub(" ", text)
    text = _COMMENT_RE.sub(" ", text)
    # Replace tags with a space so adjacent blocks don't glue words together
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text)

    return collapse_whitespace(text)


def normalize_text(value: Any) -> str:
    """Lower-case and collapse whitespace."""
    return collapse_whitespace(value).lower()


def normalize_for_search(value: Any) -> str:
    """Normalize text into a search/deduplication key.

    Lower-cases, removes the punctuation ``.,/#!$%^&*;:{}=-_`~()``,
    collapses whitespace and trims.

    Example:
        >>> normalize_for_search("  Acme, Inc. (Brazil)  ")
        'acme inc brazil'
    """
    normalized = _as_text(value).lower()
    normalized = _SEARCH_PUNCTUATION_RE.sub("", normalized)
    return collapse_whitespace(normalized)


def normalize_company_name(name: Any) -> str:
    """Normalize a company name for matching, dropping legal suffixes.

    Example:
        >>> normalize_company_name("Nubank Ltda.")
        'nubank'
    """
    words = normalize_for_search(name).split()
    while words and words[-1] in COMPANY_SUFFIXES:
        words.pop()
    return " ".join(words)


def extract_snippet(text: Any, start: int, end: int, context_chars: int = 60) -> str:
    """Extract the text around a match, with ellipses where truncated.

    Args:
        text: Text the match was found in
        start: Match start offset
        end: Match end offset
        context_chars: Characters of context before and after the match

    Returns:
        Snippet with whitespace collapsed; "" for empty text
    """
    source = _as_text(text)
    if not source:
        return ""

    start = max(0, min(start, len(source)))
    end = max(start, min(end, len(source)))
    snippet_start = max(0, start - context_chars)
    snippet_end = min(len(source), end + context_chars)

    snippet = collapse_whitespace(source[snippet_start:snippet_end])
    if snippet_start > 0:
        snippet = "..." + snippet
    if snippet_end < len(source):
        snippet = snippet + "..."
    return snippet
