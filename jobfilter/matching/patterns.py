"""Boundary-aware keyword matching.

Naive substring checks both over-match ("us" inside "business") and
under-match multi-word phrases. Every keyword here is compiled into a
case-insensitive pattern anchored on word boundaries and keywords are tried
longest first, so "remote - berlin" wins over "remote".
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterable, Iterator, List, Optional, Pattern

# Characters that carry meaning in pattern syntax. Keywords containing any of
# them (e.g. "u.s.", "c++", "(us)") get the whitespace/punctuation boundary.
_SPECIAL_CHARS = frozenset(".*+?^${}()|[]\\/")


@dataclass(frozen=True)
class PatternMatch:
    """Outcome of a keyword search.

    Attributes:
        matched: Whether any keyword matched
        matched_keyword: The keyword as configured, None when nothing matched
        start: Offset of the match in the searched text (-1 when no match)
        end: End offset of the match (-1 when no match)
    """

    matched: bool = False
    matched_keyword: Optional[str] = None
    start: int = -1
    end: int = -1

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = PatternMatch()


def _needs_edge_boundary(keyword: str) -> bool:
    """True when a strict \\b boundary would misbehave for this keyword."""
    if any(ch in _SPECIAL_CHARS for ch in keyword):
        return True
    # \b next to a non-word character only matches beside a word character
    return not (keyword[0].isalnum() or keyword[0] == "_") or not (
        keyword[-1].isalnum() or keyword[-1] == "_"
    )


def keyword_pattern(keyword: str) -> str:
    """Build the (uncompiled) boundary-aware pattern source for a keyword.

    Internal whitespace in the keyword matches any whitespace run.
    """
    body = r"\s+".join(re.escape(part) for part in keyword.split())
    if _needs_edge_boundary(keyword):
        return rf"(?<!\w){body}(?!\w)"
    return rf"\b{body}\b"


@lru_cache(maxsize=4096)
def compile_keyword(keyword: str) -> Pattern[str]:
    """Compile and memoise the pattern for a keyword."""
    return re.compile(keyword_pattern(keyword), re.IGNORECASE)


def order_keywords(keywords: Optional[Iterable[Any]]) -> List[str]:
    """De-duplicate keywords and sort them longest first.

    Sorting is stable, so keywords of equal length keep their configured
    order. Blank and non-string entries are dropped.
    """
    if not keywords:
        return []
    unique: List[str] = []
    seen = set()
    for keyword in keywords:
        if not isinstance(keyword, str):
            continue
        stripped = keyword.strip()
        key = stripped.lower()
        if stripped and key not in seen:
            seen.add(key)
            unique.append(stripped)
    return sorted(unique, key=len, reverse=True)


def _find_first(text: Any, keywords: Optional[Iterable[Any]]) -> PatternMatch:
    if not isinstance(text, str) or not text:
        return NO_MATCH
    for keyword in order_keywords(keywords):
        match = compile_keyword(keyword).search(text)
        if match:
            return PatternMatch(True, keyword, match.start(), match.end())
    return NO_MATCH


def detect_restrictive_pattern(text: Any, keywords: Optional[Iterable[Any]]) -> PatternMatch:
    """Find the longest restrictive keyword present in text.

    Example:
        >>> detect_restrictive_pattern("USA only", ["us", "usa"]).matched_keyword
        'usa'
        >>> detect_restrictive_pattern("European team", ["us"]).matched
        False
    """
    return _find_first(text, keywords)


def contains_inclusive_signal(text: Any, keywords: Optional[Iterable[Any]]) -> PatternMatch:
    """Find the longest inclusive keyword present in text."""
    return _find_first(text, keywords)


def iter_keyword_matches(text: Any, keywords: Optional[Iterable[Any]]) -> Iterator[PatternMatch]:
    """Yield every occurrence of every keyword, longest keyword first.

    Occurrences of the same keyword are yielded in text order.
    """
    if not isinstance(text, str) or not text:
        return
    for keyword in order_keywords(keywords):
        for match in compile_keyword(keyword).finditer(text):
            yield PatternMatch(True, keyword, match.start(), match.end())
