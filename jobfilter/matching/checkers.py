"""Per-channel signal checkers.

Each checker reads one evidence channel of a posting and returns a
ChannelResult. Checkers never raise on malformed or missing input; absent
evidence is reported as UNKNOWN.
"""

import re
from functools import lru_cache
from typing import Any, Iterable, List, Mapping, Optional, Pattern, Tuple, Union

from jobfilter.config.models import (
    BooleanFieldRule,
    ContentKeywords,
    LocationKeywords,
    StringFieldRule,
)
from jobfilter.domain.models import ChannelVerdict, MetadataField
from jobfilter.logging import get_logger
from jobfilter.normalization.text import collapse_whitespace, extract_snippet, strip_html

from .models import ChannelResult
from .patterns import (
    PatternMatch,
    contains_inclusive_signal,
    detect_restrictive_pattern,
    iter_keyword_matches,
    keyword_pattern,
    order_keywords,
)

logger = get_logger(__name__, component="matching")

METADATA = "metadata"
LOCATION = "location"
CONTENT = "content"

# Metadata values denoting a LATAM-compatible region, on top of the
# configured LATAM location lists.
REGION_TERMS = ("latam", "latin america", "south america", "americas", "brazil", "brasil")

DEFAULT_PROXIMITY_WINDOW = 30

MetadataRuleType = Union[BooleanFieldRule, StringFieldRule]

_VERDICT_PRIORITY = {
    ChannelVerdict.REJECT: 3,
    ChannelVerdict.ACCEPT_LATAM: 2,
    ChannelVerdict.ACCEPT_GLOBAL: 1,
    ChannelVerdict.UNKNOWN: 0,
}


def _unknown(channel: str, reason: str) -> ChannelResult:
    return ChannelResult(channel=channel, verdict=ChannelVerdict.UNKNOWN, reason=reason)


def _field_values(field: Any) -> Tuple[str, List[str]]:
    """Return (lower-cased name, lower-cased non-empty values) for a metadata field."""
    if isinstance(field, MetadataField):
        name, values = field.name, field.values()
    elif isinstance(field, Mapping):
        name, raw = field.get("name"), field.get("value")
        values = raw if isinstance(raw, (list, tuple)) else [raw]
    else:
        return "", []
    name_key = name.strip().lower() if isinstance(name, str) else ""
    cleaned = []
    for value in values:
        if value is None or isinstance(value, (list, tuple, dict)):
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        text = collapse_whitespace(str(value)).lower()
        if text:
            cleaned.append(text)
    return name_key, cleaned


def check_metadata(
    metadata_fields: Optional[Iterable[Any]],
    rules: Optional[Mapping[str, MetadataRuleType]],
    latam_terms: Optional[Iterable[str]] = None,
) -> ChannelResult:
    """Evaluate structured metadata fields against the configured rules.

    Boolean rules compare each value with the positive/negative value;
    string rules phrase-match the disallowed, allowed and positive lists.
    A REJECT short-circuits the remaining fields. Otherwise the strongest
    verdict wins: ACCEPT_LATAM over ACCEPT_GLOBAL over UNKNOWN.

    Args:
        metadata_fields: Ordered MetadataField instances (or name/value mappings)
        rules: Lower-cased field name to rule
        latam_terms: Extra terms that make an accepted value LATAM

    Returns:
        ChannelResult for the metadata channel
    """
    if not metadata_fields or not rules:
        return _unknown(METADATA, "no metadata rules matched")

    region_terms = list(REGION_TERMS) + [t for t in (latam_terms or []) if isinstance(t, str)]
    best: Optional[ChannelResult] = None

    for field in metadata_fields:
        name, values = _field_values(field)
        rule = rules.get(name) if name else None
        if rule is None:
            continue

        for value in values:
            result = _apply_rule(name, value, rule, region_terms)
            if result is None:
                continue
            if result.verdict == ChannelVerdict.REJECT:
                return result
            if best is None or _VERDICT_PRIORITY[result.verdict] > _VERDICT_PRIORITY[best.verdict]:
                best = result

    return best or _unknown(METADATA, "no metadata value matched a rule")


def _apply_rule(
    name: str, value: str, rule: MetadataRuleType, region_terms: List[str]
) -> Optional[ChannelResult]:
    if isinstance(rule, BooleanFieldRule):
        if rule.negative_value is not None and value == rule.negative_value:
            return ChannelResult(
                METADATA, ChannelVerdict.REJECT,
                f"metadata field '{name}' is '{value}'", matched_keyword=value,
            )
        if value == rule.positive_value:
            return ChannelResult(
                METADATA, ChannelVerdict.ACCEPT_GLOBAL,
                f"metadata field '{name}' is '{value}'", matched_keyword=value,
            )
        return None

    disallowed = detect_restrictive_pattern(value, rule.disallowed_values)
    if disallowed:
        return ChannelResult(
            METADATA, ChannelVerdict.REJECT,
            f"metadata field '{name}' has disallowed value '{disallowed.matched_keyword}'",
            matched_keyword=disallowed.matched_keyword,
            snippet=value,
        )

    accepted = contains_inclusive_signal(value, rule.allowed_values)
    if not accepted:
        accepted = contains_inclusive_signal(value, rule.positive_values)
    if not accepted:
        return None

    term = accepted.matched_keyword
    if contains_inclusive_signal(term, region_terms):
        verdict = ChannelVerdict.ACCEPT_LATAM
    else:
        verdict = ChannelVerdict.ACCEPT_GLOBAL
    return ChannelResult(
        METADATA, verdict, f"metadata field '{name}' has accepted value '{term}'",
        matched_keyword=term, snippet=value,
    )


def _location_inclusive(text: str, keywords: LocationKeywords) -> Tuple[ChannelVerdict, PatternMatch]:
    """Run the inclusive location lists in priority order."""
    ordered = (
        (ChannelVerdict.ACCEPT_LATAM, keywords.strong_positive_latam),
        (ChannelVerdict.ACCEPT_GLOBAL, keywords.strong_positive_global),
        (ChannelVerdict.ACCEPT_LATAM, keywords.accept_exact_brazil_terms),
        (ChannelVerdict.ACCEPT_LATAM, keywords.accept_exact_latam_countries),
    )
    for verdict, terms in ordered:
        match = contains_inclusive_signal(text, terms)
        if match:
            return verdict, match
    return ChannelVerdict.UNKNOWN, PatternMatch()


def check_location(
    location_text: Optional[str],
    office_names: Optional[Iterable[str]],
    keywords: Optional[LocationKeywords],
) -> ChannelResult:
    """Evaluate the location string and office list.

    1. A restrictive location phrase rejects.
    2. Inclusive lists in order LATAM, global, Brazil, LATAM countries.
    3. An ambiguous term ("remote") without a resolving match, or an empty
       location with offices, defers to the offices: all restricted
       rejects, any LATAM office accepts LATAM, any global office accepts
       worldwide.
    4. Anything else is UNKNOWN; this channel never rejects without an
       explicit restrictive keyword.
    """
    text = collapse_whitespace(location_text)
    offices = [collapse_whitespace(name) for name in (office_names or []) if isinstance(name, str)]
    offices = [name for name in offices if name]
    combined = " | ".join(part for part in [text, *offices] if part)

    if keywords is None or (not text and not offices):
        return _unknown(LOCATION, "no location information")

    restricted = detect_restrictive_pattern(text, keywords.strong_negative_restriction)
    if restricted:
        return ChannelResult(
            LOCATION, ChannelVerdict.REJECT,
            f"location restricted by '{restricted.matched_keyword}'",
            matched_keyword=restricted.matched_keyword, snippet=combined,
        )

    verdict, match = _location_inclusive(text, keywords)
    if match:
        region = "LATAM" if verdict == ChannelVerdict.ACCEPT_LATAM else "worldwide"
        return ChannelResult(
            LOCATION, verdict, f"location '{text}' signals {region} via '{match.matched_keyword}'",
            matched_keyword=match.matched_keyword, snippet=combined,
        )

    ambiguous = contains_inclusive_signal(text, keywords.ambiguous)
    if (ambiguous or not text) and offices:
        return _check_offices(offices, combined, keywords, ambiguous.matched_keyword)

    if ambiguous:
        return _unknown(LOCATION, f"ambiguous location '{ambiguous.matched_keyword}' with no offices")
    return ChannelResult(LOCATION, reason=f"no location keyword matched in '{combined}'", snippet=combined)


def _check_offices(
    offices: List[str], combined: str, keywords: LocationKeywords, ambiguous_term: Optional[str]
) -> ChannelResult:
    restrictions = [detect_restrictive_pattern(name, keywords.strong_negative_restriction) for name in offices]
    if all(restrictions):
        return ChannelResult(
            LOCATION, ChannelVerdict.REJECT,
            f"all offices restricted ('{restrictions[0].matched_keyword}')",
            matched_keyword=restrictions[0].matched_keyword, snippet=combined,
        )

    latam_terms = keywords.latam_terms()
    for name in offices:
        match = contains_inclusive_signal(name, latam_terms)
        if match:
            return ChannelResult(
                LOCATION, ChannelVerdict.ACCEPT_LATAM,
                f"office '{name}' signals LATAM via '{match.matched_keyword}'",
                matched_keyword=match.matched_keyword, snippet=combined,
            )

    for name in offices:
        match = contains_inclusive_signal(name, keywords.strong_positive_global)
        if match:
            return ChannelResult(
                LOCATION, ChannelVerdict.ACCEPT_GLOBAL,
                f"office '{name}' signals worldwide via '{match.matched_keyword}'",
                matched_keyword=match.matched_keyword, snippet=combined,
            )

    if ambiguous_term:
        return ChannelResult(
            LOCATION, reason=f"ambiguous location '{ambiguous_term}', offices inconclusive in '{combined}'",
            snippet=combined,
        )
    return ChannelResult(LOCATION, reason=f"offices inconclusive in '{combined}'", snippet=combined)


@lru_cache(maxsize=4096)
def _restriction_phrase_pattern(phrase: str, location_term: str) -> Pattern[str]:
    """Pattern for '<phrase> [up to 5 space/punct] (the) <location>'."""
    phrase_body = r"\s+".join(re.escape(part) for part in phrase.split())
    location = keyword_pattern(location_term)
    return re.compile(
        rf"(?<!\w){phrase_body}[\s\W]{{0,5}}(?:the\s+)?{location}",
        re.IGNORECASE,
    )


def _iter_restriction_phrases(
    text: str, phrases: List[str], location_terms: List[str]
) -> List[PatternMatch]:
    matches = []
    for phrase in order_keywords(phrases):
        for term in order_keywords(location_terms):
            for m in _restriction_phrase_pattern(phrase.lower(), term.lower()).finditer(text):
                matches.append(PatternMatch(True, f"{phrase} {term}", m.start(), m.end()))
    return matches


def check_content(
    title: Optional[str],
    content: Optional[str],
    keywords: Optional[ContentKeywords],
    location_keywords: Optional[LocationKeywords] = None,
    proximity_window: int = DEFAULT_PROXIMITY_WINDOW,
) -> ChannelResult:
    """Evaluate the title and description.

    Restrictive sources, each checked occurrence by occurrence:
    region and timezone restrictions over the whole text, restrictive
    location phrases over the title, and restriction phrases ("must be
    located in") followed by a restrictive location. An occurrence followed
    within `proximity_window` characters by a LATAM term ("US or LatAm")
    is overridden. A timezone-only restriction is deferred when the text
    carries any positive term. The first remaining occurrence rejects.

    Otherwise inclusive lists in order LATAM, global, Brazil.

    Args:
        title: Job title
        content: Description as HTML or plain text
        keywords: Content keyword lists
        location_keywords: Location lists used for title and phrase restrictions
        proximity_window: Characters after a restriction searched for an override
    """
    title_text = collapse_whitespace(title)
    body = strip_html(content)
    text = f"{title_text} {body}".strip()

    if keywords is None or not text:
        return _unknown(CONTENT, "no content to evaluate")

    latam_terms = keywords.latam_terms()
    positive_terms = keywords.strong_positive_global + latam_terms
    timezone_only = set(keywords.strong_negative_timezone) - set(keywords.strong_negative_region)

    candidates: List[Tuple[PatternMatch, str]] = [
        (m, "timezone" if m.matched_keyword.lower() in timezone_only else "region")
        for m in iter_keyword_matches(text, keywords.negative_terms())
    ]
    if location_keywords is not None:
        # Title is a prefix of text, so offsets carry over
        candidates.extend(
            (m, "title")
            for m in iter_keyword_matches(title_text, location_keywords.strong_negative_restriction)
        )
        candidates.extend(
            (m, "phrase")
            for m in _iter_restriction_phrases(
                text, keywords.restriction_phrases, location_keywords.strong_negative_restriction
            )
        )

    has_positive: Optional[bool] = None
    for match, source in candidates:
        window = text[match.end:match.end + max(proximity_window, 0)]
        override = contains_inclusive_signal(window, latam_terms)
        if override:
            logger.debug(
                "Restriction overridden by nearby LATAM term",
                extra={
                    "event": "matching.content.override",
                    "restriction": match.matched_keyword,
                    "override": override.matched_keyword,
                },
            )
            continue

        if source == "timezone":
            if has_positive is None:
                has_positive = bool(contains_inclusive_signal(text, positive_terms))
            if has_positive:
                continue

        return ChannelResult(
            CONTENT, ChannelVerdict.REJECT,
            f"content restricted by '{match.matched_keyword}' ({source})",
            matched_keyword=match.matched_keyword,
            snippet=extract_snippet(text, match.start, match.end),
        )

    ordered = (
        (ChannelVerdict.ACCEPT_LATAM, keywords.strong_positive_latam),
        (ChannelVerdict.ACCEPT_GLOBAL, keywords.strong_positive_global),
        (ChannelVerdict.ACCEPT_LATAM, keywords.accept_exact_brazil_terms),
    )
    for verdict, terms in ordered:
        match = contains_inclusive_signal(text, terms)
        if match:
            region = "LATAM" if verdict == ChannelVerdict.ACCEPT_LATAM else "worldwide"
            return ChannelResult(
                CONTENT, verdict, f"content signals {region} via '{match.matched_keyword}'",
                matched_keyword=match.matched_keyword,
                snippet=extract_snippet(text, match.start, match.end),
            )

    return _unknown(CONTENT, "no content keyword matched")


def strongest_verdict(results: Iterable[ChannelResult]) -> ChannelVerdict:
    """Highest-priority verdict among results (REJECT > LATAM > GLOBAL > UNKNOWN)."""
    best = ChannelVerdict.UNKNOWN
    for result in results:
        if _VERDICT_PRIORITY[result.verdict] > _VERDICT_PRIORITY[best]:
            best = result.verdict
    return best

