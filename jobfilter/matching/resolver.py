"""Relevance resolver: reconciles the three channel verdicts.

Decision order:
0. ON_SITE workplace hint is IRRELEVANT regardless of channels.
1. Any REJECT is IRRELEVANT.
2. Any ACCEPT_LATAM is RELEVANT/LATAM.
3. Any ACCEPT_GLOBAL is RELEVANT/WORLDWIDE.
4. All UNKNOWN: a REMOTE hint defaults to RELEVANT/WORLDWIDE (or
   NEEDS_REVIEW when configured); HYBRID, UNKNOWN or no hint is
   NEEDS_REVIEW.
"""

from typing import Optional

from jobfilter.domain.models import Assessment, ChannelVerdict, HiringRegion, WorkplaceType

from .checkers import strongest_verdict
from .models import ChannelResult, RelevanceResult

EXPLICIT_REMOTE_RELEVANT = "relevant"
EXPLICIT_REMOTE_NEEDS_REVIEW = "needs_review"

_REGION_BY_VERDICT = {
    ChannelVerdict.ACCEPT_LATAM: HiringRegion.LATAM,
    ChannelVerdict.ACCEPT_GLOBAL: HiringRegion.WORLDWIDE,
}


def _describe(result: ChannelResult) -> str:
    if result.matched_keyword:
        return f"{result.channel} {result.verdict.value} via '{result.matched_keyword}': {result.reason}"
    return f"{result.channel} {result.verdict.value}: {result.reason}"


def resolve_relevance(
    metadata: ChannelResult,
    location: ChannelResult,
    content: ChannelResult,
    workplace_type_hint: Optional[WorkplaceType] = None,
    explicit_remote_default: str = EXPLICIT_REMOTE_RELEVANT,
) -> RelevanceResult:
    """Combine channel results into the final assessment.

    Channels are reported in the order metadata, location, content; the
    first channel carrying the winning verdict is the deciding channel.

    Args:
        metadata: Metadata channel result
        location: Location channel result
        content: Content channel result
        workplace_type_hint: Explicit workplace flag from the ATS
        explicit_remote_default: "relevant" or "needs_review" for REMOTE
            postings with no evidence either way

    Returns:
        RelevanceResult
    """
    channels = (metadata, location, content)

    def build(assessment, region, reason, deciding=None):
        return RelevanceResult(
            assessment=assessment,
            hiring_region=region,
            reason=reason,
            deciding_channel=deciding,
            metadata=metadata,
            location=location,
            content=content,
        )

    hint = WorkplaceType.from_raw(workplace_type_hint) if workplace_type_hint is not None else None

    if hint == WorkplaceType.ON_SITE:
        return build(Assessment.IRRELEVANT, None, "workplace type is ON_SITE")

    winner = strongest_verdict(channels)
    if winner == ChannelVerdict.REJECT:
        deciding = next(result for result in channels if result.verdict == winner)
        return build(Assessment.IRRELEVANT, None, _describe(deciding), deciding.channel)

    if winner in _REGION_BY_VERDICT:
        deciding = next(result for result in channels if result.verdict == winner)
        return build(Assessment.RELEVANT, _REGION_BY_VERDICT[winner], _describe(deciding), deciding.channel)

    if hint == WorkplaceType.REMOTE:
        if explicit_remote_default == EXPLICIT_REMOTE_NEEDS_REVIEW:
            return build(Assessment.NEEDS_REVIEW, None, "workplace type is REMOTE but no region signal found")
        return build(
            Assessment.RELEVANT, HiringRegion.WORLDWIDE,
            "workplace type is REMOTE and no restriction found",
        )

    hint_label = hint.value if hint is not None else "absent"
    return build(Assessment.NEEDS_REVIEW, None, f"no decisive signal (workplace type {hint_label})")
