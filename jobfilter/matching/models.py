"""Data models for the classification engine.

This module defines the per-channel verdicts and the final relevance
result handed back to callers.
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from jobfilter.domain.models import Assessment, ChannelVerdict, HiringRegion


@dataclass
class ChannelResult:
    """Verdict of one evidence channel.

    Attributes:
        channel: Channel name ("metadata", "location" or "content")
        verdict: The channel's verdict
        reason: Human-readable explanation, for audit only
        matched_keyword: Keyword or value that produced the verdict
        snippet: Excerpt of the text around the match
    """

    channel: str
    verdict: ChannelVerdict = ChannelVerdict.UNKNOWN
    reason: str = ""
    matched_keyword: Optional[str] = None
    snippet: Optional[str] = None


@dataclass
class RelevanceResult:
    """Final classification of a posting.

    hiring_region is only set when the assessment is RELEVANT. The reason
    names the deciding channel and keyword; it is for audit and debugging
    and never feeds another decision.

    Attributes:
        assessment: RELEVANT, NEEDS_REVIEW or IRRELEVANT
        hiring_region: WORLDWIDE or LATAM for relevant postings
        reason: Human-readable explanation
        deciding_channel: Channel that decided, None for defaults
        metadata: Metadata channel result
        location: Location channel result
        content: Content channel result
        score: Relevance score when scoring is enabled and configured
    """

    assessment: Assessment
    hiring_region: Optional[HiringRegion]
    reason: str
    deciding_channel: Optional[str]
    metadata: ChannelResult
    location: ChannelResult
    content: ChannelResult
    score: Optional[Union[int, float]] = None

    @property
    def is_relevant(self) -> bool:
        return self.assessment == Assessment.RELEVANT

    @property
    def needs_review(self) -> bool:
        return self.assessment == Assessment.NEEDS_REVIEW

    def with_score(self, score: Optional[Union[int, float]]) -> "RelevanceResult":
        """Return a copy carrying the given score."""
        return replace(self, score=score)
