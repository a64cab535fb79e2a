"""Utility functions for preparing classification results for downstream consumers."""

from typing import Any, Dict, Optional

from jobfilter.domain.models import RawPosting

from .models import ChannelResult, RelevanceResult


def build_channel_dict(channel: ChannelResult) -> Dict[str, Any]:
    """Serialize a channel result."""
    return {
        "verdict": channel.verdict.value,
        "reason": channel.reason,
        "matched_keyword": channel.matched_keyword,
        "snippet": channel.snippet,
    }


def build_result_dict(result: RelevanceResult, posting: Optional[RawPosting] = None) -> Dict[str, Any]:
    """Build a JSON-serializable dict for a classification result.

    Useful for audit logs and the command line output.

    Args:
        result: RelevanceResult to serialize
        posting: Optional posting whose identifiers are included

    Returns:
        Dict with:
        - assessment / hiring_region / reason / deciding_channel
        - channels: per-channel verdict, reason, keyword and snippet
        - score: relevance score, or None when scoring is off
        - posting identifiers (external_id, source, company, title, url) if given
    """
    payload: Dict[str, Any] = {}
    if posting is not None:
        payload.update(
            {
                "external_id": posting.external_id,
                "source": posting.source,
                "company": posting.company,
                "title": posting.title,
                "url": posting.url,
            }
        )

    payload.update(
        {
            "assessment": result.assessment.value,
            "hiring_region": result.hiring_region.value if result.hiring_region else None,
            "reason": result.reason,
            "deciding_channel": result.deciding_channel,
            "channels": {
                "metadata": build_channel_dict(result.metadata),
                "location": build_channel_dict(result.location),
                "content": build_channel_dict(result.content),
            },
            "score": result.score,
        }
    )
    return payload
