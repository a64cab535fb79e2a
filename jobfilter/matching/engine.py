"""Relevance classification engine.

This module wires the pieces together:
1. Prepares per-channel text from a RawPosting
2. Runs the metadata, location and content checkers
3. Resolves the final assessment
4. Optionally attaches the relevance score
"""

import logging
from typing import Iterable, List, Optional, Union

from jobfilter.config.models import KeywordConfig
from jobfilter.domain.models import Assessment, RawPosting, WorkplaceType
from jobfilter.logging import ComponentLoggerAdapter, get_logger, log_context
from jobfilter.normalization.models import PostingText
from jobfilter.scoring.scorer import score_posting

from .checkers import CONTENT, LOCATION, METADATA, check_content, check_location, check_metadata
from .models import ChannelResult, RelevanceResult
from .resolver import resolve_relevance

logger = get_logger(__name__, component="matching")


class RelevanceClassifier:
    """Classifies postings as relevant for LATAM remote candidates.

    Responsibilities:
    - Evaluate the three evidence channels independently
    - Reconcile them with the resolver
    - Score postings that were not rejected, when enabled and configured
    - Log every decision with the posting's identifiers

    The configuration is read-only; one classifier can be shared across
    threads.
    """

    def __init__(
        self,
        config: Optional[KeywordConfig] = None,
        enable_scoring: bool = False,
        logger_instance: Optional[Union[logging.Logger, ComponentLoggerAdapter]] = None,
    ):
        """Initialize RelevanceClassifier.

        Args:
            config: Keyword configuration; None runs with an empty configuration
                (every channel UNKNOWN, no score)
            enable_scoring: Attach a relevance score to non-rejected postings
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.config = config if config is not None else KeywordConfig()
        self.enable_scoring = enable_scoring
        self.logger = logger_instance or logger

    def classify(self, posting: RawPosting) -> RelevanceResult:
        """Classify a single posting.

        Args:
            posting: Source-agnostic posting

        Returns:
            RelevanceResult with channel details and optional score
        """
        with log_context(posting_id=posting.external_id, source=posting.source):
            result = self._evaluate(posting)

            if self.enable_scoring and result.assessment != Assessment.IRRELEVANT:
                result = result.with_score(score_posting(posting, self.config))

            self._log_decision(posting, result)
            return result

    def classify_many(self, postings: Iterable[RawPosting]) -> List[RelevanceResult]:
        """Classify postings in order.

        A posting that fails unexpectedly is logged and skipped so one bad
        record never aborts a batch.
        """
        results = []
        for index, posting in enumerate(postings):
            try:
                results.append(self.classify(posting))
            except Exception as e:
                self.logger.exception(
                    "Failed to classify posting",
                    extra={
                        "event": "matching.posting.failed",
                        "index": index,
                        "posting_id": getattr(posting, "external_id", None),
                        "error_type": type(e).__name__,
                    },
                )
        return results

    def _evaluate(self, posting: RawPosting) -> RelevanceResult:
        config = self.config
        hint = posting.workplace_type_hint

        if hint == WorkplaceType.ON_SITE:
            skipped = "skipped: workplace type is ON_SITE"
            return resolve_relevance(
                ChannelResult(METADATA, reason=skipped),
                ChannelResult(LOCATION, reason=skipped),
                ChannelResult(CONTENT, reason=skipped),
                hint,
            )

        text = PostingText.from_posting(posting)

        metadata = check_metadata(
            posting.metadata_fields,
            config.remote_metadata_fields,
            latam_terms=config.location_keywords.latam_terms(),
        )
        location = check_location(text.location_text, text.office_names, config.location_keywords)
        content = check_content(
            text.title,
            text.content_clean,
            config.content_keywords,
            location_keywords=config.location_keywords,
            proximity_window=config.classifier.proximity_window,
        )

        for channel in (metadata, location, content):
            self.logger.debug(
                f"Channel {channel.channel}: {channel.verdict.value}",
                extra={
                    "event": "matching.channel.evaluated",
                    "channel": channel.channel,
                    "verdict": channel.verdict.value,
                    "matched_keyword": channel.matched_keyword,
                },
            )

        return resolve_relevance(
            metadata,
            location,
            content,
            hint,
            explicit_remote_default=config.classifier.explicit_remote_default,
        )

    def _log_decision(self, posting: RawPosting, result: RelevanceResult) -> None:
        extra = {
            "event": "matching.posting.classified",
            "assessment": result.assessment.value,
            "hiring_region": result.hiring_region.value if result.hiring_region else None,
            "deciding_channel": result.deciding_channel,
            "score": result.score,
        }
        if result.is_relevant:
            self.logger.info(f"Posting relevant: {posting.title}", extra=extra)
        else:
            self.logger.debug(
                f"Posting {result.assessment.value.lower()}: {posting.title}",
                extra={**extra, "reason": result.reason},
            )
