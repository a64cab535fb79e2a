"""Factory function for instantiating ATS adapters."""

from typing import Any, List, Optional

from jobfilter.domain.models import RawPosting
from jobfilter.logging import get_logger

from .ashby import AshbyAdapter
from .base import BaseAdapter
from .exceptions import AdapterConfigurationError
from .greenhouse import GreenhouseAdapter
from .lever import LeverAdapter

logger = get_logger(__name__, component="adapter")

ADAPTER_MAP = {
    "greenhouse": GreenhouseAdapter,
    "lever": LeverAdapter,
    "ashby": AshbyAdapter,
}

SUPPORTED_SOURCES = tuple(sorted(ADAPTER_MAP))


def get_adapter(source_type: str) -> BaseAdapter:
    """Factory function to instantiate the adapter for an ATS type.

    Args:
        source_type: ATS name (greenhouse, lever, ashby), case-insensitive

    Returns:
        Adapter instance

    Raises:
        AdapterConfigurationError: If the ATS type is not supported

    Example:
        >>> adapter = get_adapter("greenhouse")
        >>> postings = adapter.project_many(response_json, company="Acme")
    """
    ats_type = source_type.strip().lower() if isinstance(source_type, str) else str(source_type)
    adapter_class = ADAPTER_MAP.get(ats_type)

    if not adapter_class:
        raise AdapterConfigurationError(
            f"Unknown ATS type: {source_type}. Supported types: {', '.join(SUPPORTED_SOURCES)}"
        )

    logger.debug(
        "Creating adapter instance",
        extra={"event": "adapter.created", "ats_type": ats_type, "adapter_class": adapter_class.__name__},
    )
    return adapter_class()


def extract_postings(source_type: str, response: Any) -> List[Any]:
    """Pull the raw posting objects out of a parsed response for an ATS type."""
    return get_adapter(source_type).extract_postings(response)


def project_many(source_type: str, response: Any, company: Optional[str] = None) -> List[RawPosting]:
    """Project a parsed ATS response into RawPostings, skipping malformed entries."""
    return get_adapter(source_type).project_many(response, company=company)
