"""Base adapter class with shared functionality for all ATS adapters.

Adapters are pure projections: they take an already-parsed ATS response
(or a single posting object) and map it onto RawPosting. Fetching is the
caller's business.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from jobfilter.domain.models import RawPosting
from jobfilter.logging import get_logger

from .exceptions import AdapterResponseError

logger = get_logger(__name__, component="adapter")


class BaseAdapter(ABC):
    """Base class for all ATS adapters.

    Subclasses implement project_posting() for their schema and may
    override extract_postings() when the response envelope differs.
    """

    ADAPTER_NAME = "base"

    @abstractmethod
    def project_posting(self, job: Dict[str, Any], company: Optional[str] = None) -> RawPosting:
        """Map one ATS posting object onto a RawPosting.

        Args:
            job: Posting object from the ATS response
            company: Company name to attach, when known

        Returns:
            RawPosting

        Raises:
            KeyError, ValueError, TypeError: If the object cannot be projected
        """
        pass

    def extract_postings(self, response: Any) -> List[Any]:
        """Pull the list of posting objects out of a parsed response.

        Accepts a bare list or an object with a 'jobs' array.

        Raises:
            AdapterResponseError: If no posting list can be found
        """
        if isinstance(response, list):
            return response

        if isinstance(response, dict):
            jobs = response.get("jobs")
            if jobs is None:
                raise AdapterResponseError(
                    f"{self.ADAPTER_NAME} response has no 'jobs' field"
                )
            if not isinstance(jobs, list):
                raise AdapterResponseError(
                    f"Expected 'jobs' field to be array, got {type(jobs).__name__}"
                )
            return jobs

        raise AdapterResponseError(
            f"Expected JSON array or object, got {type(response).__name__}"
        )

    def project_many(self, response: Any, company: Optional[str] = None) -> List[RawPosting]:
        """Project every posting in a response, skipping malformed entries.

        Args:
            response: Parsed ATS response (list or envelope object)
            company: Company name to attach to every posting

        Returns:
            RawPosting list in response order

        Raises:
            AdapterResponseError: If the response shape is unusable
        """
        jobs = self.extract_postings(response)
        postings = []

        for index, job in enumerate(jobs):
            if not isinstance(job, dict):
                logger.warning(
                    f"Skipping non-object {self.ADAPTER_NAME} posting",
                    extra={"event": "adapter.posting.skipped", "adapter": self.ADAPTER_NAME, "index": index},
                )
                continue
            if not self._should_include(job):
                continue
            try:
                postings.append(self.project_posting(job, company=company))
            except (KeyError, ValueError, TypeError, AttributeError, ValidationError) as e:
                logger.warning(
                    f"Failed to transform {self.ADAPTER_NAME} posting",
                    extra={
                        "event": "adapter.posting.failed",
                        "adapter": self.ADAPTER_NAME,
                        "index": index,
                        "job_id": job.get("id"),
                        "error": str(e),
                    },
                )

        logger.info(
            f"Projected {self.ADAPTER_NAME} postings",
            extra={
                "event": "adapter.postings.projected",
                "adapter": self.ADAPTER_NAME,
                "count": len(postings),
                "total": len(jobs),
            },
        )
        return postings

    def _should_include(self, job: Dict[str, Any]) -> bool:
        """Hook for sources that mark postings as hidden."""
        return True

    @staticmethod
    def _text(value: Any) -> Optional[str]:
        """Return a stripped string, or None for blanks and non-scalars."""
        if value is None or isinstance(value, (dict, list, tuple)):
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def _join(parts: Iterable[Optional[str]], separator: str = "\n\n") -> Optional[str]:
        """Join the non-empty parts, or None when all are empty."""
        kept = [part.strip() for part in parts if isinstance(part, str) and part.strip()]
        return separator.join(kept) if kept else None

    @staticmethod
    def _id(job: Dict[str, Any]) -> Optional[str]:
        job_id = job.get("id")
        return str(job_id) if job_id is not None else None
