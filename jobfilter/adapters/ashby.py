"""Ashby ATS adapter implementation."""

from typing import Any, Dict, List, Optional

from jobfilter.domain.models import RawPosting, WorkplaceType
from jobfilter.logging import get_logger

from .base import BaseAdapter
from .exceptions import AdapterResponseError

logger = get_logger(__name__, component="adapter")


class AshbyAdapter(BaseAdapter):
    """Adapter for Ashby job board responses.

    Response: JSON object with a 'jobs' array, as returned by
    https://api.ashbyhq.com/posting-api/job-board/{board}. The GraphQL
    envelope (data.jobBoard.jobPostings) is accepted as well.

    Ashby carries no metadata fields, so the metadata channel stays empty.
    Unlisted postings (isListed false) are skipped.
    """

    ADAPTER_NAME = "ashby"

    def extract_postings(self, response: Any) -> List[Any]:
        """Accept the posting-API envelope, the GraphQL envelope or a bare list."""
        if isinstance(response, dict) and "jobs" not in response and "data" in response:
            data = response.get("data")
            job_board = data.get("jobBoard") if isinstance(data, dict) else None
            if not isinstance(job_board, dict):
                raise AdapterResponseError("Ashby response missing 'data.jobBoard' field")
            postings = job_board.get("jobPostings", [])
            if not isinstance(postings, list):
                raise AdapterResponseError(
                    f"Expected 'jobPostings' field to be array, got {type(postings).__name__}"
                )
            return postings
        return super().extract_postings(response)

    def _should_include(self, job: Dict[str, Any]) -> bool:
        if job.get("isListed") is False:
            logger.debug(
                "Skipping unlisted Ashby posting",
                extra={"event": "adapter.posting.unlisted", "adapter": self.ADAPTER_NAME, "job_id": job.get("id")},
            )
            return False
        return True

    def project_posting(self, job: Dict[str, Any], company: Optional[str] = None) -> RawPosting:
        """Transform an Ashby job object to a RawPosting.

        Field mapping:
            id → external_id
            title → title
            location (string or object) → location_text
            locations[] + secondaryLocations[] → office_names
            workplaceType, else isRemote → workplace_type_hint
            descriptionHtml → content_html
            descriptionPlain → content_plain
            jobUrl → url
        """
        office_names: List[str] = []
        for key in ("locations", "secondaryLocations"):
            for location in job.get(key) or []:
                for name in self._location_names(location):
                    if name not in office_names:
                        office_names.append(name)

        location_text = self._primary_location(job.get("location"))
        if location_text is None and job.get("locationName"):
            location_text = self._text(job.get("locationName"))

        return RawPosting(
            external_id=self._id(job),
            title=job.get("title"),
            location_text=location_text,
            office_names=office_names,
            content_html=job.get("descriptionHtml"),
            content_plain=job.get("descriptionPlain"),
            workplace_type_hint=self._workplace_type(job),
            source=self.ADAPTER_NAME,
            company=company,
            url=job.get("jobUrl") or job.get("externalLink"),
        )

    def _primary_location(self, location: Any) -> Optional[str]:
        if isinstance(location, dict):
            return self._text(location.get("name") or location.get("location"))
        return self._text(location)

    def _location_names(self, location: Any) -> List[str]:
        """Name of a location entry plus its address city/region/country."""
        if isinstance(location, str):
            text = self._text(location)
            return [text] if text else []
        if not isinstance(location, dict):
            return []

        names = []
        name = self._text(location.get("name") or location.get("location"))
        if name:
            names.append(name)

        address = location.get("address")
        if isinstance(address, dict):
            # Posting API nests the fields under postalAddress
            postal = address.get("postalAddress")
            if isinstance(postal, dict):
                address = postal
            parts = [
                address.get("city") or address.get("addressLocality"),
                address.get("state") or address.get("region") or address.get("addressRegion"),
                address.get("country") or address.get("addressCountry"),
            ]
            address_text = self._join([self._text(part) for part in parts], separator=", ")
            if address_text and address_text not in names:
                names.append(address_text)
        return names

    @staticmethod
    def _workplace_type(job: Dict[str, Any]) -> Optional[WorkplaceType]:
        workplace_type = job.get("workplaceType")
        if workplace_type:
            return WorkplaceType.from_raw(workplace_type)
        is_remote = job.get("isRemote")
        if is_remote is True:
            return WorkplaceType.REMOTE
        if is_remote is False:
            return WorkplaceType.ON_SITE
        return None
