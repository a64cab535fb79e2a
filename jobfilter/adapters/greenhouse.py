"""Greenhouse ATS adapter implementation."""

from typing import Any, Dict, List, Optional

from jobfilter.domain.models import RawPosting, WorkplaceType

from .base import BaseAdapter


class GreenhouseAdapter(BaseAdapter):
    """Adapter for Greenhouse job board responses.

    Response: JSON object with a 'jobs' array, as returned by
    https://boards-api.greenhouse.io/v1/boards/{board}/jobs?content=true

    Greenhouse ships the description entity-encoded (``&lt;p&gt;``); the
    content is passed through as HTML and decoded by strip_html. There is
    no explicit workplace flag, so the hint is UNKNOWN.
    """

    ADAPTER_NAME = "greenhouse"

    def project_posting(self, job: Dict[str, Any], company: Optional[str] = None) -> RawPosting:
        """Transform a Greenhouse job object to a RawPosting.

        Field mapping:
            id → external_id
            title → title
            location.name → location_text
            offices[].name / offices[].location → office_names
            metadata[] → metadata_fields
            content → content_html
            absolute_url → url
        """
        location = job.get("location")
        location_text = self._text(location.get("name")) if isinstance(location, dict) else self._text(location)

        return RawPosting(
            external_id=self._id(job),
            title=job.get("title"),
            location_text=location_text,
            office_names=self._office_names(job.get("offices")),
            metadata_fields=self._metadata(job.get("metadata")),
            content_html=job.get("content") or job.get("description"),
            workplace_type_hint=WorkplaceType.UNKNOWN,
            source=self.ADAPTER_NAME,
            company=company or job.get("company_name"),
            url=job.get("absolute_url"),
        )

    def _office_names(self, offices: Any) -> List[str]:
        names: List[str] = []
        for office in offices or []:
            if not isinstance(office, dict):
                continue
            for candidate in (office.get("name"), office.get("location")):
                if isinstance(candidate, dict):
                    candidate = candidate.get("name")
                text = self._text(candidate)
                if text and text not in names:
                    names.append(text)
        return names

    @staticmethod
    def _metadata(metadata: Any) -> List[Dict[str, Any]]:
        if not isinstance(metadata, list):
            return []
        return [
            {"name": item.get("name"), "value": item.get("value")}
            for item in metadata
            if isinstance(item, dict) and item.get("name")
        ]
