"""Lever ATS adapter implementation."""

from typing import Any, Dict, List, Optional

from jobfilter.domain.models import RawPosting

from .base import BaseAdapter
from .exceptions import AdapterResponseError


class LeverAdapter(BaseAdapter):
    """Adapter for Lever posting responses.

    Response: JSON array of posting objects (not wrapped in an object), as
    returned by https://api.lever.co/v0/postings/{company}?mode=json
    """

    ADAPTER_NAME = "lever"

    def extract_postings(self, response: Any) -> List[Any]:
        """Lever returns an array; accept a 'postings' or 'jobs' envelope too."""
        if isinstance(response, dict) and "postings" in response:
            postings = response["postings"]
            if not isinstance(postings, list):
                raise AdapterResponseError(
                    f"Expected 'postings' field to be array, got {type(postings).__name__}"
                )
            return postings
        return super().extract_postings(response)

    def project_posting(self, job: Dict[str, Any], company: Optional[str] = None) -> RawPosting:
        """Transform a Lever posting object to a RawPosting.

        Field mapping:
            id → external_id
            text → title
            categories.location → location_text
            categories.allLocations → office_names
            workplaceType → workplace_type_hint
            description + lists[] + additional → content_html
            descriptionPlain + additionalPlain → content_plain
            hostedUrl → url
        """
        categories = job.get("categories") if isinstance(job.get("categories"), dict) else {}

        all_locations = categories.get("allLocations")
        if not isinstance(all_locations, list):
            all_locations = []

        return RawPosting(
            external_id=self._id(job),
            title=job.get("text"),
            location_text=self._text(categories.get("location")),
            office_names=all_locations,
            content_html=self._html_description(job),
            content_plain=self._join([job.get("descriptionPlain"), job.get("additionalPlain")]),
            workplace_type_hint=job.get("workplaceType"),
            source=self.ADAPTER_NAME,
            company=company,
            url=job.get("hostedUrl"),
        )

    def _html_description(self, job: Dict[str, Any]) -> Optional[str]:
        """Combine description, list sections and additional info as HTML."""
        parts = [job.get("description")]
        for section in job.get("lists") or []:
            if not isinstance(section, dict):
                continue
            heading = self._text(section.get("text"))
            content = section.get("content")
            if heading:
                parts.append(f"<h3>{heading}</h3>")
            if isinstance(content, str):
                parts.append(f"<ul>{content}</ul>")
        parts.append(job.get("additional"))
        return self._join(parts, separator="\n")
