"""Prepared text variants for the classification channels."""

from dataclasses import dataclass, field
from typing import List

from jobfilter.domain.models import RawPosting

from .text import collapse_whitespace, strip_html


@dataclass(frozen=True)
class PostingText:
    """Per-channel text prepared from a RawPosting.

    Attributes:
        title: Job title, whitespace collapsed
        location_text: Location string (or empty)
        office_names: Office names, whitespace collapsed
        content_clean: Description with HTML stripped
    """

    title: str
    location_text: str
    office_names: List[str] = field(default_factory=list)
    content_clean: str = ""

    @classmethod
    def from_posting(cls, posting: RawPosting) -> "PostingText":
        """Prepare the text of a posting for classification.

        HTML content is preferred over plain text when both are present.
        """
        return cls(
            title=collapse_whitespace(posting.title),
            location_text=collapse_whitespace(posting.location_text),
            office_names=[collapse_whitespace(name) for name in posting.office_names if name],
            content_clean=strip_html(posting.content),
        )
