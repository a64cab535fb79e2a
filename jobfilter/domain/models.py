"""Core domain models for postings and classification outcomes.

This module defines the data structures shared by every layer:
- RawPosting: source-agnostic projection of an ATS posting
- MetadataField: one structured (name, value) attribute of a posting
- WorkplaceType: explicit remote flag when the source provides one
- ChannelVerdict: per-channel decision (metadata, location, content)
- Assessment / HiringRegion: final classification outcome
"""

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class WorkplaceType(str, Enum):
    """Explicit workplace arrangement reported by the ATS."""

    ON_SITE = "ON_SITE"
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_raw(cls, value: Any) -> "WorkplaceType":
        """Map an ATS-specific spelling to a WorkplaceType.

        Accepts enum members, "on-site", "onsite", "OnSite", "remote",
        "Remote", "hybrid", ... Unrecognised or empty values map to UNKNOWN.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.UNKNOWN
        key = str(value).strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        return _WORKPLACE_ALIASES.get(key, cls.UNKNOWN)


_WORKPLACE_ALIASES = {
    "onsite": WorkplaceType.ON_SITE,
    "inoffice": WorkplaceType.ON_SITE,
    "office": WorkplaceType.ON_SITE,
    "remote": WorkplaceType.REMOTE,
    "fullyremote": WorkplaceType.REMOTE,
    "hybrid": WorkplaceType.HYBRID,
    "unknown": WorkplaceType.UNKNOWN,
    "unspecified": WorkplaceType.UNKNOWN,
}


class ChannelVerdict(str, Enum):
    """Verdict produced independently by each evidence channel."""

    ACCEPT_GLOBAL = "ACCEPT_GLOBAL"
    ACCEPT_LATAM = "ACCEPT_LATAM"
    REJECT = "REJECT"
    UNKNOWN = "UNKNOWN"


class Assessment(str, Enum):
    """Final relevance assessment for a posting."""

    RELEVANT = "RELEVANT"
    NEEDS_REVIEW = "NEEDS_REVIEW"
    IRRELEVANT = "IRRELEVANT"


class HiringRegion(str, Enum):
    """Hiring region tag attached to relevant postings."""

    WORLDWIDE = "WORLDWIDE"
    LATAM = "LATAM"


def _coerce_text(value: Any) -> Optional[str]:
    """Coerce arbitrary input to a string, None stays None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, dict)):
        return None
    return str(value)


def _coerce_text_list(value: Any) -> List[str]:
    """Coerce a scalar or a list to a list of non-empty strings."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        value = [value]
    items = []
    for item in value:
        text = _coerce_text(item)
        if text and text.strip():
            items.append(text.strip())
    return items


class MetadataField(BaseModel):
    """A structured attribute attached to a posting (e.g. "Remote Eligible")."""

    name: str = Field("", description="Field name as reported by the ATS")
    value: Union[str, List[str], None] = Field(None, description="Scalar, list or missing value")

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        """Normalize the field name to a stripped string."""
        text = _coerce_text(v)
        return text.strip() if text else ""

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Union[str, List[str], None]:
        """Accept strings, lists, booleans and numbers; drop anything else."""
        if v is None:
            return None
        if isinstance(v, (list, tuple)):
            return _coerce_text_list(v)
        return _coerce_text(v)

    def values(self) -> List[str]:
        """Return the value(s) as a flat list of strings."""
        if self.value is None:
            return []
        if isinstance(self.value, list):
            return list(self.value)
        return [self.value]


class RawPosting(BaseModel):
    """Source-agnostic projection of an ATS job posting.

    Adapters map each ATS payload onto this structure. Only the fields the
    classification engine needs are modelled; external_id, source, company
    and url are carried for logging and audit only and never influence a
    decision.

    Type noise in text fields (None, numbers, booleans) is coerced rather
    than rejected so that a single malformed posting never aborts a batch.
    """

    title: str = Field("", description="Job title")
    location_text: Optional[str] = Field(None, description="Free-text location/category string")
    office_names: List[str] = Field(default_factory=list, description="Office or site names")
    metadata_fields: List[MetadataField] = Field(
        default_factory=list, description="Ordered structured attributes"
    )
    content_html: Optional[str] = Field(None, description="Job description as HTML")
    content_plain: Optional[str] = Field(None, description="Job description as plain text")
    workplace_type_hint: Optional[WorkplaceType] = Field(
        None, description="Explicit workplace flag when the ATS provides one"
    )

    external_id: Optional[str] = Field(None, description="Posting ID in the ATS")
    source: Optional[str] = Field(None, description="ATS name (greenhouse, lever, ashby)")
    company: Optional[str] = Field(None, description="Company name")
    url: Optional[str] = Field(None, description="Link to the posting")

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, v: Any) -> str:
        """Coerce missing or non-string titles to a string."""
        return (_coerce_text(v) or "").strip()

    @field_validator(
        "location_text", "content_html", "content_plain", "external_id", "source", "company", "url",
        mode="before",
    )
    @classmethod
    def coerce_optional_text(cls, v: Any) -> Optional[str]:
        """Coerce optional text fields; blank strings become None."""
        text = _coerce_text(v)
        if text is None or not text.strip():
            return None
        return text

    @field_validator("office_names", mode="before")
    @classmethod
    def coerce_office_names(cls, v: Any) -> List[str]:
        """Accept a single name or a list, dropping blanks and duplicates."""
        names = []
        for name in _coerce_text_list(v):
            if name not in names:
                names.append(name)
        return names

    @field_validator("metadata_fields", mode="before")
    @classmethod
    def coerce_metadata(cls, v: Any) -> List[Any]:
        """Drop metadata entries that are not mappings or models."""
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            return []
        return [item for item in v if isinstance(item, (dict, MetadataField))]

    @field_validator("workplace_type_hint", mode="before")
    @classmethod
    def coerce_workplace_type(cls, v: Any) -> Optional[WorkplaceType]:
        """Map ATS spellings (on-site, OnSite, remote, ...) to WorkplaceType."""
        if v is None:
            return None
        return WorkplaceType.from_raw(v)

    @property
    def content(self) -> str:
        """Description source preferred by the engine: HTML first, then plain text."""
        return self.content_html or self.content_plain or ""

    model_config = {"json_schema_extra": {"example": {
        "title": "Senior Backend Engineer",
        "location_text": "Remote - LATAM",
        "office_names": ["São Paulo"],
        "metadata_fields": [{"name": "Remote Eligible", "value": "Yes"}],
        "content_html": "<p>We hire across Latin America.</p>",
        "workplace_type_hint": "REMOTE",
        "external_id": "4012345",
        "source": "greenhouse",
    }}}
