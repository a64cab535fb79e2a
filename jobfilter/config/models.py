"""Keyword configuration schema models using Pydantic.

The configuration is human-edited data (YAML or JSON). Keys may be written
in snake_case or in the upper/camel-case spelling of the legacy JSON files
(LOCATION_KEYWORDS, STRONG_NEGATIVE_RESTRICTION, positiveValue, ...).
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


def _aliases(name: str) -> AliasChoices:
    """Accept the snake_case name and its UPPER_CASE and camelCase spellings."""
    head, *rest = name.split("_")
    camel = head + "".join(part.capitalize() for part in rest)
    return AliasChoices(name, name.upper(), camel)


def _keyword_list(name: str, description: str) -> Any:
    return Field(default_factory=list, validation_alias=_aliases(name), description=description)


def normalize_keywords(values: List[str]) -> List[str]:
    """Strip, lower-case, drop empty entries and de-duplicate, preserving order."""
    normalized: List[str] = []
    for term in values:
        stripped = " ".join(term.split()).lower()
        if stripped and stripped not in normalized:
            normalized.append(stripped)
    return normalized


def _none_to_list(v: Any) -> Any:
    if v is None:
        return []
    if isinstance(v, str):
        return [v]
    return v


class _KeywordSection(BaseModel):
    """Shared validation for sections made of keyword lists."""

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("*", mode="before")
    @classmethod
    def accept_scalars(cls, v: Any) -> Any:
        """Treat null as an empty list and a bare string as a one-item list."""
        return _none_to_list(v)

    @field_validator("*", mode="after")
    @classmethod
    def normalize_terms(cls, v: List[str]) -> List[str]:
        """Normalize terms: trim, collapse inner whitespace, lower-case, de-duplicate."""
        return normalize_keywords(v)


class LocationKeywords(_KeywordSection):
    """Keyword lists evaluated against location strings and office names."""

    strong_negative_restriction: List[str] = _keyword_list(
        "strong_negative_restriction", "Location phrases that restrict eligibility (reject)"
    )
    strong_positive_global: List[str] = _keyword_list(
        "strong_positive_global", "Location phrases meaning worldwide remote"
    )
    strong_positive_latam: List[str] = _keyword_list(
        "strong_positive_latam", "Location phrases meaning LATAM remote"
    )
    accept_exact_brazil_terms: List[str] = _keyword_list(
        "accept_exact_brazil_terms", "Exact Brazil terms (LATAM)"
    )
    accept_exact_latam_countries: List[str] = _keyword_list(
        "accept_exact_latam_countries", "Exact LATAM country names (LATAM)"
    )
    ambiguous: List[str] = _keyword_list(
        "ambiguous", "Terms like a bare 'remote' that need office/content evidence"
    )

    def latam_terms(self) -> List[str]:
        """Every location term that signals a LATAM hiring region."""
        return normalize_keywords(
            self.strong_positive_latam + self.accept_exact_brazil_terms + self.accept_exact_latam_countries
        )


class ContentKeywords(_KeywordSection):
    """Keyword lists evaluated against the title and job description."""

    strong_negative_region: List[str] = _keyword_list(
        "strong_negative_region", "Region/citizenship restrictions in the description (reject)"
    )
    strong_negative_timezone: List[str] = _keyword_list(
        "strong_negative_timezone", "Timezone restrictions in the description (reject)"
    )
    strong_positive_global: List[str] = _keyword_list(
        "strong_positive_global", "Description phrases meaning worldwide remote"
    )
    strong_positive_latam: List[str] = _keyword_list(
        "strong_positive_latam", "Description phrases meaning LATAM remote"
    )
    accept_exact_brazil_terms: List[str] = _keyword_list(
        "accept_exact_brazil_terms", "Exact Brazil terms (LATAM)"
    )
    restriction_phrases: List[str] = _keyword_list(
        "restriction_phrases",
        "Lead-in phrases ('must be located in') combined with location restrictions",
    )

    def negative_terms(self) -> List[str]:
        """Region and timezone restrictions as one list."""
        return normalize_keywords(self.strong_negative_region + self.strong_negative_timezone)

    def latam_terms(self) -> List[str]:
        """Description terms that signal a LATAM hiring region."""
        return normalize_keywords(self.strong_positive_latam + self.accept_exact_brazil_terms)


class BooleanFieldRule(BaseModel):
    """Metadata rule for yes/no style fields (e.g. "Remote Eligible")."""

    type: Literal["boolean"] = "boolean"
    positive_value: str = Field(
        ..., min_length=1, validation_alias=_aliases("positive_value")
    )
    negative_value: Optional[str] = Field(
        None, validation_alias=_aliases("negative_value")
    )

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("positive_value", "negative_value", mode="before")
    @classmethod
    def normalize_value(cls, v: Any) -> Any:
        """Compare values case-insensitively; booleans and numbers become strings."""
        if v is None:
            return None
        if isinstance(v, bool):
            v = "true" if v else "false"
        text = str(v).strip().lower()
        return text or None


class StringFieldRule(BaseModel):
    """Metadata rule for free-text fields (e.g. "Geo Scope")."""

    type: Literal["string"] = "string"
    allowed_values: List[str] = Field(
        default_factory=list, validation_alias=_aliases("allowed_values")
    )
    positive_values: List[str] = Field(
        default_factory=list, validation_alias=_aliases("positive_values")
    )
    disallowed_values: List[str] = Field(
        default_factory=list, validation_alias=_aliases("disallowed_values")
    )

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("allowed_values", "positive_values", "disallowed_values", mode="before")
    @classmethod
    def accept_scalars(cls, v: Any) -> Any:
        return _none_to_list(v)

    @field_validator("allowed_values", "positive_values", "disallowed_values", mode="after")
    @classmethod
    def normalize_terms(cls, v: List[str]) -> List[str]:
        return normalize_keywords(v)


MetadataRule = Annotated[Union[BooleanFieldRule, StringFieldRule], Field(discriminator="type")]


class WeightedTerm(BaseModel):
    """Scoring keyword: adds `weight` when the term occurs in the posting text."""

    term: str = Field(..., min_length=1)
    weight: Union[int, float] = 0

    model_config = {"frozen": True}

    @field_validator("term")
    @classmethod
    def strip_term(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Scoring term cannot be empty or whitespace-only")
        return stripped


class WeightedPattern(BaseModel):
    """Scoring regular expression: adds `weight` when the pattern matches.

    Patterns are not compiled here: an invalid expression must only skip
    itself at scoring time, never reject the whole configuration.
    """

    pattern: str = Field(..., min_length=1)
    weight: Union[int, float] = 0

    model_config = {"frozen": True}


class SignalCategory(BaseModel):
    """Weighted keywords and patterns of one scoring category."""

    keywords: List[WeightedTerm] = Field(default_factory=list)
    patterns: List[WeightedPattern] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("keywords", "patterns", mode="before")
    @classmethod
    def accept_null(cls, v: Any) -> Any:
        return [] if v is None else v


class ScoringSignals(BaseModel):
    """The four scoring categories used by the relevance scorer."""

    positive_location: SignalCategory = Field(default_factory=SignalCategory)
    negative_location: SignalCategory = Field(default_factory=SignalCategory)
    positive_content: SignalCategory = Field(default_factory=SignalCategory)
    negative_content: SignalCategory = Field(default_factory=SignalCategory)

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("*", mode="before")
    @classmethod
    def accept_null(cls, v: Any) -> Any:
        return {} if v is None else v

    def categories(self) -> List[Tuple[str, SignalCategory]]:
        """Return (name, category) pairs in a fixed order."""
        return [
            ("positive_location", self.positive_location),
            ("negative_location", self.negative_location),
            ("positive_content", self.positive_content),
            ("negative_content", self.negative_content),
        ]


class ClassifierSettings(BaseModel):
    """Tunable decision settings that are not keyword data."""

    proximity_window: int = Field(
        30, ge=0, le=500,
        description="Characters after a restrictive match searched for a LATAM override",
    )
    explicit_remote_default: Literal["relevant", "needs_review"] = Field(
        "relevant",
        description="Outcome for postings flagged REMOTE when no channel produced a signal",
    )

    model_config = {"frozen": True, "extra": "ignore"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="Log output format (json or key-value)")

    model_config = {"frozen": True, "use_enum_values": True}

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class KeywordConfig(BaseModel):
    """Root keyword configuration consumed by the classification engine.

    Immutable for the duration of a classification run. Every section has a
    default, so an empty configuration is valid: every channel then reports
    UNKNOWN and the scorer returns None.
    """

    version: Optional[str] = Field(None, description="Free-form version label of the keyword data")
    location_keywords: LocationKeywords = Field(
        default_factory=LocationKeywords, validation_alias=_aliases("location_keywords")
    )
    content_keywords: ContentKeywords = Field(
        default_factory=ContentKeywords, validation_alias=_aliases("content_keywords")
    )
    remote_metadata_fields: Dict[str, MetadataRule] = Field(
        default_factory=dict, validation_alias=_aliases("remote_metadata_fields")
    )
    scoring_signals: Optional[ScoringSignals] = Field(
        None, validation_alias=_aliases("scoring_signals")
    )
    classifier: ClassifierSettings = Field(
        default_factory=ClassifierSettings, validation_alias=_aliases("classifier")
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, validation_alias=_aliases("logging"))

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("version", mode="before")
    @classmethod
    def stringify_version(cls, v: Any) -> Any:
        """YAML reads `version: 1.0` as a float; keep it as a label."""
        return None if v is None else str(v)

    @field_validator("location_keywords", "content_keywords", "classifier", "logging", mode="before")
    @classmethod
    def accept_null_section(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("remote_metadata_fields", mode="before")
    @classmethod
    def lowercase_field_names(cls, v: Any) -> Any:
        """Field names are matched case-insensitively, so store them lower-cased."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        return {str(name).strip().lower(): rule for name, rule in v.items() if str(name).strip()}
