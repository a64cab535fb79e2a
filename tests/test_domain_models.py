"""Unit tests for domain models."""

import pytest

from jobfilter.domain.models import MetadataField, RawPosting, WorkplaceType


class TestWorkplaceType:
    """Tests for mapping ATS workplace spellings."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("on-site", WorkplaceType.ON_SITE),
            ("OnSite", WorkplaceType.ON_SITE),
            ("ON_SITE", WorkplaceType.ON_SITE),
            ("In-Office", WorkplaceType.ON_SITE),
            ("remote", WorkplaceType.REMOTE),
            ("Remote", WorkplaceType.REMOTE),
            ("Hybrid", WorkplaceType.HYBRID),
            ("unspecified", WorkplaceType.UNKNOWN),
            ("flexible", WorkplaceType.UNKNOWN),
            (None, WorkplaceType.UNKNOWN),
            (WorkplaceType.REMOTE, WorkplaceType.REMOTE),
        ],
    )
    def test_from_raw(self, raw, expected):
        assert WorkplaceType.from_raw(raw) == expected


class TestMetadataField:
    """Tests for MetadataField coercion."""

    def test_scalar_value(self):
        field = MetadataField(name=" Remote Eligible ", value="Yes")
        assert field.name == "Remote Eligible"
        assert field.values() == ["Yes"]

    def test_list_value_drops_blanks(self):
        field = MetadataField(name="Geo Scope", value=["LATAM", None, "  ", 3])
        assert field.values() == ["LATAM", "3"]

    def test_missing_value(self):
        assert MetadataField(name="Cost Center", value=None).values() == []

    def test_non_string_name(self):
        assert MetadataField(name=None, value="x").name == ""


class TestRawPosting:
    """Tests for RawPosting coercion of noisy ATS fields."""

    def test_defaults(self):
        posting = RawPosting()
        assert posting.title == ""
        assert posting.location_text is None
        assert posting.office_names == []
        assert posting.metadata_fields == []
        assert posting.workplace_type_hint is None
        assert posting.content == ""

    def test_title_coercion(self):
        assert RawPosting(title=None).title == ""
        assert RawPosting(title=123).title == "123"
        assert RawPosting(title="  Engineer ").title == "Engineer"

    def test_blank_optional_text_becomes_none(self):
        posting = RawPosting(location_text="   ", external_id=4012345)
        assert posting.location_text is None
        assert posting.external_id == "4012345"

    def test_office_names(self):
        assert RawPosting(office_names="São Paulo").office_names == ["São Paulo"]
        assert RawPosting(office_names=["A", "A", None, "", " B "]).office_names == ["A", "B"]

    def test_metadata_entries_must_be_mappings(self):
        posting = RawPosting(metadata_fields=[{"name": "Remote Eligible", "value": "Yes"}, "junk", 5])
        assert len(posting.metadata_fields) == 1
        assert posting.metadata_fields[0].name == "Remote Eligible"
        assert RawPosting(metadata_fields="junk").metadata_fields == []

    def test_workplace_type_hint_spellings(self):
        assert RawPosting(workplace_type_hint="on-site").workplace_type_hint == WorkplaceType.ON_SITE
        assert RawPosting(workplace_type_hint="weird").workplace_type_hint == WorkplaceType.UNKNOWN

    def test_content_prefers_html(self):
        assert RawPosting(content_html="<p>a</p>", content_plain="b").content == "<p>a</p>"
        assert RawPosting(content_plain="b").content == "b"
