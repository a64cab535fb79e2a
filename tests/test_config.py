"""Unit tests for keyword configuration loading and validation."""

import warnings

import pytest
from pydantic import ValidationError

from jobfilter.config import (
    BooleanFieldRule,
    ConfigurationError,
    KeywordConfig,
    StringFieldRule,
    load_environment_config,
    load_keyword_config,
    load_keyword_config_or_default,
    validate_config_file,
)
from jobfilter.config.validators import check_for_warnings


@pytest.fixture
def write_config(tmp_path):
    """Write configuration text to a temporary file and return its path."""

    def _write(text, name="filter_config.yaml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


class TestKeywordConfigModel:
    """Tests for the pydantic configuration schema."""

    def test_empty_config_is_valid(self):
        config = KeywordConfig()
        assert config.location_keywords.strong_positive_latam == []
        assert config.remote_metadata_fields == {}
        assert config.scoring_signals is None
        assert config.classifier.proximity_window == 30
        assert config.classifier.explicit_remote_default == "relevant"
        assert config.logging.level == "INFO"

    def test_terms_are_normalized(self):
        config = KeywordConfig.model_validate(
            {"location_keywords": {"strong_positive_latam": ["  LatAm ", "latam", "", "Latin   America"]}}
        )
        assert config.location_keywords.strong_positive_latam == ["latam", "latin america"]

    def test_scalar_and_null_lists(self):
        config = KeywordConfig.model_validate(
            {"location_keywords": {"ambiguous": "Remote", "strong_positive_global": None}}
        )
        assert config.location_keywords.ambiguous == ["remote"]
        assert config.location_keywords.strong_positive_global == []

    def test_upper_and_camel_case_keys(self):
        config = KeywordConfig.model_validate(
            {
                "LOCATION_KEYWORDS": {"STRONG_POSITIVE_LATAM": ["LATAM"]},
                "contentKeywords": {"restrictionPhrases": ["Must reside in"]},
                "remoteMetadataFields": {"Remote": {"type": "boolean", "positiveValue": True}},
            }
        )
        assert config.location_keywords.strong_positive_latam == ["latam"]
        assert config.content_keywords.restriction_phrases == ["must reside in"]
        assert config.remote_metadata_fields["remote"].positive_value == "true"

    def test_null_sections(self):
        config = KeywordConfig.model_validate(
            {"location_keywords": None, "remote_metadata_fields": None, "scoring_signals": None}
        )
        assert config.location_keywords.ambiguous == []
        assert config.remote_metadata_fields == {}
        assert config.scoring_signals is None

    def test_version_kept_as_label(self):
        assert KeywordConfig.model_validate({"version": 1.0}).version == "1.0"

    def test_combined_term_lists(self, keyword_config):
        assert keyword_config.location_keywords.latam_terms() == [
            "latam", "latin america", "remote - latam", "brazil", "brasil", "são paulo",
            "argentina", "mexico", "colombia",
        ]
        assert keyword_config.content_keywords.negative_terms() == [
            "us citizens only", "must be based in the us", "eu work permit", "pst hours", "est only",
        ]

    def test_config_is_frozen(self, keyword_config):
        with pytest.raises(ValidationError):
            keyword_config.version = "other"

    @pytest.mark.parametrize(
        "data",
        [
            {"remote_metadata_fields": {"x": {"type": "number"}}},
            {"remote_metadata_fields": {"x": {"positive_value": "yes"}}},
            {"remote_metadata_fields": {"x": {"type": "boolean"}}},
            {"classifier": {"proximity_window": -1}},
            {"classifier": {"explicit_remote_default": "maybe"}},
            {"location_keywords": {"ambiguous": [["nested"]]}},
            {"scoring_signals": {"positive_location": {"keywords": [{"term": "  ", "weight": 1}]}}},
            {"logging": {"level": "LOUD"}},
        ],
    )
    def test_invalid_configs(self, data):
        with pytest.raises(ValidationError):
            KeywordConfig.model_validate(data)


class TestMetadataRules:
    """Tests for metadata rule models."""

    def test_fixture_rules(self, keyword_config):
        boolean_rule = keyword_config.remote_metadata_fields["remote eligible"]
        assert isinstance(boolean_rule, BooleanFieldRule)
        assert (boolean_rule.positive_value, boolean_rule.negative_value) == ("yes", "no")

        string_rule = keyword_config.remote_metadata_fields["geo scope"]
        assert isinstance(string_rule, StringFieldRule)
        assert string_rule.allowed_values == ["worldwide", "latam"]
        assert string_rule.disallowed_values == ["us only", "emea"]

    def test_field_names_lower_cased(self, keyword_config):
        assert set(keyword_config.remote_metadata_fields) == {"remote eligible", "geo scope"}


class TestLoadKeywordConfig:
    """Tests for loading configuration files."""

    def test_load_fixture(self, keyword_config):
        assert keyword_config.version == "test-1"
        assert keyword_config.scoring_signals is not None
        assert keyword_config.logging.format == "key-value"

    def test_load_json(self, write_config):
        path = write_config(
            '{"LOCATION_KEYWORDS": {"STRONG_POSITIVE_LATAM": ["LATAM"]}}', name="filter_config.json"
        )
        assert load_keyword_config(path).location_keywords.strong_positive_latam == ["latam"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_keyword_config(tmp_path / "missing.yaml")

    def test_default_locations(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigurationError, match="Keyword configuration file not found"):
            load_keyword_config()

        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "filter_config.yaml").write_text("version: found\n", encoding="utf-8")
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            assert load_keyword_config().version == "found"

    def test_malformed_yaml(self, write_config):
        path = write_config("location_keywords: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_keyword_config(path)

    def test_top_level_must_be_mapping(self, write_config):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_keyword_config(write_config("- latam\n- brazil\n"))

    def test_empty_file_warns_and_loads(self, write_config):
        with pytest.warns(UserWarning, match="No location_keywords or content_keywords"):
            config = load_keyword_config(write_config(""))
        assert config == KeywordConfig()

    def test_validation_error_is_readable(self, write_config):
        path = write_config(
            "location_keywords: {latam: [latam]}\n"
            "remote_metadata_fields:\n"
            "  Remote Eligible: {type: boolean}\n"
        )
        with pytest.raises(ConfigurationError) as exc_info:
            load_keyword_config(path)

        message = str(exc_info.value)
        assert "Validation Errors:" in message
        assert "Suggestions:" in message
        assert "positive_value" in message
        assert exc_info.value.path == path

    def test_or_default_falls_back(self, tmp_path):
        assert load_keyword_config_or_default(tmp_path / "missing.yaml") == KeywordConfig()

    def test_validate_config_file(self, fixtures_dir, write_config, capsys):
        assert validate_config_file(fixtures_dir / "filter_config.yaml") is True
        assert "✓" in capsys.readouterr().out

        assert validate_config_file(write_config("- not a mapping\n")) is False
        assert "✗" in capsys.readouterr().out


class TestCheckForWarnings:
    """Tests for soft configuration checks."""

    def test_clean_config(self, fixtures_dir):
        import yaml

        with open(fixtures_dir / "filter_config.yaml", encoding="utf-8") as f:
            assert check_for_warnings(yaml.safe_load(f)) == []

    def test_duplicates_and_empty_terms(self):
        messages = check_for_warnings(
            {"location_keywords": {"strong_negative_restriction": ["US", "us ", "canada", "  "]}}
        )
        assert any("Duplicate terms in location_keywords.strong_negative_restriction" in m for m in messages)
        assert any("Empty terms" in m for m in messages)

    def test_unknown_section(self):
        messages = check_for_warnings({"location_keywords": {"ambiguous": ["remote"]}, "sources": []})
        assert messages == ["Unknown configuration section 'sources' will be ignored"]

    def test_alternate_spellings_are_known(self):
        assert check_for_warnings({"LOCATION_KEYWORDS": {}, "contentKeywords": {"latam": ["x"]}}) == []

    def test_invalid_scoring_regex(self):
        messages = check_for_warnings(
            {
                "content_keywords": {"strong_positive_latam": ["latam"]},
                "scoring_signals": {"positive_content": {"patterns": [{"pattern": "([bad", "weight": 1}]}},
            }
        )
        assert len(messages) == 1
        assert messages[0].startswith("Invalid regex in scoring_signals.positive_content")


class TestEnvironmentConfig:
    """Tests for environment variable loading."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("JOBFILTER_CONFIG", "LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        env = load_environment_config()
        assert env.config_path is None
        assert env.log_level is None
        assert env.log_format is None
        assert env.environment == "local"

    def test_values_are_normalized(self, monkeypatch):
        monkeypatch.setenv("JOBFILTER_CONFIG", "/etc/jobfilter/filter_config.yaml")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        monkeypatch.setenv("ENVIRONMENT", "production")

        env = load_environment_config()
        assert str(env.config_path) == "/etc/jobfilter/filter_config.yaml"
        assert env.log_level == "DEBUG"
        assert env.log_format == "json"
        assert env.environment == "production"

    def test_invalid_values(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        monkeypatch.setenv("LOG_FORMAT", "xml")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert len(exc_info.value.errors) == 2
