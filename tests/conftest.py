"""Shared fixtures for the jobfilter test suite."""

import json
from pathlib import Path

import pytest

from jobfilter.config.loader import load_keyword_config
from jobfilter.matching.engine import RelevanceClassifier

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Directory holding the sample configuration and ATS payloads."""
    return FIXTURES_DIR


@pytest.fixture
def keyword_config():
    """Keyword configuration used across the matching tests."""
    return load_keyword_config(FIXTURES_DIR / "filter_config.yaml")


@pytest.fixture
def classifier(keyword_config):
    """Classifier over the test configuration, scoring disabled."""
    return RelevanceClassifier(keyword_config)


@pytest.fixture
def load_payload():
    """Load one of the saved ATS responses by file name."""

    def _load(name):
        with open(FIXTURES_DIR / name, "r", encoding="utf-8") as f:
            return json.load(f)

    return _load
