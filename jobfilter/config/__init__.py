"""Keyword configuration management for the jobfilter classifier."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_keyword_config, load_keyword_config_or_default, validate_config_file
from .models import (
    BooleanFieldRule,
    ClassifierSettings,
    ContentKeywords,
    KeywordConfig,
    LocationKeywords,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ScoringSignals,
    SignalCategory,
    StringFieldRule,
    WeightedPattern,
    WeightedTerm,
)

__all__ = [
    # Loader functions
    "load_keyword_config",
    "load_keyword_config_or_default",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "KeywordConfig",
    "LocationKeywords",
    "ContentKeywords",
    "BooleanFieldRule",
    "StringFieldRule",
    "ScoringSignals",
    "SignalCategory",
    "WeightedTerm",
    "WeightedPattern",
    "ClassifierSettings",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
