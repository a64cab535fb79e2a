"""Keyword configuration loader."""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from jobfilter.logging import get_logger

from .exceptions import ConfigurationError
from .models import KeywordConfig
from .validators import check_for_warnings, emit_warnings

logger = get_logger(__name__, component="config")

DEFAULT_CONFIG_CANDIDATES = (
    Path("filter_config.yaml"),
    Path("config") / "filter_config.yaml",
    Path("config") / "filter_config.json",
)


def load_keyword_config(config_path: Optional[Union[str, Path]] = None) -> KeywordConfig:
    """
    Load and validate a keyword configuration from a YAML or JSON file.

    JSON is a subset of YAML, so both formats go through yaml.safe_load.

    Fallback logic for the file location:
    1. Use config_path if given
    2. Try filter_config.yaml in the current directory
    3. Try ./config/filter_config.yaml, then ./config/filter_config.json

    Args:
        config_path: Optional path to the configuration file

    Returns:
        Validated, frozen KeywordConfig

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    config_file = _find_config_file(Path(config_path) if config_path else None)

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse keyword configuration: {e}",
            suggestions=[
                "Check YAML/JSON syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
            path=config_file,
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[f"Ensure {config_file} is readable", "Check file permissions"],
            path=config_file,
        )

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Keyword configuration must be a mapping at the top level",
            errors=[f"Got {type(config_dict).__name__}"],
            suggestions=["Review config/filter_config.example.yaml for the expected layout"],
            path=config_file,
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        config = KeywordConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(e, path=config_file)

    logger.info(
        "Keyword configuration loaded",
        extra={
            "event": "config.loaded",
            "path": str(config_file),
            "version": config.version,
            "metadata_rules": len(config.remote_metadata_fields),
            "scoring_enabled": config.scoring_signals is not None,
        },
    )
    return config


def load_keyword_config_or_default(
    config_path: Optional[Union[str, Path]] = None,
) -> KeywordConfig:
    """
    Load a keyword configuration, falling back to an empty one on failure.

    With an empty configuration every channel reports UNKNOWN and the
    scorer returns None, so classification degrades instead of failing.
    """
    try:
        return load_keyword_config(config_path)
    except ConfigurationError as e:
        logger.error(
            "Keyword configuration unavailable, using empty configuration",
            extra={"event": "config.fallback", "error": e.message, "errors": e.errors},
        )
        return KeywordConfig()


def _find_config_file(config_path: Optional[Path] = None) -> Path:
    """
    Find the configuration file using fallback logic.

    Raises:
        ConfigurationError: If no config file is found
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[f"Ensure {config_path} exists", "Check the path and try again"],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_CANDIDATES:
        if candidate.exists():
            return candidate

    raise ConfigurationError(
        "Keyword configuration file not found",
        errors=[f"Tried: {candidate}" for candidate in DEFAULT_CONFIG_CANDIDATES],
        suggestions=[
            "Copy config/filter_config.example.yaml to config/filter_config.yaml",
            "Use --config or JOBFILTER_CONFIG to specify a custom location",
        ],
    )


def validate_config_file(config_path: Union[str, Path]) -> bool:
    """
    Validate a configuration file, printing the outcome.

    Returns:
        True if valid, False otherwise
    """
    try:
        load_keyword_config(config_path)
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False
    print(f"✓ Configuration file {config_path} is valid")
    return True
