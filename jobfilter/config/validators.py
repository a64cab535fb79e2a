"""Additional validation utilities for keyword configuration."""

import re
import warnings
from typing import Any, Dict, List, Optional

KNOWN_SECTIONS = (
    "version",
    "location_keywords",
    "content_keywords",
    "remote_metadata_fields",
    "scoring_signals",
    "classifier",
    "logging",
)


def _key(name: Any) -> str:
    """Spelling-insensitive key: snake_case, UPPER_CASE and camelCase compare equal."""
    return str(name).replace("_", "").lower()


def _section(config_dict: Dict[str, Any], name: str) -> Optional[Any]:
    """Fetch a section by any spelling of its key."""
    for key, value in config_dict.items():
        if _key(key) == _key(name):
            return value
    return None


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check a raw keyword configuration for likely mistakes.

    None of these conditions make the configuration invalid; the engine
    would still run, just not the way the author probably intended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    # Unknown top-level keys are ignored by the schema
    for key in config_dict:
        if _key(key) not in {_key(section) for section in KNOWN_SECTIONS}:
            warning_messages.append(f"Unknown configuration section '{key}' will be ignored")

    for section_name in ("location_keywords", "content_keywords"):
        section = _section(config_dict, section_name)
        if not isinstance(section, dict):
            continue
        for list_name, terms in section.items():
            if not isinstance(terms, list):
                continue
            normalized = [" ".join(t.split()).lower() for t in terms if isinstance(t, str)]
            duplicates = sorted({t for t in normalized if t and normalized.count(t) > 1})
            if duplicates:
                warning_messages.append(
                    f"Duplicate terms in {section_name}.{list_name} will be deduplicated: "
                    f"{', '.join(duplicates)}"
                )
            if any(not t for t in normalized):
                warning_messages.append(
                    f"Empty terms in {section_name}.{list_name} will be dropped"
                )

    # Scoring regexes are compiled lazily; flag broken ones up front
    signals = _section(config_dict, "scoring_signals")
    if isinstance(signals, dict):
        for category_name, category in signals.items():
            if not isinstance(category, dict):
                continue
            for entry in category.get("patterns") or []:
                if not isinstance(entry, dict) or not isinstance(entry.get("pattern"), str):
                    continue
                try:
                    re.compile(entry["pattern"])
                except re.error as e:
                    warning_messages.append(
                        f"Invalid regex in scoring_signals.{category_name}: "
                        f"'{entry['pattern']}' ({e}); it will be skipped"
                    )

    if not _section(config_dict, "location_keywords") and not _section(config_dict, "content_keywords"):
        warning_messages.append(
            "No location_keywords or content_keywords configured; "
            "postings will only be decided by metadata and workplace type"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
