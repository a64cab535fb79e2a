"""Custom exceptions for keyword configuration management."""

from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError


class ConfigurationError(Exception):
    """
    Exception raised when a keyword configuration cannot be loaded or validated.

    Stores every validation error found, plus suggestions for fixing them,
    and renders them in a human-readable block.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
        path: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Primary error message
            errors: Specific validation errors
            suggestions: Hints for fixing the errors
            path: Configuration file the error refers to, when known
        """
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.path = Path(path) if path is not None else None
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.path is not None:
            parts[0] = f"{self.message} ({self.path})"

        if self.errors:
            parts.append("\nValidation Errors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)

    @classmethod
    def from_validation_error(
        cls, exc: ValidationError, path: Optional[Union[str, Path]] = None
    ) -> "ConfigurationError":
        """Translate a pydantic ValidationError into readable configuration errors."""
        errors = []
        for error in exc.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            error_type = error["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type in ("string_type", "int_type", "float_type", "bool_type", "list_type", "dict_type"):
                expected_type = error_type.replace("_type", "")
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected_type}, got {error.get('input')!r}"
                )
            elif error_type.startswith("union_tag") or "literal" in error_type or "enum" in error_type:
                errors.append(f"Invalid value for '{field_path}': {error['msg']}")
            else:
                errors.append(f"{field_path}: {error['msg']}")

        return cls(
            "Keyword configuration validation failed",
            errors=errors,
            suggestions=[
                "Review config/filter_config.example.yaml for the expected layout",
                "Keyword lists must be lists of strings",
                "Metadata rules need a 'type' of 'boolean' or 'string'",
            ],
            path=path,
        )
