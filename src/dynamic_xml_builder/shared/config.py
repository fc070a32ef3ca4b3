"""Configuration classes for the dynamic XML builder.

This module provides validated configuration objects for the node-building
engine and the serializer, plus JSON round-tripping and named presets.
"""

import json
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

_VALID_NEWLINES = ("\r\n", "\n", "\r")
_VALID_LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class SerializationConfig:
    """Configuration for rendering a document tree to text."""

    indent_chars: str = "  "
    newline: str = "\r\n"
    default_version: str = "1.0"
    default_encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate serialization configuration."""
        if self.indent_chars.strip(" \t"):
            raise ConfigValidationError(
                "indent_chars may only contain spaces and tabs",
                field_name="indent_chars",
            )
        if self.newline not in _VALID_NEWLINES:
            raise ConfigValidationError(
                "newline must be one of CRLF, LF or CR",
                field_name="newline",
                suggestions=["Use '\\r\\n' for Windows-style output", "Use '\\n' for Unix-style output"],
            )
        if not self.default_version:
            raise ConfigValidationError(
                "default_version cannot be empty", field_name="default_version"
            )
        if not self.default_encoding:
            raise ConfigValidationError(
                "default_encoding cannot be empty", field_name="default_encoding"
            )


@dataclass
class BuilderConfig:
    """Configuration for a builder instance.

    Attributes:
        serialization: Rendering settings used by to_string/to_bytes
        escape_prefix: Leading character stripped from tag names
        validate_names: Reject element and attribute names that are not XML names
        correlation_id: Optional ID attached to every log record of the builder
        logging_level: Level used when the CLI configures logging
    """

    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    escape_prefix: str = "_"
    validate_names: bool = True
    correlation_id: Optional[str] = None
    logging_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate builder configuration."""
        if len(self.escape_prefix) != 1:
            raise ConfigValidationError(
                "escape_prefix must be a single character",
                field_name="escape_prefix",
            )
        if self.logging_level not in _VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {list(_VALID_LOGGING_LEVELS)}",
                field_name="logging_level",
            )

    def override(self, **kwargs: Any) -> "BuilderConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Field overrides; nested fields use ``section__field``

        Returns:
            New BuilderConfig instance with overrides applied

        Example:
            >>> config = BuilderConfig().override(serialization__newline="\\n")
            >>> config.serialization.newline
            '\\n'
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                section, field_name = key.split("__", 1)
                nested.setdefault(section, {})[field_name] = value
            else:
                top_level[key] = value

        try:
            for section, values in nested.items():
                if section != "serialization":
                    raise ConfigValidationError(
                        f"Unknown configuration section: {section}", field_name=section
                    )
                top_level["serialization"] = replace(self.serialization, **values)
            return replace(self, **top_level)
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if hasattr(value, "__dataclass_fields__"):
                value = {sub.name: getattr(value, sub.name) for sub in fields(value)}
            result[item.name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuilderConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so misspelled settings do not pass silently.
        """
        known = {item.name for item in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {sorted(unknown)}",
                suggestions=sorted(known),
            )
        values = dict(data)
        if isinstance(values.get("serialization"), dict):
            values["serialization"] = SerializationConfig(**values["serialization"])
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "BuilderConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "BuilderConfig":
        """Two-space indentation with CRLF line terminators."""
        return cls()

    @classmethod
    def unix(cls) -> "BuilderConfig":
        """Same as default but with LF line terminators."""
        return cls(serialization=SerializationConfig(newline="\n"))

    @classmethod
    def strict(cls) -> "BuilderConfig":
        """Reject element and attribute names that are not valid XML names."""
        return cls(validate_names=True)

    @classmethod
    def lenient(cls) -> "BuilderConfig":
        """Accept any non-empty element and attribute name."""
        return cls(validate_names=False)
