"""Shared utilities for the dynamic XML builder.

This module provides the configuration objects, the exception hierarchy and
the structured logging helpers used across all layers.
"""

from .config import (
    BuilderConfig,
    ConfigError,
    ConfigValidationError,
    SerializationConfig,
)
from .errors import (
    BuilderError,
    DocumentStructureError,
    InvalidArgument,
    MarkupParseError,
    require_text,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "BuilderConfig",
    "ConfigError",
    "ConfigValidationError",
    "SerializationConfig",
    "BuilderError",
    "DocumentStructureError",
    "InvalidArgument",
    "MarkupParseError",
    "require_text",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
