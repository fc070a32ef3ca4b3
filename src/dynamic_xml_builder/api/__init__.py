"""Public functions for building, validating fragments and reading markup."""

from .builders import build, fragment, fragment_with_builder, parse_file, parse_string

__all__ = [
    "build",
    "fragment",
    "fragment_with_builder",
    "parse_file",
    "parse_string",
]
