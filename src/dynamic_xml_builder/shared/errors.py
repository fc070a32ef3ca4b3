"""Exception hierarchy for the dynamic XML builder.

Every failure raised by the builder derives from BuilderError so callers can
catch builder problems without masking unrelated exceptions.
"""

from typing import Optional


class BuilderError(Exception):
    """Base exception for all builder failures."""


class InvalidArgument(BuilderError, ValueError):
    """Raised when a required name, content string or callback is missing or unusable.

    Attributes:
        argument: Name of the offending parameter, when known
    """

    def __init__(self, message: str, argument: Optional[str] = None) -> None:
        super().__init__(message)
        self.argument = argument


class DocumentStructureError(BuilderError):
    """Raised when a node would break the document-level structure rules."""


class MarkupParseError(BuilderError):
    """Raised when markup text cannot be read back into a document tree.

    Attributes:
        line: 1-based line of the failure, when reported by the parser
        column: 0-based column of the failure, when reported by the parser
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        base = super().__str__()
        if self.line is None:
            return base
        return f"{base} (line {self.line}, column {self.column})"


def require_text(value: Optional[str], argument: str) -> str:
    """Return value unchanged, raising InvalidArgument when it is None or empty."""
    if value is None or value == "":
        raise InvalidArgument(f"{argument} cannot be empty", argument=argument)
    if not isinstance(value, str):
        raise InvalidArgument(
            f"{argument} must be a string, got {type(value).__name__}",
            argument=argument,
        )
    return value
