"""Exception types raised by simple-xml.

Parsing problems and cursor contract violations are reported synchronously at
the point of detection. Nothing is retried or salvaged; a document whose parse
failed should be discarded.
"""

from typing import Optional


class SimpleXMLError(Exception):
    """Base exception for all simple-xml errors."""


class MalformedInputError(SimpleXMLError):
    """Raised when the parser cannot find valid tag boundaries."""

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)
        self.offset = offset


class InvalidCursorStateError(SimpleXMLError):
    """Raised when a cursor operation is used from a state that does not allow it."""
