"""Exception hierarchy for signable.

All errors raised by the behavior inherit from SignableException, carrying
an optional error code and a context dict for structured error data.

Categories:
- ConfigurationError: the signed class or its configuration cannot be honored
- ColumnNotFoundError: a configured column is absent from the class's table
"""

from __future__ import annotations


class SignableException(Exception):
    """Base exception for all signable errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "SIGNABLE_CONFIG").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ConfigurationError(SignableException):
    """A signed column or mapping is misconfigured (e.g. unsupported column type)."""


class ColumnNotFoundError(SignableException):
    """The requested column does not exist in the mapped class's table."""
