"""Signable Kernel — exception hierarchy with zero external dependencies."""

from signable.kernel.exceptions import (
    ColumnNotFoundError,
    ConfigurationError,
    SignableException,
)

__all__ = [
    "ColumnNotFoundError",
    "ConfigurationError",
    "SignableException",
]
