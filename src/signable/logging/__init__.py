"""Signable Logging — logging port and structlog adapter."""

from signable.logging.port import LoggingPort
from signable.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
