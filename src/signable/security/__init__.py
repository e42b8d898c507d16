"""Signable Security — request principal."""

from signable.security.context import SecurityContext

__all__ = ["SecurityContext"]
