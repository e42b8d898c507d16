"""Signable core — configuration loading."""

from signable.core.config import Config, config_properties

__all__ = ["Config", "config_properties"]
