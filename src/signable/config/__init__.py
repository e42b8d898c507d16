"""Signable configuration property classes."""
