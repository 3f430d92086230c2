"""Errors raised while reading resolver settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """An upload format, storage or logging setting has an unusable value."""
