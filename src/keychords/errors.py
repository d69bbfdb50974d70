from __future__ import annotations


class KeychordsError(Exception):
    """Base class for keychords errors."""


class ConfigurationError(KeychordsError, ValueError):
    """Raised when a chord table or config document cannot be built."""
