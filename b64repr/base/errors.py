# Licensed under the GPLv3 - see LICENSE
"""Errors raised while converting records and fields."""

__all__ = ['SerializationError', 'DeserializationError']


class SerializationError(ValueError):
    """Raised when a value cannot be converted to its portable form."""


class DeserializationError(ValueError):
    """Raised when a portable form cannot be converted back to a value."""
