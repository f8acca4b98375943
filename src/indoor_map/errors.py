"""Exceptions raised around the core map operations.

Validation itself never raises: ``validate_map`` reports violations as
strings. These exceptions are for callers that turn a failed validation
into a hard stop, and for misuse such as editing someone else's map.
"""

from __future__ import annotations


class MapError(Exception):
    """Base class for indoor map errors."""


class MapValidationError(MapError, ValueError):
    """A map failed validation and cannot be saved."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Map validation failed: {', '.join(self.errors)}")


class MapOwnershipError(MapError, PermissionError):
    """The caller does not own the map it tried to change."""
