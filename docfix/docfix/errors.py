"""
Exception types raised by docfix.

Structural problems (ConfigError, ValidationError, DuplicateFixtureError)
are raised eagerly while fixtures are defined and registered. Runtime
problems (ParseError, UpstreamError, and the builtin OSError family for file
access) surface from load/get/clear.
"""

from pathlib import Path
from typing import Optional, Union


class FixtureError(Exception):
    """Base class for all docfix errors."""


class ConfigError(FixtureError, TypeError):
    """Raised when a fixture definition has the wrong shape."""


class ValidationError(FixtureError):
    """Raised when a bound collection is missing a required operation.

    Attributes:
        binding_name: Resolved name of the offending binding.
        operation: Name of the missing method (find, save or remove).
    """

    def __init__(self, binding_name: str, operation: str):
        self.binding_name = binding_name
        self.operation = operation
        super().__init__(
            f"Fixture collection {binding_name} missing {operation} method"
        )


class DuplicateFixtureError(FixtureError):
    """Raised when two fixtures with the same name are registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate fixture name: {name}")


class ParseError(FixtureError, ValueError):
    """Raised when a fixture file does not contain a valid document list."""

    def __init__(self, path: Optional[Union[str, Path]], reason: str):
        self.path = path
        self.reason = reason
        where = f" in {path}" if path is not None else ""
        super().__init__(f"Malformed fixture data{where}: {reason}")


class UpstreamError(FixtureError):
    """Raised by collection adapters when the database driver fails.

    The driver exception is available as ``__cause__``.
    """

    def __init__(self, operation: str, collection_name: str, message: str):
        self.operation = operation
        self.collection_name = collection_name
        super().__init__(f"{operation} on {collection_name} failed: {message}")


__all__ = [
    "FixtureError",
    "ConfigError",
    "ValidationError",
    "DuplicateFixtureError",
    "ParseError",
    "UpstreamError",
]
