"""
docfix - database fixtures you can commit

This package provides tools for:
- Snapshotting documents matching a set of keys to Extended JSON files
- Loading those files back into a database for repeatable tests
- Clearing fixture documents from a database
- Running all of the above across many collections concurrently
"""

from docfix.fixture import Fixture
from docfix.definition import Binding, parse_collections
from docfix.naming import resolve_name
from docfix.query import build_query, matches
from docfix.serializer import (
    compute_file_path,
    dumps,
    loads,
    read_documents,
    write_documents,
)
from docfix.collection import DocumentCollection, InMemoryCollection, MongoCollection
from docfix.registry import Registry
from docfix.config import DocfixConfig, load_config
from docfix.errors import (
    FixtureError,
    ConfigError,
    ValidationError,
    DuplicateFixtureError,
    ParseError,
    UpstreamError,
)

__version__ = "0.1.0"

__all__ = [
    # Fixture
    "Fixture",
    "Binding",
    "parse_collections",
    "resolve_name",
    # Query
    "build_query",
    "matches",
    # Serialization
    "compute_file_path",
    "dumps",
    "loads",
    "read_documents",
    "write_documents",
    # Collections
    "DocumentCollection",
    "InMemoryCollection",
    "MongoCollection",
    # Registry
    "Registry",
    # Config
    "DocfixConfig",
    "load_config",
    # Errors
    "FixtureError",
    "ConfigError",
    "ValidationError",
    "DuplicateFixtureError",
    "ParseError",
    "UpstreamError",
]
