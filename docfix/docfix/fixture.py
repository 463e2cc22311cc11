"""
The Fixture class.

A Fixture names a set of documents by query key, across one or more
collections, so they can be snapshotted to disk (get), reloaded (load) or
removed (clear):

    users = Fixture(
        name="users",
        collections={"user_name": [UserColl, SettingsColl]},
        keys=["alan", "neil"],
    )

    await users.get()    # writes test/users.UserColl.ejson, ...
    await users.load()   # saves the stored documents back
    await users.clear()  # removes them from the database
"""

import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .definition import Binding, parse_collections
from .errors import ConfigError
from .orchestrator import clear_binding, find_binding, gather_total, load_binding
from .query import build_query
from .serializer import compute_file_path


class Fixture:
    """
    A named set of documents spread across collections.

    Construction parses and validates everything up front; a Fixture that
    exists is usable. Instances are not modified afterwards.

    Attributes:
        name: Fixture name, unique within a Registry
        bindings: Parsed (name, key, collection) bindings, in definition order
        keys: Values matched against each binding's key
        path: Directory holding the fixture files, or None for ``./test``
    """

    def __init__(
        self,
        name: str,
        collections: Mapping,
        keys: List[Any],
        path: Optional[Union[str, Path]] = None,
    ):
        if not isinstance(name, str):
            raise ConfigError("Fixture name must be str")
        self.name = name
        self.log = logging.getLogger(f"{__name__}.{name}")

        if not isinstance(collections, Mapping):
            raise ConfigError("Fixture collections must be a mapping")
        if not isinstance(keys, list):
            raise ConfigError("Fixture keys must be a list")

        self.bindings: List[Binding] = parse_collections(name, collections, self.log)
        self.keys = list(keys)
        self.path = Path(path) if path else None

    def __repr__(self) -> str:
        return f"Fixture(name={self.name!r}, bindings={len(self.bindings)}, keys={len(self.keys)})"

    def with_path(self, path: Union[str, Path]) -> "Fixture":
        """Return a copy of this fixture stored under ``path``."""
        clone = copy.copy(self)
        clone.path = Path(path)
        return clone

    def filename(self, binding: Union[Binding, str]) -> Path:
        """Return the file a binding's documents live in."""
        name = binding.name if isinstance(binding, Binding) else binding
        return compute_file_path(self.path, name)

    def query(self, key: str) -> Dict[str, Any]:
        """Return the predicate used for bindings on ``key``."""
        return build_query(key, self.keys)

    async def load(self) -> int:
        """
        Save every stored document back into its collection.

        Returns:
            Number of documents saved across all bindings
        """
        return await gather_total(
            load_binding(b, self.filename(b), self.log) for b in self.bindings
        )

    async def get(self) -> int:
        """
        Query every binding and write the results to the fixture files.

        Returns:
            Number of documents written across all bindings
        """
        return await gather_total(
            find_binding(b, self.keys, self.filename(b), self.log) for b in self.bindings
        )

    async def clear(self) -> int:
        """
        Remove the fixture's documents from every collection.

        Returns:
            Sum of the removed counts reported by the collections
        """
        self.log.debug("Removing documents.")
        total = await gather_total(
            clear_binding(b, self.keys, self.log) for b in self.bindings
        )
        self.log.debug(f"Removed {total} documents")
        return total


__all__ = ["Fixture"]
