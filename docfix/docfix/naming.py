"""
Binding name resolution.

A binding's name doubles as its file name, so it should describe the backing
collection when the collection can tell us what it is called.
"""

import inspect
from typing import Any, Optional


def _name_of(obj: Any, attr: str) -> Optional[str]:
    value = getattr(obj, attr, None)
    if isinstance(value, str) and value:
        return value
    return None


def resolve_name(fixture_name: str, collection: Any, fallback: str) -> str:
    """
    Return a fixture-scoped name for a collection.

    Checked in order, later hits winning:
        1. ``collection.name``
        2. ``collection._name``
        3. ``collection.collection._name`` (a wrapped driver collection)

    Discovered names are returned as ``"{fixture_name}.{discovered}"``.
    Otherwise the fallback, which the caller has already scoped, is returned
    unchanged. Two collections reporting the same name resolve to the same
    binding name; nothing here disambiguates them.

    Args:
        fixture_name: Name of the owning fixture
        collection: Collection handle
        fallback: Name to use when nothing better is found

    Returns:
        Resolved binding name
    """
    discovered = _name_of(collection, "name")
    discovered = _name_of(collection, "_name") or discovered

    # getattr_static skips __getattr__, which PyMongo uses to hand out a
    # sub-collection for any public attribute name.
    if inspect.getattr_static(collection, "collection", None) is not None:
        inner = getattr(collection, "collection")
        discovered = _name_of(inner, "_name") or discovered

    if discovered is None:
        return fallback
    return f"{fixture_name}.{discovered}"


__all__ = ["resolve_name"]
