"""
Fixture definition parsing.

Turns the ``collections`` mapping given to a Fixture into an ordered list of
Bindings, validating each collection's API on the way.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping

from .errors import ValidationError
from .naming import resolve_name

logger = logging.getLogger(__name__)

# Checked in this order; the first missing one is reported.
REQUIRED_OPERATIONS = ("find", "remove", "save")


@dataclass(frozen=True)
class Binding:
    """
    One query key paired with one backing collection.

    Attributes:
        name: Fixture-scoped name, also used as the file name
        key: Field queried with the fixture's keys
        collection: Object exposing find, save and remove
    """
    name: str
    key: str
    collection: Any


def check_capabilities(name: str, collection: Any) -> None:
    """Raise ValidationError unless collection has callable find/remove/save."""
    for operation in REQUIRED_OPERATIONS:
        # getattr_static skips __getattr__; PyMongo answers any missing
        # attribute with a callable sub-collection.
        if (inspect.getattr_static(collection, operation, None) is None
                or not callable(getattr(collection, operation))):
            raise ValidationError(name, operation)


def parse_collections(
    fixture_name: str,
    collections: Mapping[str, Any],
    log: logging.Logger = logger,
) -> List[Binding]:
    """
    Build the bindings for a fixture.

    Each value in ``collections`` is either a single collection or a list of
    them; a single collection is treated as a one-element list. Bindings come
    out in mapping order, then list order.

    Args:
        fixture_name: Owning fixture's name, used to scope binding names
        collections: Mapping of query key to collection(s)
        log: Logger for progress output

    Returns:
        List of Binding, one per (key, collection) pair

    Raises:
        ValidationError: If any collection lacks find, remove or save
    """
    log.debug(f"Parsing {fixture_name}")

    found: List[Binding] = []
    for key, value in collections.items():
        handles = list(value) if isinstance(value, (list, tuple)) else [value]

        for i, collection in enumerate(handles):
            name = resolve_name(fixture_name, collection, f"{fixture_name}.{key}[{i}]")
            check_capabilities(name, collection)

            found.append(Binding(name=name, key=key, collection=collection))
            log.debug(f"Fixture collection {name}: OK")

    log.debug(f"Found {len(found)} fixture collections")
    return found


__all__ = ["Binding", "REQUIRED_OPERATIONS", "check_capabilities", "parse_collections"]
