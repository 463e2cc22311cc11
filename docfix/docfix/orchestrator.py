"""
Concurrent load/get/clear across a fixture's bindings.

Every binding is handled by its own task, and within a load every document
save is its own task. Groups are joined with asyncio.gather:

- the first exception propagates to the caller unchanged,
- tasks that already started keep running; nothing is cancelled or
  rolled back,
- there are no retries.

Concurrent operations writing the same fixture file race; nothing here
serializes them.
"""

import asyncio
import inspect
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, List, Sequence

from .definition import Binding
from .query import build_query
from .serializer import read_documents, write_documents

logger = logging.getLogger(__name__)


async def call_collection(method: Callable[..., Any], *args: Any) -> Any:
    """Call a collection method that may be sync or async."""
    result = method(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def materialize(result: Any) -> List[Any]:
    """
    Turn whatever find() returned into a list.

    Accepts lists, async iterators (e.g. async cursors) and plain iterables
    (e.g. PyMongo cursors).
    """
    if hasattr(result, "__aiter__"):
        return [doc async for doc in result]
    return list(result)


def removed_count(ack: Any) -> int:
    """
    Extract the number of removed documents from a remove() acknowledgement.

    Accepts a mapping with ``n`` or an object with ``n`` or ``deleted_count``
    (PyMongo's DeleteResult).
    """
    if isinstance(ack, Mapping):
        return ack["n"]
    if hasattr(ack, "n"):
        return ack.n
    return ack.deleted_count


async def gather_total(aws: Iterable[Awaitable[int]]) -> int:
    """
    Run awaitables concurrently and sum their results.

    An empty group totals zero.
    """
    results = await asyncio.gather(*aws)
    return sum(results)


async def load_binding(binding: Binding, path: Path, log: logging.Logger = logger) -> int:
    """
    Save a binding's stored documents into its collection.

    Returns:
        Number of saves that returned a non-None result
    """
    documents = await read_documents(path)
    log.debug(f"Loaded {len(documents)} from {binding.name}")

    results = await asyncio.gather(
        *(call_collection(binding.collection.save, doc) for doc in documents)
    )
    return sum(1 for r in results if r is not None)


async def find_binding(
    binding: Binding,
    keys: Sequence[Any],
    path: Path,
    log: logging.Logger = logger,
) -> int:
    """
    Query a binding's collection and write the result to its file.

    Returns:
        Number of documents written
    """
    log.debug(f"Getting {binding.name}, looking for {len(keys)} documents.")
    found = await call_collection(binding.collection.find, build_query(binding.key, keys))
    documents = await materialize(found)
    return await write_documents(path, documents)


async def clear_binding(binding: Binding, keys: Sequence[Any], log: logging.Logger = logger) -> int:
    """
    Remove a binding's documents from its collection.

    Returns:
        The removed count reported by the collection
    """
    ack = await call_collection(binding.collection.remove, build_query(binding.key, keys))
    count = removed_count(ack)
    log.debug(f"Removed {count} from {binding.name}")
    return count


__all__ = [
    "call_collection",
    "materialize",
    "removed_count",
    "gather_total",
    "load_binding",
    "find_binding",
    "clear_binding",
]
