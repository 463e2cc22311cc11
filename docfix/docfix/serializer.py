"""
Fixture file serialization.

Documents are stored as a MongoDB Extended JSON array (canonical mode), one
file per binding:

    {fixture_path}/{binding_name}.ejson

Canonical Extended JSON keeps the types plain JSON loses: dates, binary
blobs, ObjectIds and the distinction between Int32, Int64, Double and
Decimal128.
"""

import asyncio
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from bson import json_util
from bson.errors import BSONError
from bson.json_util import CANONICAL_JSON_OPTIONS

from .errors import ParseError

logger = logging.getLogger(__name__)

DEFAULT_FIXTURE_PATH = "./test"
FILE_EXTENSION = ".ejson"


def compute_file_path(fixture_path: Optional[Union[str, Path]], binding_name: str) -> Path:
    """
    Return the file a binding's documents are stored in.

    Args:
        fixture_path: Fixture directory, or None for ``./test``
        binding_name: Resolved binding name

    Returns:
        Path to ``{fixture_path}/{binding_name}.ejson``
    """
    directory = Path(fixture_path) if fixture_path else Path(DEFAULT_FIXTURE_PATH)
    return directory / f"{binding_name}{FILE_EXTENSION}"


def dumps(documents: Sequence[Dict[str, Any]]) -> str:
    """Serialize an ordered document list to canonical Extended JSON."""
    return json_util.dumps(list(documents), json_options=CANONICAL_JSON_OPTIONS, indent=2)


def loads(text: Union[str, bytes], path: Optional[Union[str, Path]] = None) -> List[Dict[str, Any]]:
    """
    Parse Extended JSON text back into an ordered document list.

    Args:
        text: File contents
        path: File the text came from, for error messages

    Raises:
        ParseError: If the text is not UTF-8 Extended JSON holding an array
            of documents
    """
    try:
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        documents = json_util.loads(text, json_options=CANONICAL_JSON_OPTIONS)
    except (json.JSONDecodeError, UnicodeDecodeError, BSONError, TypeError, ValueError) as e:
        raise ParseError(path, str(e)) from e

    if not isinstance(documents, list):
        raise ParseError(path, f"expected an array of documents, got {type(documents).__name__}")
    for i, doc in enumerate(documents):
        if not isinstance(doc, Mapping):
            raise ParseError(path, f"element {i} is not a document, got {type(doc).__name__}")
    return documents


def _write_text(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(data)


def _read_bytes(path: Path) -> bytes:
    with open(path, "rb") as f:
        return f.read()


async def write_documents(path: Union[str, Path], documents: Sequence[Dict[str, Any]]) -> int:
    """
    Write documents to a fixture file, replacing its contents.

    The write is not atomic: if it fails part way the file may be left
    truncated.

    Args:
        path: Destination file
        documents: Documents to store, in order

    Returns:
        Number of documents written
    """
    path = Path(path)
    logger.debug(f"Writing {len(documents)} documents to {path}")
    data = dumps(documents)
    await asyncio.to_thread(_write_text, path, data)
    return len(documents)


async def read_documents(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Read the documents stored in a fixture file.

    A missing file is an error, not an empty fixture.

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
        ParseError: If the contents are malformed
    """
    path = Path(path)
    data = await asyncio.to_thread(_read_bytes, path)
    return loads(data, path)


__all__ = [
    "DEFAULT_FIXTURE_PATH",
    "FILE_EXTENSION",
    "compute_file_path",
    "dumps",
    "loads",
    "write_documents",
    "read_documents",
]
