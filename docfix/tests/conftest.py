"""Pytest fixtures for docfix tests."""

import tempfile
from pathlib import Path

import pytest


class FakeCollection:
    """
    Records calls and returns canned results.

    Attributes:
        find_result: Documents returned by find()
        save_result: Value returned by each save(); None counts as unsaved
        remove_n: ``n`` reported by remove()
        error: Exception raised by every operation, if set
    """

    def __init__(self, name=None, find_result=None, save_result="ok", remove_n=0, error=None):
        if name is not None:
            self.name = name
        self.find_result = find_result or []
        self.save_result = save_result
        self.remove_n = remove_n
        self.error = error
        self.find_calls = []
        self.saved = []
        self.remove_calls = []

    async def find(self, predicate):
        self.find_calls.append(predicate)
        if self.error:
            raise self.error
        return list(self.find_result)

    async def save(self, document):
        if self.error:
            raise self.error
        self.saved.append(document)
        return self.save_result

    async def remove(self, predicate):
        self.remove_calls.append(predicate)
        if self.error:
            raise self.error
        return {"n": self.remove_n}


class SyncCollection:
    """Collection with plain (non-async) methods."""

    def __init__(self, name, documents=()):
        self.name = name
        self.documents = list(documents)

    def find(self, predicate):
        return iter(self.documents)

    def save(self, document):
        self.documents.append(document)
        return document.get("_id")

    def remove(self, predicate):
        n = len(self.documents)
        self.documents = []
        return {"n": n}


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
