"""
Query predicates for fixture collections.

Predicates are plain MongoDB-style query documents. build_query() is what the
orchestrator sends to find() and remove(); matches() evaluates the same
documents in memory for InMemoryCollection.
"""

from typing import Any, Dict, Iterable, Mapping

_MISSING = object()


def build_query(key: str, values: Iterable[Any]) -> Dict[str, Any]:
    """
    Build a set-membership predicate: field ``key`` equals one of ``values``.

    An empty ``values`` produces ``{key: {"$in": []}}``, which matches no
    document.

    Args:
        key: Field name to query on
        values: Accepted values for the field

    Returns:
        Query document using the ``$in`` operator
    """
    return {key: {"$in": list(values)}}


def matches(predicate: Mapping[str, Any], document: Mapping[str, Any]) -> bool:
    """
    Check whether a document satisfies a predicate.

    Supports plain equality and the ``$in`` operator, with dotted field
    paths. Every field in the predicate must match. A field holding a list
    matches if any element matches, as in MongoDB.

    Raises:
        ValueError: If the predicate uses an unsupported operator
    """
    for field_path, condition in predicate.items():
        value = _lookup(document, field_path)
        if isinstance(condition, Mapping) and any(k.startswith("$") for k in condition):
            if not _match_operators(field_path, condition, value):
                return False
        elif not _equals(value, condition):
            return False
    return True


def _match_operators(field_path: str, condition: Mapping[str, Any], value: Any) -> bool:
    for operator, operand in condition.items():
        if operator == "$in":
            if not any(_equals(value, candidate) for candidate in operand):
                return False
        elif operator == "$eq":
            if not _equals(value, operand):
                return False
        else:
            raise ValueError(f"Unsupported query operator {operator} on {field_path}")
    return True


def _equals(value: Any, expected: Any) -> bool:
    if value is _MISSING:
        return expected is None
    if isinstance(value, list) and not isinstance(expected, list):
        return expected in value
    return value == expected


def _lookup(document: Mapping[str, Any], field_path: str) -> Any:
    """Resolve a dotted path; returns _MISSING when any segment is absent."""
    current: Any = document
    for part in field_path.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return _MISSING
    return current


__all__ = ["build_query", "matches"]
