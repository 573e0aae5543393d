"""Operation path schema.

Maps every builder operation to the nested location of its payload inside
the search document:

- must      -> query.bool.must
- must_not  -> query.bool.must_not
- should    -> query.bool.should
- functions -> functions
- ids       -> query.terms._id
- size      -> size
- fields    -> _source
- range     -> query.bool.must.range
- sort      -> sort
- aggs      -> aggs
"""

from __future__ import annotations

from collections.abc import Sized
from types import MappingProxyType
from typing import Any, Final, Mapping, Sequence

from ElasticQuery.core.errors import UnknownOperationError

Path = tuple[str, ...]

OPERATION_PATHS: Final[Mapping[str, Path]] = MappingProxyType(
    {
        "must": ("query", "bool", "must"),
        "must_not": ("query", "bool", "must_not"),
        "should": ("query", "bool", "should"),
        "functions": ("functions",),
        "ids": ("query", "terms", "_id"),
        "size": ("size",),
        "fields": ("_source",),
        "range": ("query", "bool", "must", "range"),
        "sort": ("sort",),
        "aggs": ("aggs",),
    }
)

# Operations whose body is an ordered sequence of clause fragments.
LIST_OPERATIONS: Final[frozenset[str]] = frozenset(
    {"must", "must_not", "should", "functions", "range", "sort"}
)

EXCLUSIVE_SEGMENTS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "must": "must_not",
        "must_not": "must",
    }
)


def resolve_path(operation: str) -> Path:
    """Return the schema path for an operation name.

    Args:
        operation: One of the names in ``OPERATION_PATHS``.

    Returns:
        Path tuple for the operation.

    Raises:
        UnknownOperationError: If the operation is not in the schema.
    """
    path = OPERATION_PATHS.get(operation)
    if path is None:
        raise UnknownOperationError(f"Unknown operation: {operation}")
    return path


def is_root_path(path: Path) -> bool:
    return len(path) == 1


def is_exclusive_path(path: Path) -> bool:
    return path[-1] in EXCLUSIVE_SEGMENTS


def opposite_path(path: Path) -> Path:
    """Return the path of the mutually exclusive sibling (must <-> must_not)."""
    return path[:-1] + (EXCLUSIVE_SEGMENTS[path[-1]],)


def clause_key(body: Sequence[Any]) -> Any:
    """Return the fragment used for exclusivity and duplicate checks.

    Only the first element of a clause body takes part in the comparison;
    the rest of the body is never inspected.
    """
    return body[0]


def same_clause(left: Any, right: Any) -> bool:
    """Compare two clause fragments as they would serialize.

    Like ``==`` but booleans never match numbers at any depth, so
    ``{"flag": True}`` and ``{"flag": 1}`` are different clauses. Lists and
    tuples with equal items match.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, Mapping) or isinstance(right, Mapping):
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            return False
        return left.keys() == right.keys() and all(same_clause(left[key], right[key]) for key in left)
    if isinstance(left, (list, tuple)) or isinstance(right, (list, tuple)):
        if not (isinstance(left, (list, tuple)) and isinstance(right, (list, tuple))):
            return False
        return len(left) == len(right) and all(same_clause(a, b) for a, b in zip(left, right))
    return left == right


def is_present(value: Any) -> bool:
    """Return whether a clause body carries a value.

    ``None``, empty strings and empty containers are absent. Anything else is
    present when its string form is non-empty, so ``0`` and ``False`` count
    as values.
    """
    if value is None:
        return False
    if isinstance(value, Sized) and not isinstance(value, str):
        return len(value) > 0
    return str(value) != ""
