"""Fluent builder for search query documents.

Every operation in ``OPERATION_PATHS`` becomes a chainable method on
``QueryBuilder``. All of them run through the same steps:

1. An absent body (``None``, empty string or empty container) is a no-op.
2. The schema path is resolved and, in score mode, rewritten under
   ``query.function_score``.
3. Missing intermediate mappings along the path are created.
4. For ``must``/``must_not`` the incoming clause is removed from the opposite
   side, and skipped when it is already present on its own side.
5. The body is inserted: sequences accumulate (newest first), anything else
   overwrites.
"""

from __future__ import annotations

from copy import deepcopy
import json
from typing import Any, Callable, Mapping, Protocol

from ElasticQuery.core.errors import ConfigurationError, InvalidClauseError, PathConflictError
from ElasticQuery.core.schema import (
    LIST_OPERATIONS,
    OPERATION_PATHS,
    Path,
    clause_key,
    is_exclusive_path,
    is_present,
    is_root_path,
    opposite_path,
    resolve_path,
    same_clause,
)
from ElasticQuery.core.score_mode import rewrite_path
from ElasticQuery.utils.log import log


class SearchClient(Protocol):
    """Protocol for the backend that executes a built document."""

    def search(self, document: Mapping[str, Any]) -> Any:
        """Execute a search document and return its results."""
        raise NotImplementedError


class QueryBuilder:
    """Accumulate a search document through chainable operations.

    Example:
        >>> QueryBuilder().must([{"term": {"hidden": False}}]).size(10).to_document()
        {'query': {'bool': {'must': [{'term': {'hidden': False}}]}}, 'size': 10}
    """

    def __init__(
        self,
        document: Mapping[str, Any] | None = None,
        *,
        score_mode: bool = False,
        client: SearchClient | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            document: Initial document. It is copied; the caller's mapping is
                never modified.
            score_mode: Nest query clauses and functions under
                ``query.function_score``.
            client: Backend used by ``results()``.
        """
        self._document: dict[str, Any] = deepcopy(dict(document)) if document else {}
        self._score_mode = bool(score_mode)
        self._client = client

    @property
    def score_mode(self) -> bool:
        """Whether function-score mode was requested at construction."""
        return self._score_mode

    def apply(self, operation: str, body: Any) -> QueryBuilder:
        """Apply an operation by name.

        Args:
            operation: Operation name from ``OPERATION_PATHS``.
            body: Clause body for the operation.

        Returns:
            The builder itself.

        Raises:
            UnknownOperationError: If ``operation`` is not in the schema.
            InvalidClauseError: If a list-valued operation receives a
                non-sequence body.
            PathConflictError: If an existing non-mapping value sits on the
                operation's path.
        """
        path = resolve_path(operation)
        if not is_present(body):
            return self

        list_valued = operation in LIST_OPERATIONS
        if list_valued and not _is_sequence(body):
            raise InvalidClauseError(
                f"{operation} expects a list of clauses, got {type(body).__name__}"
            )

        path = rewrite_path(path, score_mode=self._score_mode)
        accumulate = _is_sequence(body) and (list_valued or not is_root_path(path))
        self._check_path(path, accumulate=accumulate)

        parent = self._init_path(path)
        if is_exclusive_path(path):
            self._exclude_opposite(path, body)
            if self._added(path, body):
                log.debug("Skip duplicate %s clause at %s", operation, _dotted(path))
                return self

        key = path[-1]
        if accumulate:
            existing = parent.get(key) or []
            parent[key] = deepcopy(list(body)) + existing
        else:
            parent[key] = deepcopy(body)
        log.debug("Applied %s at %s", operation, _dotted(path))
        return self

    def to_document(self) -> dict[str, Any]:
        """Return a copy of the built document."""
        return deepcopy(self._document)

    def to_json(self, **kwargs: Any) -> str:
        """Return the built document encoded as JSON.

        Args:
            **kwargs: Passed through to ``json.dumps``.
        """
        return json.dumps(self._document, **kwargs)

    def results(self) -> Any:
        """Execute the document with the configured client.

        Returns:
            Whatever the client's ``search`` returns.

        Raises:
            ConfigurationError: If the builder was created without a client.
        """
        if self._client is None:
            raise ConfigurationError("client must be set in order to fetch results")
        return self._client.search(self.to_document())

    def _check_path(self, path: Path, *, accumulate: bool) -> None:
        """Fail before any mutation when the path is blocked by a non-mapping."""
        node: Any = self._document
        for depth, key in enumerate(path[:-1], start=1):
            node = node.get(key)
            if node is None:
                return
            if not isinstance(node, dict):
                raise PathConflictError(
                    f"{_dotted(path[:depth])} holds {type(node).__name__}, cannot nest {_dotted(path)}"
                )
        existing = node.get(path[-1])
        if accumulate and existing is not None and not isinstance(existing, list):
            raise PathConflictError(
                f"{_dotted(path)} holds {type(existing).__name__}, cannot append clauses"
            )

    def _init_path(self, path: Path) -> dict[str, Any]:
        """Return the parent mapping of ``path``, creating missing levels."""
        node = self._document
        for key in path[:-1]:
            child = node.get(key)
            if child is None:
                child = {}
                node[key] = child
            node = child
        return node

    def _exclude_opposite(self, path: Path, body: Any) -> None:
        """Drop the incoming clause from the opposite exclusive list."""
        opposite = opposite_path(path)
        parent = self._init_path(path)
        opposite_clauses = parent.get(opposite[-1])
        if not isinstance(opposite_clauses, list):
            return
        key = clause_key(body)
        kept = [item for item in opposite_clauses if not same_clause(item, key)]
        if len(kept) != len(opposite_clauses):
            log.debug("Moved clause from %s to %s", _dotted(opposite), _dotted(path))
        parent[opposite[-1]] = kept

    def _added(self, path: Path, body: Any) -> bool:
        clauses = self._init_path(path).get(path[-1])
        if not isinstance(clauses, list):
            return False
        key = clause_key(body)
        return any(same_clause(item, key) for item in clauses)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _dotted(path: Path) -> str:
    return ".".join(path)


def _make_operation(name: str) -> Callable[..., QueryBuilder]:
    def operation(self: QueryBuilder, body: Any = None) -> QueryBuilder:
        return self.apply(name, body)

    operation.__name__ = name
    operation.__qualname__ = f"QueryBuilder.{name}"
    operation.__doc__ = f"Add a ``{name}`` body at ``{_dotted(OPERATION_PATHS[name])}``."
    return operation


for _name in OPERATION_PATHS:
    setattr(QueryBuilder, _name, _make_operation(_name))
del _name
