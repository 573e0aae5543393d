"""Query configuration: builder operations declared in YAML.

Example::

    query:
      score_mode: false
      operations:
        - must:
            - range: {last_activity_at: {gte: 3}}
        - must_not:
            - term: {hidden: true}
        - size: 10
        - fields: [name, age]

Operations are replayed onto a ``QueryBuilder`` in file order, so the same
name may appear more than once (e.g. to move a clause from ``must_not`` to
``must``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

from ElasticQuery.config.common import expect_bool, get_section
from ElasticQuery.core.builder import QueryBuilder
from ElasticQuery.core.schema import LIST_OPERATIONS, OPERATION_PATHS

if TYPE_CHECKING:
    from ElasticQuery.core.builder import SearchClient


@dataclass(frozen=True, slots=True)
class QueryConfig:
    """Validated ``query`` section."""

    score_mode: bool
    operations: tuple[tuple[str, Any], ...]


def load_query(raw: Mapping[str, Any]) -> QueryConfig:
    """Load the ``query`` section.

    Raises:
        TypeError: If the section or an operation has the wrong shape.
        ValueError: If an operation name is unknown.
    """
    section = get_section(raw, "query", required=True)
    score_mode = expect_bool(section.get("score_mode", False), "query.score_mode")

    items = section.get("operations")
    if items is None:
        items = []
    if not isinstance(items, list):
        raise TypeError("query.operations must be a list")

    operations = tuple(_parse_operation(item, f"query.operations[{idx}]") for idx, item in enumerate(items))
    return QueryConfig(score_mode=score_mode, operations=operations)


def check_query(config: QueryConfig) -> None:
    """Validate query constraints.

    Raises:
        ValueError: If ``size`` is configured with a negative value.
    """
    for name, body in config.operations:
        if name == "size" and isinstance(body, int) and not isinstance(body, bool) and body < 0:
            raise ValueError("query size must not be negative")


def build_query(config: QueryConfig, *, client: SearchClient | None = None) -> QueryBuilder:
    """Replay configured operations onto a new builder.

    Args:
        config: Parsed ``query`` section.
        client: Optional backend for ``QueryBuilder.results()``.

    Returns:
        Builder holding the configured document.
    """
    builder = QueryBuilder(score_mode=config.score_mode, client=client)
    for name, body in config.operations:
        builder.apply(name, body)
    return builder


def _parse_operation(value: Any, config_key: str) -> tuple[str, Any]:
    """Parse one ``{name: body}`` entry."""
    if not isinstance(value, Mapping) or len(value) != 1:
        raise TypeError(f"{config_key} must be an object with exactly one operation")

    ((name, body),) = value.items()
    if not isinstance(name, str):
        raise TypeError(f"{config_key} operation name must be a string")
    name = name.strip()
    if name not in OPERATION_PATHS:
        raise ValueError(f"{config_key} has unknown operation: {name} (expected one of {list(OPERATION_PATHS)})")
    if name in LIST_OPERATIONS and body is not None and not isinstance(body, list):
        raise TypeError(f"{config_key}.{name} must be a list")
    return name, body
