from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence


@dataclass(frozen=True, slots=True)
class SearchHit:
    """One document matched by a search.

    Attributes:
        id: Document ``_id``.
        index: Index the document lives in.
        score: Relevance score; None when sorting disables scoring.
        source: The ``_source`` payload (possibly filtered by ``fields``).
        sort: Sort values returned for the hit.
    """

    id: str
    index: str
    score: Optional[float]
    source: Mapping[str, Any] = field(default_factory=dict)
    sort: Sequence[Any] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "source", MappingProxyType(dict(self.source)))


@dataclass(frozen=True, slots=True)
class SearchResults:
    """Parsed search response.

    Attributes:
        total: Total number of matching documents reported by the backend.
        took: Backend processing time in milliseconds.
        hits: Returned hits, in backend order.
        aggregations: Raw ``aggregations`` section, if requested with ``aggs``.
    """

    total: int
    took: int
    hits: tuple[SearchHit, ...] = ()
    aggregations: Mapping[str, Any] = field(default_factory=dict)

    @property
    def results(self) -> list[Mapping[str, Any]]:
        """Return the ``_source`` of every hit."""
        return [hit.source for hit in self.hits]

    def __len__(self) -> int:
        return len(self.hits)


def parse_search_response(payload: Any) -> SearchResults:
    """Build ``SearchResults`` from a decoded ``_search`` response body.

    Missing or malformed sections are treated as empty.
    """
    body = payload if isinstance(payload, Mapping) else {}
    hits_section = body.get("hits", {})
    if not isinstance(hits_section, Mapping):
        hits_section = {}

    raw_hits = hits_section.get("hits", [])
    hits = tuple(_parse_hit(item) for item in raw_hits if isinstance(item, Mapping)) if isinstance(raw_hits, list) else ()

    aggregations = body.get("aggregations", {})
    return SearchResults(
        total=_parse_total(hits_section.get("total")),
        took=_parse_took(body.get("took")),
        hits=hits,
        aggregations=aggregations if isinstance(aggregations, Mapping) else {},
    )


def _parse_hit(item: Mapping[str, Any]) -> SearchHit:
    score = item.get("_score")
    source = item.get("_source")
    sort = item.get("sort")
    return SearchHit(
        id=str(item.get("_id", "")),
        index=str(item.get("_index", "")),
        score=float(score) if isinstance(score, (int, float)) else None,
        source=source if isinstance(source, Mapping) else {},
        sort=tuple(sort) if isinstance(sort, list) else (),
    )


def _parse_total(value: Any) -> int:
    """Read ``hits.total`` in both the 6.x (int) and 7.x+ (object) shapes."""
    if isinstance(value, Mapping):
        value = value.get("value")
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


def _parse_took(value: Any) -> int:
    """Read ``took`` milliseconds; anything but a number counts as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)
