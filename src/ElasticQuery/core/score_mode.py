"""Function-score path rewriting.

When a builder runs in score mode, clauses that belong to the query
(``query.*``) and the scoring functions (``functions``) are nested one level
deeper, under ``query.function_score``. Root sections such as ``size``,
``_source``, ``sort`` and ``aggs`` keep their location.
"""

from __future__ import annotations

from typing import Final

from ElasticQuery.core.schema import Path

FUNCTION_SCORE_PREFIX: Final[Path] = ("query", "function_score")

_REDIRECTED_ROOTS: Final[frozenset[str]] = frozenset({"functions", "query"})


def rewrite_path(path: Path, *, score_mode: bool) -> Path:
    """Rewrite a schema path for the active score mode.

    Args:
        path: Path resolved from the schema.
        score_mode: Whether function-score mode is active.

    Returns:
        The path prefixed with ``query.function_score`` when score mode is on
        and the path starts at ``functions`` or ``query``; otherwise the path
        unchanged.
    """
    if score_mode and path[0] in _REDIRECTED_ROOTS:
        return FUNCTION_SCORE_PREFIX + path
    return path
