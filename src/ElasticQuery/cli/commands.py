"""Command implementations for the ElasticQuery CLI.

Holds the logic of ``build`` and ``search``, separate from Click parameter
handling so both can be driven directly in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Callable

from ElasticQuery.client.http import ElasticsearchClient
from ElasticQuery.client.models import SearchResults
from ElasticQuery.config import AppConfig, build_query
from ElasticQuery.utils.log import log


@dataclass(slots=True)
class BuildCommand:
    """Build the configured document and emit it as JSON."""

    config: AppConfig
    echo: Callable[[str], None]
    indent: int | None = 2

    def execute(self) -> None:
        builder = build_query(self.config.query)
        log.debug("Built document with %d operations score_mode=%s", len(self.config.query.operations), builder.score_mode)
        self.echo(builder.to_json(indent=self.indent, ensure_ascii=False))


@dataclass(slots=True)
class SearchCommand:
    """Build the configured document, execute it and emit one line per hit."""

    config: AppConfig
    client: ElasticsearchClient
    echo: Callable[[str], None]

    def execute(self) -> SearchResults:
        builder = build_query(self.config.query, client=self.client)
        log.info("Searching index=%s score_mode=%s", self.config.client.index, builder.score_mode)
        results = builder.results()
        log.info("Matched %d documents, returned %d", results.total, len(results))

        for hit in results.hits:
            self.echo(json.dumps({"_id": hit.id, "_score": hit.score, "_source": dict(hit.source)}, ensure_ascii=False))
        if results.aggregations:
            self.echo(json.dumps({"aggregations": dict(results.aggregations)}, ensure_ascii=False))
        return results
