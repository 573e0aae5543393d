"""CLI tests for the build and search commands."""

from __future__ import annotations

import json
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ElasticQuery.cli import cli
from ElasticQuery.cli.commands import SearchCommand
from ElasticQuery.client.http import ElasticsearchClient
from ElasticQuery.client.models import SearchHit, SearchResults
from ElasticQuery.config import load_config
from ElasticQuery.core.errors import SearchRequestError


_DEFAULTS_YAML = """
log:
  level: WARNING
  to_file: false
  dir: log

client:
  base_url: http://localhost:9200
  index: users

query:
  score_mode: false
  operations:
    - must:
        - range:
            last_activity_at:
              gte: 3
    - must_not:
        - term:
            hidden: true
    - size: 10
    - fields: [name, age]
"""

_OVERRIDE_YAML = """
query:
  score_mode: true
  operations:
    - functions:
        - weight: 1
"""


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.defaults = Path(self._tmp.name) / "default.yml"
        self.defaults.write_text(_DEFAULTS_YAML, encoding="utf-8")
        self.runner = CliRunner()

    def test_build_prints_document(self) -> None:
        result = self.runner.invoke(cli, ["--defaults", str(self.defaults), "build", "--compact"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            json.loads(result.output),
            {
                "query": {
                    "bool": {
                        "must": [{"range": {"last_activity_at": {"gte": 3}}}],
                        "must_not": [{"term": {"hidden": True}}],
                    }
                },
                "size": 10,
                "_source": ["name", "age"],
            },
        )

    def test_build_with_override(self) -> None:
        override = Path(self._tmp.name) / "override.yml"
        override.write_text(_OVERRIDE_YAML, encoding="utf-8")

        result = self.runner.invoke(
            cli, ["--defaults", str(self.defaults), "--config", str(override), "build"]
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), {"query": {"function_score": {"functions": [{"weight": 1}]}}})

    def test_search_prints_hits(self) -> None:
        results = SearchResults(
            total=1,
            took=2,
            hits=(SearchHit(id="42", index="users", score=1.0, source={"name": "Ann"}),),
        )
        with patch("ElasticQuery.client.http.ElasticsearchClient.search", return_value=results) as search:
            result = self.runner.invoke(cli, ["--defaults", str(self.defaults), "search"])

        self.assertEqual(result.exit_code, 0, result.output)
        search.assert_called_once()
        sent = search.call_args.args[0]
        self.assertEqual(sent["size"], 10)
        self.assertEqual(json.loads(result.output.strip()), {"_id": "42", "_score": 1.0, "_source": {"name": "Ann"}})

    def test_search_failure_aborts(self) -> None:
        with patch(
            "ElasticQuery.client.http.ElasticsearchClient.search",
            side_effect=SearchRequestError("connection refused"),
        ):
            result = self.runner.invoke(cli, ["--defaults", str(self.defaults), "search"])

        self.assertEqual(result.exit_code, 1)

    def test_invalid_config_fails(self) -> None:
        bad = Path(self._tmp.name) / "bad.yml"
        bad.write_text("query:\n  operations:\n    - filter: []\n", encoding="utf-8")

        result = self.runner.invoke(cli, ["--defaults", str(self.defaults), "--config", str(bad), "build"])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIsInstance(result.exception, ValueError)


class TestSearchCommand(unittest.TestCase):
    def test_execute_returns_parsed_results(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yml"
            path.write_text(_DEFAULTS_YAML, encoding="utf-8")
            config = load_config(path)

        results = SearchResults(
            total=3,
            took=1,
            hits=(SearchHit(id="7", index="users", score=None, source={"name": "Bob"}),),
            aggregations={"by_gender": {"buckets": []}},
        )
        lines: list[str] = []
        with ElasticsearchClient(base_url="http://localhost:9200", index="users") as client:
            with patch.object(ElasticsearchClient, "search", return_value=results):
                returned = SearchCommand(config=config, client=client, echo=lines.append).execute()

        self.assertIs(returned, results)
        self.assertEqual(json.loads(lines[0]), {"_id": "7", "_score": None, "_source": {"name": "Bob"}})
        self.assertEqual(json.loads(lines[1]), {"aggregations": {"by_gender": {"buckets": []}}})


if __name__ == "__main__":
    unittest.main()
