"""Tests for config loading, default merging and query section parsing."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ElasticQuery.config import build_query, load_config, load_config_with_defaults, parse_config_dict
from ElasticQuery.config.app import merge_config_dicts, parse_yaml


_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

client:
  base_url: http://localhost:9200
  index: users

query:
  score_mode: false
  operations:
    - must:
        - term:
            hidden: false
    - size: 10
"""


def _raw(**overrides) -> dict:
    return merge_config_dicts(parse_yaml(_BASE_YAML), overrides)


class TestConfigOverride(unittest.TestCase):
    def test_override_merges_with_defaults(self) -> None:
        override_yaml = """
log:
  level: debug

client:
  index: users-v2
  timeout: 5

query:
  score_mode: true
  operations:
    - functions:
        - weight: 2
"""
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text(override_yaml, encoding="utf-8")

            cfg = load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)

        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.client.base_url, "http://localhost:9200")
        self.assertEqual(cfg.client.index, "users-v2")
        self.assertEqual(cfg.client.timeout, 5.0)
        self.assertEqual(cfg.client.max_attempts, 4)
        self.assertTrue(cfg.query.score_mode)
        # Lists replace instead of merging.
        self.assertEqual(cfg.query.operations, (("functions", [{"weight": 2}]),))

    def test_empty_override_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text("{}", encoding="utf-8")

            cfg = load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertFalse(cfg.query.score_mode)
        self.assertEqual(len(cfg.query.operations), 2)

    def test_no_override_uses_defaults(self) -> None:
        cfg = load_config_with_defaults(None, _defaults_text=_BASE_YAML)

        self.assertEqual(cfg.client.index, "users")

    def test_load_single_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yml"
            path.write_text(_BASE_YAML, encoding="utf-8")

            cfg = load_config(path)

        self.assertEqual(cfg.query.operations[1], ("size", 10))

    def test_repository_default_config(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")

        document = build_query(cfg.query).to_document()
        self.assertEqual(document["size"], 10)
        self.assertEqual(document["_source"], ["name", "age"])
        self.assertEqual(document["query"]["bool"]["must_not"], [{"term": {"hidden": True}}])


class TestConfigValidation(unittest.TestCase):
    def test_missing_client_section(self) -> None:
        raw = parse_yaml(_BASE_YAML)
        del raw["client"]

        with self.assertRaises(ValueError):
            parse_config_dict(raw)

    def test_invalid_base_url(self) -> None:
        with self.assertRaises(ValueError):
            parse_config_dict(_raw(client={"base_url": "localhost:9200"}))

    def test_invalid_log_level(self) -> None:
        with self.assertRaises(ValueError):
            parse_config_dict(_raw(log={"level": "LOUD"}))

    def test_score_mode_must_be_boolean(self) -> None:
        with self.assertRaises(TypeError):
            parse_config_dict(_raw(query={"score_mode": "yes"}))

    def test_unknown_operation(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            parse_config_dict(_raw(query={"operations": [{"filter": [{"term": {"a": 1}}]}]}))
        self.assertIn("query.operations[0]", str(ctx.exception))

    def test_operation_with_two_keys(self) -> None:
        with self.assertRaises(TypeError):
            parse_config_dict(_raw(query={"operations": [{"size": 1, "sort": []}]}))

    def test_list_operation_needs_list(self) -> None:
        with self.assertRaises(TypeError):
            parse_config_dict(_raw(query={"operations": [{"must": {"term": {"a": 1}}}]}))

    def test_negative_size(self) -> None:
        with self.assertRaises(ValueError):
            parse_config_dict(_raw(query={"operations": [{"size": -1}]}))

    def test_yaml_root_must_be_mapping(self) -> None:
        with self.assertRaises(ValueError):
            parse_yaml("- a\n- b\n")


class TestBuildQuery(unittest.TestCase):
    def test_operations_are_replayed_in_order(self) -> None:
        clause = {"term": {"hidden": True}}
        cfg = parse_config_dict(
            _raw(query={"operations": [{"must_not": [clause]}, {"must": [clause]}, {"size": 3}]})
        )

        document = build_query(cfg.query).to_document()

        self.assertEqual(document["query"]["bool"]["must"], [clause])
        self.assertEqual(document["query"]["bool"]["must_not"], [])
        self.assertEqual(document["size"], 3)

    def test_null_body_is_skipped(self) -> None:
        cfg = parse_config_dict(_raw(query={"operations": [{"must": None}, {"size": 3}]}))

        self.assertEqual(build_query(cfg.query).to_document(), {"size": 3})

    def test_score_mode_and_client_are_passed(self) -> None:
        cfg = parse_config_dict(_raw(query={"score_mode": True}))
        client = object()

        builder = build_query(cfg.query, client=client)  # type: ignore[arg-type]

        self.assertTrue(builder.score_mode)
        self.assertIn("function_score", builder.to_document()["query"])


if __name__ == "__main__":
    unittest.main()
