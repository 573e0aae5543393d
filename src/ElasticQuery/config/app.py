from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from ElasticQuery.config.client import ClientConfig, check_client, load_client
from ElasticQuery.config.query import QueryConfig, check_query, load_query
from ElasticQuery.config.runtime import RuntimeConfig, check_runtime, load_runtime

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    client: ClientConfig
    query: QueryConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse a merged mapping into AppConfig, validating every section."""
    runtime = load_runtime(raw)
    client = load_client(raw)
    query = load_query(raw)

    check_runtime(runtime)
    check_client(client)
    check_query(query)

    return AppConfig(runtime=runtime, client=client, query=query)


def load_config(path: Path) -> AppConfig:
    """Load a single YAML config file without default merge."""
    return parse_config_dict(parse_yaml(path.read_text(encoding="utf-8")))


def load_config_with_defaults(
    config_path: Path | None,
    default_path: Path = DEFAULT_CONFIG_PATH,
    *,
    _defaults_text: str | None = None,
) -> AppConfig:
    """Load config by deep-merging an optional override onto the defaults.

    Args:
        config_path: Override file; None or the defaults path loads defaults only.
        default_path: Defaults file.
        _defaults_text: Defaults YAML given inline instead of ``default_path``.
    """
    if _defaults_text is None:
        _defaults_text = default_path.read_text(encoding="utf-8")
    base = parse_yaml(_defaults_text)
    if config_path is None or config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings.

    Nested mappings merge key by key; any other override value, lists
    included, replaces the base value.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
