from __future__ import annotations

"""Public configuration API for ElasticQuery."""

from ElasticQuery.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from ElasticQuery.config.client import ClientConfig
from ElasticQuery.config.query import QueryConfig, build_query
from ElasticQuery.config.runtime import RuntimeConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "ClientConfig",
    "QueryConfig",
    "RuntimeConfig",
    "build_query",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
