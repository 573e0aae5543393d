"""Search backend clients for ElasticQuery.

Provides the HTTP client that executes built documents and a factory that
creates it from configuration.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ElasticQuery.client.http import ElasticsearchClient
from ElasticQuery.client.models import SearchHit, SearchResults, parse_search_response
from ElasticQuery.core.errors import ConfigurationError

if TYPE_CHECKING:
    from ElasticQuery.config import ClientConfig


def create_search_client(config: ClientConfig) -> ElasticsearchClient:
    """Create an HTTP search client from client configuration.

    Args:
        config: Parsed ``client`` section.

    Returns:
        Configured ElasticsearchClient instance.

    Raises:
        ConfigurationError: If ``api_key_env`` is set but the variable is empty.
    """
    api_key = None
    if config.api_key_env:
        api_key = os.getenv(config.api_key_env, "").strip()
        if not api_key:
            raise ConfigurationError(f"Environment variable {config.api_key_env} is not set")

    return ElasticsearchClient(
        base_url=config.base_url,
        index=config.index,
        api_key=api_key,
        timeout=config.timeout,
        max_attempts=config.max_attempts,
        verify_tls=config.verify_tls,
    )


__all__ = [
    "ElasticsearchClient",
    "SearchHit",
    "SearchResults",
    "create_search_client",
    "parse_search_response",
]
