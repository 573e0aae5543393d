"""Elasticsearch HTTP client."""

from __future__ import annotations

import random
import time
from typing import Any, Mapping

import requests

from ElasticQuery.client.models import SearchResults, parse_search_response
from ElasticQuery.core.errors import SearchRequestError
from ElasticQuery.utils.log import log

DEFAULT_TIMEOUT = 30.0
MAX_ATTEMPTS = 4
BASE_PAUSE = 0.8
MAX_SLEEP = 8.0
RETRYABLE_STATUS = {429, 500, 502, 503, 504}

HEADERS = {
    "User-Agent": "elasticquery/0.1",
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class ElasticsearchClient:
    """Execute search documents against one index of an Elasticsearch cluster."""

    def __init__(
        self,
        *,
        base_url: str,
        index: str,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = MAX_ATTEMPTS,
        verify_tls: bool = True,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Cluster URL, e.g. ``http://localhost:9200``.
            index: Index (or comma-separated indices / alias) to search.
            api_key: Encoded API key sent as ``Authorization: ApiKey``.
            timeout: Request timeout in seconds.
            max_attempts: Attempts per request, including the first one.
            verify_tls: Verify server certificates.
            session: Pre-built session, used as given; ``verify_tls`` only
                applies to a session the client creates.
        """
        self.base_url = base_url.rstrip("/")
        self.index = index.strip("/")
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        if session is None:
            session = requests.Session()
            session.verify = verify_tls
        self._session = session
        self._headers = dict(HEADERS)
        if api_key:
            self._headers["Authorization"] = f"ApiKey {api_key}"

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/{self.index}/_search"

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> ElasticsearchClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def search(self, document: Mapping[str, Any]) -> SearchResults:
        """Run a search document.

        Args:
            document: Query document, typically ``QueryBuilder.to_document()``.

        Returns:
            Parsed search results.

        Raises:
            SearchRequestError: If the request fails or the body is not JSON.
        """
        try:
            response = self._post_with_retry(document)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as error:
            raise SearchRequestError(f"Search request to {self.search_url} failed: {error}") from error

        results = parse_search_response(payload)
        log.info("Search completed: index=%s total=%d hits=%d took=%dms", self.index, results.total, len(results), results.took)
        return results

    def _post_with_retry(self, document: Mapping[str, Any]) -> requests.Response:
        """Issue POST with retries for transient failures."""
        last_error: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                response = self._session.post(
                    self.search_url,
                    json=document,
                    headers=self._headers,
                    timeout=self.timeout,
                )
                if response.status_code in RETRYABLE_STATUS:
                    raise requests.HTTPError(f"HTTP {response.status_code}", response=response)
                return response
            except (requests.Timeout, requests.ConnectionError, requests.HTTPError) as error:
                last_error = error
                if isinstance(error, requests.HTTPError):
                    status_code = getattr(error.response, "status_code", None)
                    if status_code not in RETRYABLE_STATUS:
                        raise
                if attempt < self.max_attempts:
                    delay = min(BASE_PAUSE * (2 ** (attempt - 1)) + random.uniform(0, 0.3), MAX_SLEEP)
                    log.debug("Search retry attempt=%d/%d delay=%.2fs error=%s", attempt, self.max_attempts, delay, error)
                    time.sleep(delay)

        assert last_error is not None
        raise last_error
