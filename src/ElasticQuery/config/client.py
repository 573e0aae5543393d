"""Search client configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlparse

from ElasticQuery.config.common import (
    expect_bool,
    expect_float,
    expect_int,
    expect_optional_str,
    expect_str,
    get_required_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Validated ``client`` section.

    Attributes:
        base_url: Cluster URL.
        index: Index, alias or comma-separated index list to search.
        timeout: Request timeout in seconds.
        max_attempts: Attempts per search request, including the first.
        api_key_env: Name of the environment variable holding the API key.
            The key itself is never stored in config files.
        verify_tls: Verify server certificates.
    """

    base_url: str
    index: str
    timeout: float
    max_attempts: int
    api_key_env: str | None
    verify_tls: bool


def load_client(raw: Mapping[str, Any]) -> ClientConfig:
    """Load the ``client`` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "client", required=True)
    return ClientConfig(
        base_url=expect_str(get_required_value(section, "base_url", "client.base_url"), "client.base_url").strip(),
        index=expect_str(get_required_value(section, "index", "client.index"), "client.index").strip(),
        timeout=expect_float(section.get("timeout", 30.0), "client.timeout"),
        max_attempts=expect_int(section.get("max_attempts", 4), "client.max_attempts"),
        api_key_env=expect_optional_str(section.get("api_key_env"), "client.api_key_env"),
        verify_tls=expect_bool(section.get("verify_tls", True), "client.verify_tls"),
    )


def check_client(config: ClientConfig) -> None:
    """Validate client constraints.

    Raises:
        ValueError: If values violate client constraints.
    """
    parsed = urlparse(config.base_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("client.base_url must be an http(s) URL")
    if not config.index:
        raise ValueError("client.index must not be empty")
    if config.timeout <= 0:
        raise ValueError("client.timeout must be positive")
    if config.max_attempts <= 0:
        raise ValueError("client.max_attempts must be positive")
