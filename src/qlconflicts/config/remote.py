"""Configuration for the remote conflicts service."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

REMOTE_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class RemoteApiConfig:
    """Holds the base URL and shared password of a deployed conflicts service."""

    base_url: str
    password: str = field(repr=False)
    resilience: ResilienceConfig


def get_remote_api_config(*, resilience: ResilienceConfig | None = None) -> RemoteApiConfig:
    values = require_env_vars(("QLCONFLICTS_API_URL", "QLCONFLICTS_API_PASSWORD"))
    base_url = values["QLCONFLICTS_API_URL"].rstrip("/")
    return RemoteApiConfig(
        base_url=base_url,
        password=values["QLCONFLICTS_API_PASSWORD"],
        resilience=resilience
        or ResilienceConfig(
            name="conflicts-api",
            base_url=base_url,
            timeout_seconds=REMOTE_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            default_headers={"Content-Type": "application/json"},
        ),
    )
