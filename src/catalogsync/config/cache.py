"""Cache invalidation configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .env import optional_env_var, require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy


@dataclass(frozen=True, slots=True)
class PurgeConfig:
    """Endpoint accepting ``{"files": [...]}`` purge requests."""

    purge_url: str
    public_url: str
    token: str | None
    resilience: ResilienceConfig


@dataclass(frozen=True, slots=True)
class CacheConfig:
    cache_dir: Path | None = None
    purge: PurgeConfig | None = None


def get_cache_config() -> CacheConfig:
    cache_dir = optional_env_var("CATALOGSYNC_CACHE_DIR")
    purge_url = optional_env_var("CATALOGSYNC_PURGE_URL")

    purge: PurgeConfig | None = None
    if purge_url is not None:
        values = require_env_vars(("CATALOGSYNC_PUBLIC_URL",))
        purge = PurgeConfig(
            purge_url=purge_url,
            public_url=values["CATALOGSYNC_PUBLIC_URL"].strip().rstrip("/"),
            token=optional_env_var("CATALOGSYNC_PURGE_TOKEN"),
            resilience=ResilienceConfig(
                name="cache-purge",
                timeout_seconds=15.0,
                retry=RetryPolicy(total=2),
            ),
        )

    return CacheConfig(
        cache_dir=Path(cache_dir).expanduser() if cache_dir else None,
        purge=purge,
    )
