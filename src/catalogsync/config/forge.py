"""Puppet Forge configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from catalogsync import __version__

from .env import env_int, optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_FORGE_BASE_URL = "https://forgeapi.puppet.com"
DEFAULT_FORGE_PAGE_SIZE = 100
MAX_FORGE_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class ForgeConfig:
    resilience: ResilienceConfig
    page_size: int = DEFAULT_FORGE_PAGE_SIZE


def get_forge_config(*, resilience: ResilienceConfig | None = None) -> ForgeConfig:
    base_url = optional_env_var("FORGE_BASE_URL") or DEFAULT_FORGE_BASE_URL
    page_size = min(
        env_int("FORGE_PAGE_SIZE", default=DEFAULT_FORGE_PAGE_SIZE),
        MAX_FORGE_PAGE_SIZE,
    )
    return ForgeConfig(
        page_size=page_size,
        resilience=resilience
        or ResilienceConfig(
            name="forge",
            base_url=base_url,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            retry=RetryPolicy(total=4),
            default_headers={"User-Agent": f"catalogsync/{__version__}"},
        ),
    )
