"""RubyGems configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from catalogsync import __version__

from .env import env_flag, optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_RUBYGEMS_BASE_URL = "https://rubygems.org"
RUBYGEMS_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True, slots=True)
class RubyGemsConfig:
    """Holds settings for reading the RubyGems compact index."""

    resilience: ResilienceConfig
    include_prerelease: bool = False


def get_rubygems_config(*, resilience: ResilienceConfig | None = None) -> RubyGemsConfig:
    base_url = optional_env_var("RUBYGEMS_BASE_URL") or DEFAULT_RUBYGEMS_BASE_URL
    return RubyGemsConfig(
        include_prerelease=env_flag("RUBYGEMS_INCLUDE_PRERELEASE"),
        resilience=resilience
        or ResilienceConfig(
            name="rubygems",
            base_url=base_url,
            timeout_seconds=RUBYGEMS_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
            default_headers={"User-Agent": f"catalogsync/{__version__}"},
        ),
    )
