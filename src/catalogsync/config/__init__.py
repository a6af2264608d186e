"""Application configuration helpers."""

from __future__ import annotations

from .cache import CacheConfig, PurgeConfig, get_cache_config
from .env import env_flag, env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .forge import ForgeConfig, get_forge_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .rubygems import RubyGemsConfig, get_rubygems_config
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_database_uri,
    get_storage_config,
)

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "ForgeConfig",
    "MissingConfigurationError",
    "PurgeConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "RubyGemsConfig",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "env_int",
    "get_cache_config",
    "get_database_config",
    "get_database_uri",
    "get_forge_config",
    "get_rubygems_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
