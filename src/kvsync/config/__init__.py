"""Application configuration helpers."""

from __future__ import annotations

from .cloudflare import (
    CLOUDFLARE_API_BASE_URL,
    MAX_BULK_SIZE,
    CloudflareKvConfig,
    build_kv_resilience,
    get_cloudflare_kv_config,
)
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .sync import SyncConfig, get_sync_config

__all__ = [
    "CLOUDFLARE_API_BASE_URL",
    "MAX_BULK_SIZE",
    "CloudflareKvConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SyncConfig",
    "build_kv_resilience",
    "configure_logging",
    "get_cloudflare_kv_config",
    "get_sync_config",
    "optional_env_var",
    "require_env_vars",
]
