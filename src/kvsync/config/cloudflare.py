"""Cloudflare Workers KV configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

CLOUDFLARE_API_BASE_URL = "https://api.cloudflare.com/client/v4/"
CLOUDFLARE_TIMEOUT_SECONDS = 30.0
# Service limit for key/value pairs accepted by one bulk request.
MAX_BULK_SIZE = 10_000


@dataclass(frozen=True, slots=True)
class CloudflareKvConfig:
    """Holds the identifiers and credentials of one KV namespace."""

    account_id: str
    namespace_id: str
    api_token: str
    resilience: ResilienceConfig
    max_bulk_size: int = MAX_BULK_SIZE

    @property
    def namespace_path(self) -> str:
        return f"accounts/{self.account_id}/storage/kv/namespaces/{self.namespace_id}"


def build_kv_resilience(
    *,
    api_token: str,
    base_url: str = CLOUDFLARE_API_BASE_URL,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="cloudflare-kv",
        base_url=base_url,
        timeout_seconds=CLOUDFLARE_TIMEOUT_SECONDS,
        retry=RetryPolicy(),
        ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
        default_headers={"Authorization": f"Bearer {api_token}"},
    )


def get_cloudflare_kv_config(*, resilience: ResilienceConfig | None = None) -> CloudflareKvConfig:
    values = require_env_vars(("CF_ACCOUNT_ID", "CF_KV_NAMESPACE_ID", "CF_API_TOKEN"))
    api_token = values["CF_API_TOKEN"]
    base_url = optional_env_var("CF_API_BASE_URL", CLOUDFLARE_API_BASE_URL)
    return CloudflareKvConfig(
        account_id=values["CF_ACCOUNT_ID"],
        namespace_id=values["CF_KV_NAMESPACE_ID"],
        api_token=api_token,
        resilience=resilience or build_kv_resilience(api_token=api_token, base_url=base_url),
    )
