"""Shared fixtures for Cloudflare KV adapter tests."""

from __future__ import annotations

from dataclasses import replace

import pytest

from kvsync.config.cloudflare import CloudflareKvConfig, build_kv_resilience
from tests.support.http import BASE_URL


@pytest.fixture
def kv_config() -> CloudflareKvConfig:
    resilience = build_kv_resilience(api_token="secret-token", base_url=BASE_URL)
    # Keep the production retry rules but skip the backoff waits.
    resilience = replace(resilience, retry=replace(resilience.retry, backoff_factor=0.0))
    return CloudflareKvConfig(
        account_id="acc-1",
        namespace_id="ns-1",
        api_token="secret-token",
        resilience=resilience,
    )
