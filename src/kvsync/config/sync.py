"""Synchronization defaults for reconciliation runs."""

from __future__ import annotations

from dataclasses import dataclass

# Largest page the KV listing endpoint returns.
DEFAULT_PAGE_SIZE = 1000
DEFAULT_DEBOUNCE_SECONDS = 0.3
DEFAULT_POLL_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class SyncConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    poll_seconds: float = DEFAULT_POLL_SECONDS


def get_sync_config() -> SyncConfig:
    return SyncConfig()
