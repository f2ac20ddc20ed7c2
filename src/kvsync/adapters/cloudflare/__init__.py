"""Public interface for the Cloudflare Workers KV adapter."""

from __future__ import annotations

from .client import CloudflareKvStore, to_bulk_record
from .schema import BulkRecord, KeyListResponse, KeyListResultInfo, KeyName

__all__ = [
    "BulkRecord",
    "CloudflareKvStore",
    "KeyListResponse",
    "KeyListResultInfo",
    "KeyName",
    "to_bulk_record",
]
