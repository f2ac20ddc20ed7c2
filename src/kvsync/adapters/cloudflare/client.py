"""HTTP adapter for the Cloudflare Workers KV REST API."""

from __future__ import annotations

import asyncio
from functools import partial
from itertools import batched
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from kvsync.adapters.http_resilience import ResilientClient, build_limiter
from kvsync.config.cloudflare import get_cloudflare_kv_config
from kvsync.config.sync import DEFAULT_PAGE_SIZE
from kvsync.domain.errors import RemoteListError, RemoteStoreError, RemoteWriteError
from kvsync.domain.ports import KeyPage, KeyValueStore

from .schema import BulkRecord, KeyListResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from kvsync.config.cloudflare import CloudflareKvConfig
    from kvsync.config.http_resilience import ResilienceConfig
    from kvsync.domain.entries import Entry

log = getLogger(__name__)


def to_bulk_record(entry: Entry) -> BulkRecord:
    if entry.is_delete:
        return BulkRecord(key=entry.name, delete=True)
    return BulkRecord(key=entry.name, value=entry.value)


class CloudflareKvStore:
    """``KeyValueStore`` backed by one Workers KV namespace."""

    def __init__(
        self,
        *,
        config: CloudflareKvConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_cloudflare_kv_config()
        self._resilience = self._config.resilience
        # Shared by every client this store opens.
        self._limiter = build_limiter(self._resilience)
        self._client_factory = client_factory or partial(ResilientClient, limiter=self._limiter)

    @property
    def config(self) -> CloudflareKvConfig:
        return self._config

    def list_keys(self, *, cursor: str | None = None, limit: int = DEFAULT_PAGE_SIZE) -> KeyPage:
        return asyncio.run(self._list_keys_async(cursor=cursor, limit=limit))

    def bulk_write(self, batch: Sequence[Entry]) -> None:
        if not batch:
            return
        asyncio.run(self._bulk_write_async(batch))

    def read_value(self, key: str) -> str | None:
        return asyncio.run(self._read_value_async(key))

    async def _list_keys_async(self, *, cursor: str | None, limit: int) -> KeyPage:
        params: dict[str, str] = {"limit": str(limit)}
        if cursor:
            params["cursor"] = cursor

        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.get(f"{self._config.namespace_path}/keys", params=params)
            except httpx.HTTPError as exc:
                raise RemoteListError(f"Failed to list keys: {exc}") from exc

        if not response.is_success:
            raise RemoteListError(
                f"Failed to list keys ({response.status_code}): {response.text}",
                status=response.status_code,
                body=response.text,
            )

        try:
            payload = KeyListResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise RemoteListError(
                f"Unexpected key listing payload: {exc}",
                status=response.status_code,
                body=response.text,
            ) from exc

        if not payload.success:
            messages = "; ".join(error.message for error in payload.errors) or response.text
            raise RemoteListError(
                f"Key listing reported failure: {messages}",
                status=response.status_code,
                body=response.text,
            )

        info = payload.result_info
        return KeyPage(
            names=tuple(item.name for item in payload.result),
            cursor=info.cursor or None,
            list_complete=info.list_complete,
        )

    async def _bulk_write_async(self, batch: Sequence[Entry]) -> None:
        path = f"{self._config.namespace_path}/bulk"
        chunks = list(batched(batch, self._config.max_bulk_size))
        if len(chunks) > 1:
            log.warning(
                "Bulk batch of %s records split into %s requests; the write is not atomic",
                len(batch),
                len(chunks),
            )

        async with self._client_factory(self._resilience) as client:
            for applied, chunk in enumerate(chunks):
                body = [to_bulk_record(entry).model_dump() for entry in chunk]
                try:
                    response = await client.put(path, json=body)
                except httpx.HTTPError as exc:
                    raise RemoteWriteError(
                        f"Bulk upload failed: {exc}",
                        applied_chunks=applied,
                    ) from exc
                if not response.is_success:
                    raise RemoteWriteError(
                        f"Bulk upload failed ({response.status_code}): {response.text}",
                        status=response.status_code,
                        body=response.text,
                        applied_chunks=applied,
                    )
                log.debug(
                    "Bulk request %s/%s accepted %s records",
                    applied + 1,
                    len(chunks),
                    len(chunk),
                )

        log.info("Bulk upload applied %s records", len(batch))

    async def _read_value_async(self, key: str) -> str | None:
        path = f"{self._config.namespace_path}/values/{quote(key, safe='')}"
        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.get(path)
            except httpx.HTTPError as exc:
                raise RemoteStoreError(f"Failed to read {key}: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        if not response.is_success:
            raise RemoteStoreError(
                f"Failed to read {key} ({response.status_code}): {response.text}",
                status=response.status_code,
                body=response.text,
            )
        return response.text


if TYPE_CHECKING:
    _store_check: KeyValueStore = CloudflareKvStore()
