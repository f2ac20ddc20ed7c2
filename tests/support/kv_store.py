"""Reusable in-memory fake of the remote key-value store port."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kvsync.domain.errors import RemoteListError, RemoteWriteError
from kvsync.domain.ports import KeyPage, KeyValueStore

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from kvsync.domain.entries import Entry


class FakeKeyValueStore:
    """Dict-backed store that pages its listing and records every call."""

    def __init__(
        self,
        records: Mapping[str, str] | None = None,
        *,
        page_size: int | None = None,
        fail_listing_at_page: int | None = None,
        fail_writes: bool = False,
    ) -> None:
        self.records: dict[str, str] = dict(records or {})
        self.page_size = page_size
        self.fail_listing_at_page = fail_listing_at_page
        self.fail_writes = fail_writes
        self.list_calls: list[tuple[str | None, int]] = []
        self.write_calls: list[list[Entry]] = []

    def list_keys(self, *, cursor: str | None = None, limit: int = 1000) -> KeyPage:
        self.list_calls.append((cursor, limit))
        if self.fail_listing_at_page == len(self.list_calls):
            raise RemoteListError("listing failed", status=500, body="upstream exploded")

        names = list(self.records)
        size = self.page_size or limit
        start = int(cursor) if cursor else 0
        end = start + size
        page_names = tuple(names[start:end])
        if end >= len(names):
            return KeyPage(names=page_names, cursor=None, list_complete=True)
        return KeyPage(names=page_names, cursor=str(end), list_complete=False)

    def bulk_write(self, batch: Sequence[Entry]) -> None:
        self.write_calls.append(list(batch))
        if self.fail_writes:
            raise RemoteWriteError("write failed", status=400, body="bad batch")
        for entry in batch:
            if entry.is_delete:
                self.records.pop(entry.name, None)
            else:
                assert entry.value is not None
                self.records[entry.name] = entry.value

    def read_value(self, key: str) -> str | None:
        return self.records.get(key)


class ScriptedKeyValueStore(FakeKeyValueStore):
    """Store whose listing replays a fixed sequence of pages."""

    def __init__(self, pages: Sequence[KeyPage]) -> None:
        super().__init__()
        self._pages = list(pages)

    def list_keys(self, *, cursor: str | None = None, limit: int = 1000) -> KeyPage:
        self.list_calls.append((cursor, limit))
        if not self._pages:
            raise AssertionError("listing requested more pages than scripted")
        return self._pages.pop(0)


if TYPE_CHECKING:
    _store_check: KeyValueStore = FakeKeyValueStore()
