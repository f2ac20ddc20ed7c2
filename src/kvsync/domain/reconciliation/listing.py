"""Exhaustive walk of the remote key listing."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from kvsync.config.sync import DEFAULT_PAGE_SIZE
from kvsync.domain.errors import RemoteListError

if TYPE_CHECKING:
    from kvsync.domain.ports import KeyValueStore

log = getLogger(__name__)


def list_remote_keys(
    store: KeyValueStore,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> tuple[str, ...]:
    """Return every key currently stored remotely, in listing order.

    Errors from any page propagate unchanged; a partial key set is never
    returned because it would leave stale records undeleted.
    """

    keys: dict[str, None] = {}
    seen_cursors: set[str] = set()
    cursor: str | None = None
    pages = 0
    while True:
        page = store.list_keys(cursor=cursor, limit=page_size)
        pages += 1
        keys.update(dict.fromkeys(page.names))
        log.debug("Listed page %s: %s keys (cursor=%s)", pages, len(page.names), page.cursor)
        if page.is_last:
            break
        cursor = page.cursor
        if cursor in seen_cursors:
            raise RemoteListError(f"Key listing returned a repeated cursor: {cursor}")
        seen_cursors.add(cursor)

    log.info("Remote store holds %s keys across %s pages", len(keys), pages)
    return tuple(keys)
