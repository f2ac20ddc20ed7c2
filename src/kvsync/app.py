"""Application orchestration entry points."""

from __future__ import annotations

import time
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from kvsync.adapters.cloudflare import CloudflareKvStore
from kvsync.adapters.filesystem import (
    directory_fingerprint,
    prune_directory,
    read_directory,
    write_directory,
)
from kvsync.config.sync import get_sync_config
from kvsync.domain.entries import is_valid_name, validate
from kvsync.domain.errors import KvSyncError
from kvsync.domain.reconciliation import Reconciler, ReconciliationResult, list_remote_keys

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from kvsync.config.sync import SyncConfig
    from kvsync.domain.ports import KeyValueStore


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PullResult:
    """Outcome of copying the remote store into a directory."""

    written: tuple[str, ...]
    skipped: tuple[str, ...]
    removed: tuple[str, ...] = ()


def sync_directory(
    directory: Path,
    *,
    store: KeyValueStore | None = None,
    expected_keys: Sequence[str] = (),
    dry_run: bool = False,
    sync_config: SyncConfig | None = None,
) -> ReconciliationResult:
    """Make the remote store hold exactly the records found in ``directory``."""

    raw = read_directory(directory)
    for key in expected_keys:
        if key not in raw:
            log.warning("Expected record %s is missing from %s", key, directory)

    # Validation runs before the store is built so bad input never needs credentials.
    entries = validate(raw)
    config = sync_config or get_sync_config()
    reconciler = Reconciler(store or CloudflareKvStore(), page_size=config.page_size)
    log.info("Starting sync of %s: entries=%s, dry_run=%s", directory, len(entries), dry_run)

    result = reconciler.reconcile(entries, dry_run=dry_run)

    log.info(
        "Finished sync: updated=%s, deleted=%s, categories=%s",
        len(result.updated),
        len(result.deleted),
        ", ".join(result.groups) or "-",
    )
    return result


def pull_directory(
    directory: Path,
    *,
    store: KeyValueStore | None = None,
    sync_config: SyncConfig | None = None,
) -> PullResult:
    """Make ``directory`` mirror every remote record with a valid key name.

    Existing record files are overwritten in place. Record files whose keys are
    not in the store any more are deleted, so a following sync uploads exactly
    what was pulled.
    """

    config = sync_config or get_sync_config()
    effective_store = store or CloudflareKvStore()
    values: dict[str, str] = {}
    skipped: list[str] = []
    for key in list_remote_keys(effective_store, page_size=config.page_size):
        if not is_valid_name(key):
            log.warning("Skipping remote key with invalid name: %r", key)
            skipped.append(key)
            continue
        value = effective_store.read_value(key)
        if value is None:
            log.warning("Remote key %s disappeared before it could be read", key)
            skipped.append(key)
            continue
        values[key] = value

    write_directory(directory, values)
    removed = prune_directory(directory, values)
    log.info(
        "Pulled %s records into %s (skipped %s, removed %s)",
        len(values),
        directory,
        len(skipped),
        len(removed),
    )
    return PullResult(written=tuple(values), skipped=tuple(skipped), removed=tuple(removed))


def watch_directory(
    directory: Path,
    *,
    store: KeyValueStore | None = None,
    expected_keys: Sequence[str] = (),
    sync_config: SyncConfig | None = None,
    sleep: Callable[[float], None] = time.sleep,
    max_cycles: int | None = None,
) -> int:
    """Re-sync ``directory`` whenever its files change; return the number of syncs run.

    Passes run one after another in this loop, so a single watcher never races
    itself. A change is synced only once the directory has been stable for the
    debounce window. Failed passes, including files vanishing mid-scan, are
    logged and the watch continues.
    """

    config = sync_config or get_sync_config()
    effective_store = store or CloudflareKvStore()
    last_synced = None
    runs = 0
    cycles = 0
    while max_cycles is None or cycles < max_cycles:
        cycles += 1
        try:
            current = directory_fingerprint(directory)
            if current != last_synced:
                sleep(config.debounce_seconds)
                if directory_fingerprint(directory) != current:
                    continue
                last_synced = current
                runs += 1
                sync_directory(
                    directory,
                    store=effective_store,
                    expected_keys=expected_keys,
                    sync_config=config,
                )
        except (KvSyncError, ValueError, OSError):
            log.exception("Sync of %s failed; waiting for the next change", directory)
        sleep(config.poll_seconds)
    return runs
