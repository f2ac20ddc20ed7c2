"""Reconciliation plan: the diff between desired entries and the remote key set.

The plan keeps the three name sets apart:
- writes: payload-bearing entries, always sent
- explicit deletes: tombstones supplied by the caller
- implicit deletes: remote keys absent from the writes

``deletes`` is the single place where the delete sets are merged, which keeps
the rule "every remote key not written is deleted" visible.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from kvsync.domain.entries import Entry

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


@dataclass(frozen=True, slots=True)
class ReconciliationPlan:
    writes: tuple[Entry, ...]
    explicit_deletes: tuple[str, ...]
    implicit_deletes: tuple[str, ...]

    @property
    def updated(self) -> tuple[str, ...]:
        return tuple(entry.name for entry in self.writes)

    @property
    def deletes(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys((*self.explicit_deletes, *self.implicit_deletes)))

    @property
    def batch(self) -> tuple[Entry, ...]:
        return (*self.writes, *(Entry.delete(name) for name in self.deletes))

    @property
    def is_empty(self) -> bool:
        return not self.writes and not self.deletes


def partition_entries(entries: Iterable[Entry]) -> tuple[tuple[Entry, ...], tuple[str, ...]]:
    """Split entries into writes and tombstone names.

    Raises ``ValueError`` when a name is both written and deleted, which cannot
    happen for output of ``validate`` but can for hand-assembled entry lists.
    """

    writes: list[Entry] = []
    tombstones: dict[str, None] = {}
    for entry in entries:
        if entry.is_delete:
            tombstones[entry.name] = None
        else:
            writes.append(entry)

    conflicting = sorted({entry.name for entry in writes}.intersection(tombstones))
    if conflicting:
        raise ValueError(f"Entries both written and deleted: {', '.join(conflicting)}")
    return tuple(writes), tuple(tombstones)


def plan_reconciliation(
    entries: Iterable[Entry],
    remote_keys: Sequence[str],
) -> ReconciliationPlan:
    writes, explicit_deletes = partition_entries(entries)
    write_names = frozenset(entry.name for entry in writes)
    implicit_deletes = tuple(key for key in dict.fromkeys(remote_keys) if key not in write_names)
    return ReconciliationPlan(
        writes=writes,
        explicit_deletes=explicit_deletes,
        implicit_deletes=implicit_deletes,
    )
