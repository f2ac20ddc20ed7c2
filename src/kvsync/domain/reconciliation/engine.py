"""Orchestrator for one reconciliation pass against a remote store.

Each pass is strictly sequential: list the remote keys, compute the plan, send
one bulk mutation. Two passes racing against the same store can undo each
other's writes; callers are expected to serialize them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from kvsync.config.sync import DEFAULT_PAGE_SIZE
from kvsync.domain.categorize import CategoryRule, group_entries, prefix_category

from .listing import list_remote_keys
from .plan import ReconciliationPlan, partition_entries, plan_reconciliation

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from kvsync.domain.entries import Entry
    from kvsync.domain.ports import KeyValueStore

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    """Caller-facing record of one reconciliation pass."""

    updated: tuple[str, ...]
    deleted: tuple[str, ...]
    groups: Mapping[str, tuple[str, ...]]
    dry_run: bool = False


@dataclass(slots=True)
class Reconciler:
    """Make the remote store hold exactly the desired writes."""

    store: KeyValueStore
    page_size: int = DEFAULT_PAGE_SIZE
    category_of: CategoryRule = field(default=prefix_category)

    def plan(self, entries: Sequence[Entry]) -> ReconciliationPlan:
        # Reject conflicting entries before touching the remote store.
        partition_entries(entries)
        remote_keys = list_remote_keys(self.store, page_size=self.page_size)
        return plan_reconciliation(entries, remote_keys)

    def reconcile(
        self,
        entries: Sequence[Entry],
        *,
        dry_run: bool = False,
    ) -> ReconciliationResult:
        plan = self.plan(entries)
        log.info(
            "Reconciliation plan: writes=%s, explicit_deletes=%s, implicit_deletes=%s",
            len(plan.writes),
            len(plan.explicit_deletes),
            len(plan.implicit_deletes),
        )

        if dry_run:
            log.info("Dry run: skipping bulk write of %s records", len(plan.batch))
        elif plan.is_empty:
            log.info("Nothing to write; remote store already empty")
        else:
            self.store.bulk_write(plan.batch)

        groups = group_entries(plan.writes, category_of=self.category_of)
        frozen_groups = {category: tuple(names) for category, names in groups.items()}
        return ReconciliationResult(
            updated=plan.updated,
            deleted=plan.deletes,
            groups=MappingProxyType(frozen_groups),
            dry_run=dry_run,
        )


def reconcile(
    entries: Sequence[Entry],
    store: KeyValueStore,
    *,
    dry_run: bool = False,
) -> ReconciliationResult:
    """Run one reconciliation pass of ``entries`` against ``store``."""

    return Reconciler(store).reconcile(entries, dry_run=dry_run)
