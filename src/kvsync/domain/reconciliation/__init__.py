"""Reconciliation of desired entries against a remote key-value store.

Flow of one pass:
1) list every remote key (exhaustive, cursor-driven)
2) diff the desired writes and tombstones against that snapshot
3) send one bulk mutation holding the writes followed by the deletes
4) report updated and deleted names plus a category view of the writes
"""

from __future__ import annotations

from .engine import ReconciliationResult, Reconciler, reconcile
from .listing import list_remote_keys
from .plan import ReconciliationPlan, partition_entries, plan_reconciliation

__all__ = [
    "ReconciliationPlan",
    "ReconciliationResult",
    "Reconciler",
    "list_remote_keys",
    "partition_entries",
    "plan_reconciliation",
    "reconcile",
]
