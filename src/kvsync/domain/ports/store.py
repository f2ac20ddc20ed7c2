"""Port for the remote key-value store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kvsync.domain.entries import Entry


@dataclass(frozen=True, slots=True)
class KeyPage:
    """One page of the remote key listing."""

    names: tuple[str, ...]
    cursor: str | None = None
    list_complete: bool = False

    @property
    def is_last(self) -> bool:
        # A missing cursor ends the walk even when the completion flag is absent.
        return self.list_complete or not self.cursor


@runtime_checkable
class KeyValueStore(Protocol):
    """Narrow capability interface over a remote, eventually-consistent KV store."""

    def list_keys(self, *, cursor: str | None = None, limit: int = 1000) -> KeyPage:
        """Return one page of key names; raise ``RemoteListError`` on failure."""
        ...

    def bulk_write(self, batch: Sequence[Entry]) -> None:
        """Apply writes and deletes as one unit; raise ``RemoteWriteError`` on failure."""
        ...

    def read_value(self, key: str) -> str | None:
        """Return the stored text for ``key`` or ``None`` when it does not exist."""
        ...


__all__ = ["KeyPage", "KeyValueStore"]
