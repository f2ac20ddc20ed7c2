"""Error taxonomy for reconciliation runs."""

from __future__ import annotations


class KvSyncError(RuntimeError):
    """Base class for every failure raised by the reconciliation engine."""


class EntryValidationError(KvSyncError):
    """Raised for input defects; no remote call has been made."""

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name = name


class InvalidNameError(EntryValidationError):
    """Raised when a record name does not match the allowed key grammar."""


class SerializationError(EntryValidationError):
    """Raised when a record value cannot be decoded or encoded as JSON."""


class RemoteStoreError(KvSyncError):
    """Raised when the remote store rejects a request or cannot be reached."""

    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class RemoteListError(RemoteStoreError):
    """Raised when a page of the key listing cannot be fetched."""


class RemoteWriteError(RemoteStoreError):
    """Raised when a bulk mutation is rejected.

    ``applied_chunks`` counts requests of the same batch that were accepted before
    the failure; a non-zero value means the remote store is in a partial state.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        body: str = "",
        applied_chunks: int = 0,
    ) -> None:
        super().__init__(message, status=status, body=body)
        self.applied_chunks = applied_chunks
