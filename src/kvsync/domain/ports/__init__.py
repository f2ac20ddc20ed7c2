"""Domain port definitions for adapters."""

from __future__ import annotations

from .store import KeyPage, KeyValueStore

__all__ = ["KeyPage", "KeyValueStore"]
