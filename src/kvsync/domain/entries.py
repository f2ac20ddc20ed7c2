"""Validation of desired records into typed write/delete entries.

``validate`` is the only gate between caller-supplied data and the remote store:
names must follow the key grammar and empty payloads never become writes.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from .errors import InvalidNameError, SerializationError

KEY_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(grouped(:[a-z]+)?|[A-Z0-9_]+)$")


class EntryAction(StrEnum):
    WRITE = "write"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class Entry:
    """One record to write to, or delete from, the remote store."""

    name: str
    action: EntryAction
    value: str | None = None

    def __post_init__(self) -> None:
        if self.action is EntryAction.WRITE and not self.value:
            raise ValueError(f"Write entry {self.name} requires a non-empty value")
        if self.action is EntryAction.DELETE and self.value is not None:
            raise ValueError(f"Delete entry {self.name} cannot carry a value")

    @classmethod
    def write(cls, name: str, value: str) -> Entry:
        return cls(name=name, action=EntryAction.WRITE, value=value)

    @classmethod
    def delete(cls, name: str) -> Entry:
        return cls(name=name, action=EntryAction.DELETE)

    @property
    def is_delete(self) -> bool:
        return self.action is EntryAction.DELETE


def is_valid_name(name: str) -> bool:
    return bool(name) and KEY_PATTERN.fullmatch(name) is not None


def is_deletion_sentinel(value: object) -> bool:
    """Return True for values that mean "this record should not exist"."""

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return isinstance(value, Mapping) and not value


def encode_value(value: object) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def validate(raw: Mapping[str, object]) -> list[Entry]:
    """Turn ``name -> logical value`` pairs into entries, preserving input order.

    String values are JSON text and are decoded before the sentinel check, so
    ``'""'`` and ``'{}'`` both become deletes. Any other value is taken as already
    decoded.
    """

    return [_validate_pair(name, value) for name, value in raw.items()]


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not is_valid_name(name):
        raise InvalidNameError(f"Invalid key name: {name!r}", name=str(name))


def _validate_pair(name: str, value: object) -> Entry:
    _check_name(name)
    logical = _decode(name, value)
    if is_deletion_sentinel(logical):
        return Entry.delete(name)
    try:
        encoded = encode_value(logical)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Cannot serialize {name}: {exc}", name=name) from exc
    return Entry.write(name, encoded)


def _decode(name: str, value: object) -> object:
    if not isinstance(value, str):
        return value
    if not value.strip():
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Invalid JSON in {name}: {exc}", name=name) from exc
