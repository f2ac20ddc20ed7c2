"""Category view over entry names, used for reporting only."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entries import Entry

type CategoryMap = dict[str, list[str]]
type CategoryRule = Callable[[str], str]

_DELIMITERS = re.compile(r"[:_]")


def prefix_category(name: str) -> str:
    """Return the part of ``name`` before the first ``:`` or ``_``."""

    return _DELIMITERS.split(name, maxsplit=1)[0]


def group_names(
    names: Iterable[str],
    *,
    category_of: CategoryRule = prefix_category,
) -> CategoryMap:
    groups: CategoryMap = {}
    for name in names:
        groups.setdefault(category_of(name), []).append(name)
    return groups


def group_entries(
    entries: Iterable[Entry],
    *,
    category_of: CategoryRule = prefix_category,
) -> CategoryMap:
    return group_names((entry.name for entry in entries), category_of=category_of)
