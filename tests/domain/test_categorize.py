from __future__ import annotations

from kvsync.domain.categorize import group_entries, group_names, prefix_category
from kvsync.domain.entries import Entry


def test_prefix_category_splits_on_first_delimiter() -> None:
    assert prefix_category("ROLE_PROMPT") == "ROLE"
    assert prefix_category("grouped:signs") == "grouped"
    assert prefix_category("KEEP") == "KEEP"
    assert prefix_category("A:B_C") == "A"


def test_group_entries_preserves_insertion_order() -> None:
    entries = [
        Entry.write("IRIS_SIGNS", "1"),
        Entry.write("grouped", "1"),
        Entry.write("IRIS_ZONES", "1"),
        Entry.write("grouped:signs", "1"),
    ]

    groups = group_entries(entries)

    assert list(groups) == ["IRIS", "grouped"]
    assert groups == {
        "IRIS": ["IRIS_SIGNS", "IRIS_ZONES"],
        "grouped": ["grouped", "grouped:signs"],
    }


def test_group_entries_is_repeatable() -> None:
    entries = [Entry.write("A_1", "1"), Entry.delete("B")]

    assert group_entries(entries) == group_entries(entries)
    assert group_entries(entries) == {"A": ["A_1"], "B": ["B"]}


def test_group_names_accepts_custom_rule() -> None:
    groups = group_names(["AB", "AC", "B"], category_of=lambda name: name[0])

    assert groups == {"A": ["AB", "AC"], "B": ["B"]}
