from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from kvsync.adapters.filesystem import (
    directory_fingerprint,
    prune_directory,
    read_directory,
    write_directory,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_read_directory_maps_file_names_to_text(tmp_path: Path) -> None:
    (tmp_path / "ROLE_PROMPT").write_text('{"prompt": "x"}', encoding="utf-8")
    (tmp_path / "IRIS_SIGNS.json").write_text("[]", encoding="utf-8")
    (tmp_path / ".hidden").write_text("ignored", encoding="utf-8")
    (tmp_path / "nested").mkdir()

    assert read_directory(tmp_path) == {"IRIS_SIGNS": "[]", "ROLE_PROMPT": '{"prompt": "x"}'}


def test_read_directory_rejects_duplicate_keys(tmp_path: Path) -> None:
    (tmp_path / "KEY").write_text("1", encoding="utf-8")
    (tmp_path / "KEY.json").write_text("2", encoding="utf-8")

    with pytest.raises(ValueError, match="Duplicate record KEY"):
        read_directory(tmp_path)


def test_read_directory_requires_directory(tmp_path: Path) -> None:
    with pytest.raises(NotADirectoryError):
        read_directory(tmp_path / "missing")


def test_write_directory_creates_files(tmp_path: Path) -> None:
    target = tmp_path / "snapshot"

    written = write_directory(target, {"A": "1", "grouped:signs": "{}"})

    assert [path.name for path in written] == ["A", "grouped:signs"]
    assert read_directory(target) == {"A": "1", "grouped:signs": "{}"}


def test_fingerprint_changes_when_files_change(tmp_path: Path) -> None:
    (tmp_path / "A").write_text("1", encoding="utf-8")
    before = directory_fingerprint(tmp_path)

    assert directory_fingerprint(tmp_path) == before

    (tmp_path / "B").write_text("2", encoding="utf-8")
    assert directory_fingerprint(tmp_path) != before


def test_write_directory_reuses_existing_json_file(tmp_path: Path) -> None:
    (tmp_path / "KEEP.json").write_text('"old"', encoding="utf-8")

    written = write_directory(tmp_path, {"KEEP": '"new"'})

    assert written == [tmp_path / "KEEP.json"]
    assert not (tmp_path / "KEEP").exists()
    assert read_directory(tmp_path) == {"KEEP": '"new"'}


def test_prune_directory_removes_unlisted_records(tmp_path: Path) -> None:
    (tmp_path / "KEEP").write_text("1", encoding="utf-8")
    (tmp_path / "GONE.json").write_text("2", encoding="utf-8")
    (tmp_path / ".hidden").write_text("3", encoding="utf-8")

    removed = prune_directory(tmp_path, {"KEEP"})

    assert removed == ["GONE"]
    assert sorted(path.name for path in tmp_path.iterdir()) == [".hidden", "KEEP"]
