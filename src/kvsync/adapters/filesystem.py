"""Directory-backed source of desired records.

Every non-hidden regular file is one record: the file name (without a ``.json``
suffix) is the key and the file text is the JSON value.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping
    from pathlib import Path

log = getLogger(__name__)

JSON_SUFFIX: Final[str] = ".json"

type DirectoryFingerprint = tuple[tuple[str, int, int], ...]


def _record_files(directory: Path) -> list[Path]:
    if not directory.is_dir():
        raise NotADirectoryError(f"Record directory not found: {directory}")
    return sorted(
        path for path in directory.iterdir() if path.is_file() and not path.name.startswith(".")
    )


def key_for_file(path: Path) -> str:
    return path.name.removesuffix(JSON_SUFFIX)


def record_paths(directory: Path) -> dict[str, Path]:
    """Return ``key -> file`` for every record file in ``directory``."""

    paths: dict[str, Path] = {}
    for path in _record_files(directory):
        key = key_for_file(path)
        if key in paths:
            raise ValueError(f"Duplicate record {key} in {directory}")
        paths[key] = path
    return paths


def read_directory(directory: Path) -> dict[str, str]:
    """Return ``key -> file text`` for every record file in ``directory``."""

    paths = record_paths(directory)
    records = {key: path.read_text(encoding="utf-8") for key, path in paths.items()}
    log.debug("Read %s records from %s", len(records), directory)
    return records


def write_directory(directory: Path, values: Mapping[str, str]) -> list[Path]:
    """Write one file per key and return the files written.

    A key that already has a record file (``KEY`` or ``KEY.json``) is written
    back to that file. New keys get a bare file name.
    """

    directory.mkdir(parents=True, exist_ok=True)
    existing = record_paths(directory)
    written: list[Path] = []
    for key, value in values.items():
        path = existing.get(key, directory / key)
        path.write_text(value, encoding="utf-8")
        written.append(path)
    return written


def prune_directory(directory: Path, keep: Collection[str]) -> list[str]:
    """Delete record files whose keys are not in ``keep``; return the removed keys."""

    removed: list[str] = []
    for key, path in record_paths(directory).items():
        if key not in keep:
            log.info("Removing %s", path)
            path.unlink()
            removed.append(key)
    return removed


def directory_fingerprint(directory: Path) -> DirectoryFingerprint:
    """Return a snapshot that changes whenever a record file changes."""

    fingerprint: list[tuple[str, int, int]] = []
    for path in _record_files(directory):
        stat = path.stat()
        fingerprint.append((path.name, stat.st_size, stat.st_mtime_ns))
    return tuple(fingerprint)
