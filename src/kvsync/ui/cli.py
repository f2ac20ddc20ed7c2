from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from kvsync.app import pull_directory, sync_directory, watch_directory
from kvsync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile a Workers KV namespace")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Make the namespace match a record directory")
    sync.add_argument("directory", type=Path, help="Directory holding one file per record")
    sync.add_argument(
        "--expect",
        action="append",
        default=[],
        metavar="KEY",
        help="Warn when this record is missing from the directory (repeatable)",
    )
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute and report the plan without writing to the namespace",
    )

    pull = subparsers.add_parser("pull", help="Mirror the namespace into a record directory")
    pull.add_argument("directory", type=Path, help="Directory to write records into")

    watch = subparsers.add_parser("watch", help="Sync the directory whenever it changes")
    watch.add_argument("directory", type=Path, help="Directory holding one file per record")
    watch.add_argument(
        "--expect",
        action="append",
        default=[],
        metavar="KEY",
        help="Warn when this record is missing from the directory (repeatable)",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "sync":
            result = sync_directory(
                parsed_args.directory,
                expected_keys=parsed_args.expect,
                dry_run=parsed_args.dry_run,
            )
            log.info(
                "%s: %s, deleted: %s",
                "Would update" if result.dry_run else "Updated",
                ", ".join(result.updated) or "-",
                ", ".join(result.deleted) or "-",
            )
        elif parsed_args.command == "pull":
            pulled = pull_directory(parsed_args.directory)
            log.info("Pulled %s records", len(pulled.written))
        elif parsed_args.command == "watch":
            log.info("Watching %s for changes. Press Ctrl+C to exit.", parsed_args.directory)
            watch_directory(parsed_args.directory, expected_keys=parsed_args.expect)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
