from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from datajoin.app import diff_snapshots
from datajoin.config import ConfigurationError, configure_logging, get_join_settings

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from datajoin.app import SnapshotDiff
    from datajoin.config import JoinSettings

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str], *, settings: JoinSettings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keyed enter/update/exit joins")
    subparsers = parser.add_subparsers(dest="command", required=True)

    diff = subparsers.add_parser("diff", help="Reconcile two record snapshots")
    diff.add_argument("old", type=Path, help="Previous snapshot (JSON or JSON Lines)")
    diff.add_argument("new", type=Path, help="Next snapshot (JSON or JSON Lines)")
    keying = diff.add_mutually_exclusive_group()
    keying.add_argument(
        "--key",
        type=str,
        default=settings.key_field,
        help="Record field used as join key (default: %(default)s)",
    )
    keying.add_argument(
        "--by-index",
        action="store_true",
        help="Join records by position instead of by key field",
    )
    diff.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(list(argv))


def _format_diff(diff: SnapshotDiff) -> list[str]:
    result = diff.result
    lines: list[str] = []
    lines.extend(f"- {bound.key}" for bound in result.exiting)
    for pair in result.updating:
        marker = "=" if pair.previous == pair.datum else "~"
        lines.append(f"{marker} {pair.key}")
    lines.extend(f"+ {item.key}" for item in result.entering)
    summary = diff.summary
    lines.append(
        f"entering={summary.entering} updating={summary.updating} exiting={summary.exiting}"
    )
    return lines


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        settings = get_join_settings()
    except ConfigurationError:
        configure_logging()
        log.exception("Invalid configuration")
        sys.exit(2)

    parsed_args = _parse_args(args_list, settings=settings)
    level = logging.DEBUG if getattr(parsed_args, "verbose", False) else settings.log_level
    configure_logging(level=level, force=True)

    try:
        if parsed_args.command == "diff":
            key_field = None if parsed_args.by_index else parsed_args.key
            diff = diff_snapshots(parsed_args.old, parsed_args.new, key_field=key_field)
            for line in _format_diff(diff):
                print(line)  # noqa: T201
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during join")
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
