from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from catalogsync.app import register_release, sync_gems, sync_modules
from catalogsync.config import configure_logging
from catalogsync.domain.families import FAMILIES

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from catalogsync.domain.sync import SyncResult

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile mirrored package catalogs")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("gems", help="Full sync of the RubyGems catalog")

    modules = subparsers.add_parser("modules", help="Sync the Puppet Forge module catalog")
    modules.add_argument(
        "--incremental",
        action="store_true",
        help="Only record releases published since the newest mirrored one (no deletions)",
    )

    register = subparsers.add_parser(
        "register",
        help="Record a single newly published release without a full fetch",
    )
    register.add_argument("family", choices=sorted(FAMILIES), help="Package family")
    register.add_argument("name", help="Package name")
    register.add_argument("version", help="Version string")
    register.add_argument(
        "--platform",
        type=str,
        help="Build platform (defaults to the family's canonical platform)",
    )

    return parser.parse_args(list(argv))


def _validate(args: argparse.Namespace) -> None:
    if args.command != "register":
        return
    for label, value in (("name", args.name), ("version", args.version)):
        if not value.strip() or any(char.isspace() for char in value):
            raise ValueError(f"Invalid {label}: {value!r}")


def _report(result: SyncResult) -> None:
    log.info(
        "%s %s sync: changed=%s, removed=%s, invalidation_failures=%s",
        result.family,
        result.mode,
        ", ".join(result.changed) or "-",
        ", ".join(result.removed) or "-",
        ", ".join(result.invalidation_failures) or "-",
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        _validate(parsed_args)
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "gems":
            result = sync_gems()
        elif parsed_args.command == "modules":
            result = sync_modules(incremental=parsed_args.incremental)
        elif parsed_args.command == "register":
            result = register_release(
                parsed_args.family,
                parsed_args.name,
                parsed_args.version,
                platform=parsed_args.platform,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    _report(result)


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
