from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from zonesync.app import create_remote_record, delete_remote_record, refresh_powerdns
from zonesync.config import configure_logging
from zonesync.domain.model import IntegrationStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mirror PowerDNS zones into the local cache")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log per-entity field changes",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    refresh = subparsers.add_parser("refresh", help="Refresh zones and records from PowerDNS")
    refresh.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Number of zones loaded per query during the record pass (defaults to config)",
    )
    refresh.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Stop between zones once this many seconds have passed",
    )

    record = subparsers.add_parser("record", help="Manual record administration")
    record_sub = record.add_subparsers(dest="record_command", required=True)

    record_add = record_sub.add_parser("add", help="Create or replace a record set")
    record_add.add_argument("zone", help="Zone name, e.g. example.com")
    record_add.add_argument("type", help="Record type, e.g. A")
    record_add.add_argument("name", help="Record name relative to the zone, or @")
    record_add.add_argument("content", help="Record content")
    record_add.add_argument("--ttl", type=int, default=None, help="TTL in seconds")

    record_delete = record_sub.add_parser("delete", help="Delete a record set")
    record_delete.add_argument("zone", help="Zone name, e.g. example.com")
    record_delete.add_argument("type", help="Record type, e.g. A")
    record_delete.add_argument("name", help="Record name relative to the zone, or @")
    record_delete.add_argument("--content", default=None, help="Content of the record")

    return parser.parse_args(list(argv))


def _validate(args: argparse.Namespace) -> None:
    if args.command == "refresh":
        if args.batch_size is not None and args.batch_size < 1:
            raise ValueError("--batch-size must be at least 1")
        if args.timeout is not None and args.timeout <= 0:
            raise ValueError("--timeout must be positive")
    if args.command == "record" and args.record_command == "add":
        if args.ttl is not None and args.ttl < 1:
            raise ValueError("--ttl must be at least 1")


def _run_refresh(args: argparse.Namespace) -> int:
    result = refresh_powerdns(
        zone_batch_size=args.batch_size,
        timeout=timedelta(seconds=args.timeout) if args.timeout is not None else None,
    )
    if result.status is IntegrationStatus.ERROR:
        log.error(f"Refresh failed: {result.message}")
        return 1
    for failure in result.failures:
        log.warning(f"{failure.scope}: {failure.kind} failed: {failure.message}")
    log.info(
        "Refresh finished: zones=%s, record scopes=%s, failures=%s, cancelled=%s",
        result.zones.summary() if result.zones else "-",
        len(result.records),
        len(result.failures),
        result.cancelled,
    )
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        _validate(parsed_args)
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    exit_code = 0
    try:
        if parsed_args.command == "refresh":
            exit_code = _run_refresh(parsed_args)
        elif parsed_args.command == "record" and parsed_args.record_command == "add":
            record = create_remote_record(
                zone_name=parsed_args.zone,
                record_type=parsed_args.type,
                name=parsed_args.name,
                content=parsed_args.content,
                ttl=parsed_args.ttl,
            )
            log.info("Created record %s (%s)", record.external_id, record.fqdn)
        elif parsed_args.command == "record" and parsed_args.record_command == "delete":
            removed = delete_remote_record(
                zone_name=parsed_args.zone,
                record_type=parsed_args.type,
                name=parsed_args.name,
                content=parsed_args.content,
            )
            log.info("Deleted record set; %s cached record(s) removed", removed)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry: load ``.env`` and install the SIGINT handler first."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
