"""Command-line entry point: load state, run the menu, save state."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

from pix_bank.config import BankConfig
from pix_bank.console import ConsoleApp
from pix_bank.exceptions import ConfigurationError
from pix_bank.generators import CustomerGenerator, populate
from pix_bank.logging import get_logger, setup_logging
from pix_bank.persistence import JsonSnapshotFile
from pix_bank.store.ledger import LedgerService

logger = get_logger(__name__)


def build_parser(config: BankConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pix-bank",
        description="Interactive bank console with Pix transfers",
    )
    parser.add_argument(
        "--state-file",
        type=Path,
        default=config.persistence.state_file,
        help=f"Snapshot file to load and save (default: {config.persistence.state_file})",
    )
    parser.add_argument(
        "--no-persist",
        action="store_true",
        default=not config.persistence.enabled,
        help="Neither load nor save a snapshot",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed,
        help="Random seed for overdraft limits and demo data",
    )
    parser.add_argument(
        "--demo",
        type=int,
        default=0,
        metavar="N",
        help="Open N sample accounts before starting (default: 0)",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        help=f"Log level (default: {config.log_level})",
    )
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default=config.log_format,
        help=f"Log format (default: {config.log_format})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    try:
        config = BankConfig.from_env()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    args = build_parser(config).parse_args(argv)
    setup_logging(level=args.log_level, format_type=args.log_format)

    service_kwargs = {"overdraft": config.overdraft, "rng": random.Random(args.seed)}
    snapshot: JsonSnapshotFile | None = None
    if args.no_persist:
        service = LedgerService(**service_kwargs)
    else:
        snapshot = JsonSnapshotFile(args.state_file, pretty=config.persistence.pretty_json)
        service = snapshot.load(**service_kwargs)

    if args.demo > 0:
        populate(service, CustomerGenerator(seed=args.seed), args.demo)

    def save(ledger: LedgerService) -> None:
        if snapshot is None:
            return
        try:
            snapshot.save(ledger)
        except OSError as exc:
            logger.error("Could not save snapshot to %s: %s", snapshot.path, exc)
            print(f"\nError saving state: {exc}", file=sys.stderr)

    ConsoleApp(service, on_exit=save).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
