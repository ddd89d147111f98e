"""
Route fault injection CLI.

Usage:
    python -m smoke_tools.fault_injection inject --storefront-dir /srv/storefront
    python -m smoke_tools.fault_injection status
    python -m smoke_tools.fault_injection restore --keep-backup
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from smoke_tools.common import init_logger
from smoke_tools.fault_injection.route_fault import (
    DEFAULT_ROUTE_FILE,
    FaultInjectionError,
    RouteFault,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m smoke_tools.fault_injection",
        description="Disable or restore a storefront route to validate the smoke suite",
    )
    parser.add_argument(
        "action",
        choices=["inject", "restore", "status"],
        help="Operation to perform",
    )
    parser.add_argument(
        "--storefront-dir",
        help="Storefront project root (default: fault_injection.storefront_dir)",
    )
    parser.add_argument(
        "--route-file",
        help="Page file relative to the project root (default: the cart page)",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="inject: replace an existing backup / restore: replace an existing page file",
    )
    parser.add_argument(
        "--keep-backup",
        action="store_true",
        help="restore: keep the backup file",
    )
    return parser


def make_fault(args: argparse.Namespace) -> RouteFault:
    if args.storefront_dir:
        return RouteFault(args.storefront_dir, args.route_file or DEFAULT_ROUTE_FILE)
    fault = RouteFault.from_config()
    if args.route_file:
        fault = RouteFault(fault.storefront_dir, args.route_file)
    return fault


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init_logger()

    try:
        fault = make_fault(args)
        if args.action == "inject":
            fault.inject(overwrite=args.overwrite)
            logger.info("Run TC-004 now: the cart route should answer 404 and the scenario fail")
        elif args.action == "restore":
            fault.restore(keep_backup=args.keep_backup, overwrite=args.overwrite)
        state = fault.status()
    except FaultInjectionError as e:
        logger.error(f"❌ {e}")
        return 1

    logger.info(f"{fault.page_file}: {state.describe()} (injected={state.injected})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
