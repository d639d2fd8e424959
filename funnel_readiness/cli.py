"""Command-line readiness check.

Usage:
    funnel-readiness check snapshot.yaml
    funnel-readiness check snapshot.json --json

Exit codes: 0 ready, 1 publish blocked, 2 snapshot could not be loaded.
"""

import argparse
import json
import sys
from dataclasses import replace

from dotenv import load_dotenv

from funnel_readiness.config import ReadinessConfig
from funnel_readiness.exceptions import SnapshotLoadError
from funnel_readiness.logging_setup import setup_logging
from funnel_readiness.readiness import evaluate
from funnel_readiness.snapshot import load_snapshot

EXIT_READY = 0
EXIT_BLOCKED = 1
EXIT_LOAD_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="funnel-readiness",
        description="Check whether a funnel is ready to publish",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Evaluate a funnel snapshot")
    check.add_argument("snapshot", help="Path to a JSON or YAML snapshot with funnel and prices")
    check.add_argument(
        "--json",
        action="store_true",
        help="Print the readiness result as JSON instead of a summary",
    )
    check.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def run_check(args: argparse.Namespace, config: ReadinessConfig) -> int:
    try:
        snapshot = load_snapshot(args.snapshot)
    except SnapshotLoadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    readiness = evaluate(snapshot.funnel, snapshot.prices, config)

    if args.json:
        print(json.dumps(readiness.to_wire(), indent=2))
    else:
        print(readiness.to_summary())

    return EXIT_BLOCKED if readiness.publish_blocked else EXIT_READY


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    config = ReadinessConfig.from_env()
    if args.verbose:
        config = replace(config, log_level="DEBUG")
    # Logs go to stderr so --json output stays parseable
    setup_logging(config, stream=sys.stderr)

    if args.command == "check":
        return run_check(args, config)
    return EXIT_LOAD_ERROR


if __name__ == "__main__":
    sys.exit(main())
