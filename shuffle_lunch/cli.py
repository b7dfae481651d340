"""Command-line entry point: shuffle the roster CSV or serve the API."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

import uvicorn

from shuffle_lunch.repository.roster_repository import RosterRepository, RosterValidationError
from shuffle_lunch.services.grouping_service import GroupingError, LunchShuffleService
from shuffle_lunch.services.notification_service import NotificationError, SlackNotifier
from shuffle_lunch.services.report_service import render_report
from shuffle_lunch.utils.config import Settings, get_settings
from shuffle_lunch.utils.logger import configure_logging, get_logger


logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shuffle-lunch", description=__doc__)
    subcommands = parser.add_subparsers(dest="command")

    run_parser = subcommands.add_parser("run", help="shuffle the roster and print the groups")
    run_parser.add_argument("--csv", help="roster CSV path (defaults to SHUFFLE_LUNCH_ROSTER_CSV)")
    run_parser.add_argument("--group-size", type=int, help="members per group")
    run_parser.add_argument("--seed", type=int, help="seed for reproducible tie-breaking")
    run_parser.add_argument("--notify", action="store_true", help="post the report to Slack")
    run_parser.add_argument("--verbose", action="store_true", help="log every placement")

    serve_parser = subcommands.add_parser("serve", help="run the HTTP API")
    serve_parser.add_argument("--reload", action="store_true")
    return parser


def run_shuffle(args: argparse.Namespace, settings: Settings) -> int:
    if args.verbose:
        configure_logging("DEBUG")
    try:
        members = RosterRepository(settings).load_members(args.csv)
        result = LunchShuffleService(settings).shuffle(
            members,
            group_size=args.group_size,
            seed=args.seed,
        )
        report = render_report(result.groups)
        print(report, end="")
        if args.notify:
            SlackNotifier(settings).post_report(report)
    except (RosterValidationError, GroupingError, NotificationError, ValueError) as exc:
        logger.error("Shuffle run failed | error=%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def serve(args: argparse.Namespace, settings: Settings) -> int:
    uvicorn.run(
        "shuffle_lunch.main:app",
        host=settings.host,
        port=settings.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0].startswith("-"):
        argv.insert(0, "run")
    args = parser.parse_args(argv)
    settings = get_settings()

    if args.command == "serve":
        return serve(args, settings)
    return run_shuffle(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
