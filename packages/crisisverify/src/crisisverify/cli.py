"""CLI tool for verifying incident reports against trusted reference data."""

import argparse
import asyncio
import json

import structlog

from crisisverify.config import VerifyConfig
from crisisverify.feed import DEFAULT_REASON, Feed, badge, trust_percent
from crisisverify.io import read_submissions, write_verdicts
from crisisverify.logging import configure_logging
from crisisverify.matcher import Matcher
from crisisverify.store import default_data_path, load_or_empty
from crisisverify.verification import VerificationService, verify_after_delay


def _build_config(args: argparse.Namespace) -> VerifyConfig:
    config = VerifyConfig()
    if getattr(args, "delay", None) is not None:
        config.simulation.delay_seconds = args.delay
    return config


def cmd_check(args: argparse.Namespace) -> None:
    """Verify a single report and print the verdict as JSON."""
    log = structlog.get_logger()
    config = _build_config(args)
    store = load_or_empty(args.data)

    if config.simulation.delay_seconds > 0:
        verdict = asyncio.run(
            verify_after_delay(args.text, args.location, store, config=config)
        )
    else:
        verdict = Matcher(store, config).verify(args.text, args.location)

    log.info("check_done", status=verdict.status, match_id=verdict.match_id)
    print(json.dumps(verdict.to_dict()))


async def _run_demo(feed: Feed, submissions: list[tuple[str, str, str]]) -> None:
    tasks = [feed.submit(t, loc, desc)[1] for t, loc, desc in submissions]
    await asyncio.gather(*tasks)


def cmd_demo(args: argparse.Namespace) -> None:
    """Submit every report concurrently and print the resulting feed."""
    log = structlog.get_logger()
    config = _build_config(args)
    store = load_or_empty(args.data)
    submissions = read_submissions(args.reports)
    log.info("demo_start", reports=len(submissions), references=len(store))

    feed = Feed(VerificationService(store, config))
    feed.seed()
    asyncio.run(_run_demo(feed, submissions))

    for post in feed.posts:
        _, label = badge(post)
        print(f"[{label}] {post.title} ({post.location} - {post.source})")
        print(f"    Trust Score {trust_percent(post.confidence)}%  {post.reason or DEFAULT_REASON}")

    if args.output:
        write_verdicts(feed.posts, args.output)
        print(f"Wrote {len(feed.posts)} verdicts -> {args.output}")


def main(argv: list[str] | None = None) -> None:
    # Parent parser with global options (inherited by all subcommands)
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (default: LOG_LEVEL env or INFO)",
    )
    parent_parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit log lines as JSON instead of colored console output",
    )
    parent_parser.add_argument(
        "--data",
        default=str(default_data_path()),
        help="Path to the trusted reference reports JSON (default: bundled sample)",
    )

    parser = argparse.ArgumentParser(
        description="Incident report verification CLI",
        parents=[parent_parser],
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # check subcommand
    check_parser = subparsers.add_parser("check", parents=[parent_parser], help="Verify one report")
    check_parser.add_argument("--text", required=True, help="Incident description")
    check_parser.add_argument("--location", required=True, help="Incident location")
    check_parser.add_argument("--delay", type=float, default=0.0, help="Simulated processing delay in seconds (default: 0)")
    check_parser.set_defaults(func=cmd_check)

    # demo subcommand
    demo_parser = subparsers.add_parser("demo", parents=[parent_parser], help="Run a feed of submitted reports")
    demo_parser.add_argument("--reports", required=True, help="CSV or JSONL file with type, location, description")
    demo_parser.add_argument("--delay", type=float, default=None, help="Simulated processing delay in seconds (default: 1.5)")
    demo_parser.add_argument("--output", help="Write verdicts to this CSV or JSONL file")
    demo_parser.set_defaults(func=cmd_demo)

    args = parser.parse_args(argv)
    if args.command == "check" and not (args.text.strip() and args.location.strip()):
        parser.error("check needs a non-empty --text and --location")

    configure_logging(args.log_level, json=args.log_json)
    args.func(args)


if __name__ == "__main__":
    main()
