"""
Command line entry point.

Usage:
    python -m beaker_runner run --job-file jobs/smoke.xml --workspace .
    python -m beaker_runner run --job-xml "<job>...</job>" --timeout 3600
    python -m beaker_runner whoami

Exit codes: 0 job succeeded, 1 job or run failed, 130 wait cancelled.

Dependencies: argparse, signal (stdlib), pydantic, beaker_runner
System role: CLI surface for build systems and shells
"""

import argparse
import logging
import signal
import sys
from pathlib import Path

from pydantic import ValidationError

from beaker_runner.application import FileJobSource, JobRunner, StringJobSource
from beaker_runner.boundary.beaker import BeakerClient
from beaker_runner.configs import Settings, WatchSettings, get_settings
from beaker_runner.core.exceptions import AuthenticationError
from beaker_runner.models import RunOutcome
from beaker_runner.observability import configure_logging

logger = logging.getLogger(__name__)

EXIT_CODES = {
    RunOutcome.SUCCEEDED: 0,
    RunOutcome.FAILED: 1,
    RunOutcome.CANCELLED: 130,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beaker-runner",
        description="Schedule a Beaker job and wait until it finishes.",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level.")
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run", help="Prepare, submit and watch a job.")
    source = run.add_mutually_exclusive_group(required=True)
    source.add_argument("--job-file", help="Job XML file, relative to the workspace.")
    source.add_argument("--job-xml", help="Inline job XML, written to the workspace first.")
    run.add_argument("--workspace", default=".", help="Workspace directory (default: current).")
    run.add_argument("--initial-delay", type=float, default=None, help="Seconds before the first poll.")
    run.add_argument("--period", type=float, default=None, help="Seconds between polls.")
    run.add_argument("--timeout", type=float, default=None, help="Give up waiting after this many seconds.")

    commands.add_parser("whoami", help="Check the configured Beaker credentials.")
    return parser


def run_command(args: argparse.Namespace, settings: Settings) -> int:
    overrides = {
        key: value
        for key, value in {
            "initial_delay": args.initial_delay,
            "period": args.period,
            "timeout": args.timeout,
        }.items()
        if value is not None
    }
    try:
        watch_settings = WatchSettings(**{**settings.watch.model_dump(), **overrides})
    except ValidationError as e:
        logger.error("Invalid watch options, nothing submitted: %s", e)
        return EXIT_CODES[RunOutcome.FAILED]

    job_source = FileJobSource(args.job_file) if args.job_file else StringJobSource(args.job_xml)
    runner = JobRunner(
        client=BeakerClient.from_settings(settings.beaker),
        job_source=job_source,
        settings=watch_settings,
    )

    # SIGTERM from the build system aborts the wait; SIGINT arrives as KeyboardInterrupt.
    previous_handler = signal.signal(signal.SIGTERM, lambda signum, frame: runner.cancel())
    try:
        result = runner.run(Path(args.workspace))
    finally:
        signal.signal(signal.SIGTERM, previous_handler)
    if result.outcome == RunOutcome.FAILED and result.error:
        logger.error("Run failed: %s", result.error)
    print(result.model_dump_json(indent=2))
    return EXIT_CODES[result.outcome]


def whoami_command(settings: Settings) -> int:
    client = BeakerClient.from_settings(settings.beaker)
    try:
        identity = client.who_am_i()
    except AuthenticationError as e:
        logger.error("%s", e)
        return 1
    print(f"Connected to {client.url} as {identity}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    if args.command == "run":
        return run_command(args, settings)
    return whoami_command(settings)


if __name__ == "__main__":
    sys.exit(main())
