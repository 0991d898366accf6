"""Command-line entry point.

    climb [-v] [--timeout SECONDS] discover [<target>] [<path>...] [--]

The report goes to standard output; logs and errors go to standard error.
Exit status is 0 on success, 1 on a configuration error and 130 when
interrupted.
"""

import argparse
import io
import sys
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError

from climb import __version__
from climb.core.config import Settings
from climb.core.logging import configure_structlog
from climb.discovery.orchestrator import discover
from climb.errors import ClimbError, ConfigurationError, format_error

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="climb",
        description="Discover the command tree of a CLI program from its help output.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level to standard error",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Timeout of each help probe (default: CLIMB_HELP_TIMEOUT_SECONDS or 8)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    discover_parser = subparsers.add_parser(
        "discover",
        help="List subcommands (or options, with a trailing --) of a program",
    )
    discover_parser.add_argument(
        "tokens",
        nargs=argparse.REMAINDER,
        help="[<target>] [<path>...] [--]",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid CLIMB_* configuration",
            cause=exc,
            hint="Check the CLIMB_* environment variables and .env file.",
        ) from exc

    overrides = {}
    if args.timeout is not None:
        if args.timeout <= 0:
            raise ConfigurationError(
                f"Invalid timeout: {args.timeout}",
                hint="--timeout must be a positive number of seconds.",
            )
        overrides["help_timeout_seconds"] = args.timeout
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return settings.model_copy(update=overrides) if overrides else settings


def _write_report(text: str) -> None:
    stream = sys.stdout
    if isinstance(stream, io.TextIOWrapper) and stream.encoding.lower() not in ("utf-8", "utf8"):
        stream.reconfigure(encoding="utf-8")
    stream.write(text)
    stream.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
        configure_structlog(debug=settings.debug or args.verbose, level=settings.log_level)
        logger.debug("discover_started", tokens=list(args.tokens))

        report = discover(args.tokens, settings=settings)
        _write_report(report.text)
        logger.debug("discover_finished", lines=len(report.lines))
    except ClimbError as exc:
        print(format_error(exc), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("interrupted", file=sys.stderr)
        return 130
    return 0
