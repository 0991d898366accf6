"""Generic discovery: infer one level of an unknown program's command tree.

Subcommand listing:
  1. Capture and parse help for the requested path.
  2. Keep candidates with confidence >= CONFIDENCE_THRESHOLD whose name is
     not already part of the path.
  3. Collapse duplicates (max confidence), sort by name, keep the first
     MAX_LISTED_SUBCOMMANDS.
  4. Look-ahead: probe each survivor once to see whether it has children.

Option listing (path ends in "--"): capture and parse help for the base
path, format every option, sort, keep the first MAX_LISTED_OPTIONS.

A probe that fails is "no data" for that probe only. Nothing in this module
raises past its caller.
"""

import logging
from typing import Iterable, Optional, Sequence

from climb.discovery.types import DiscoveryEntry, DiscoveryRequest, RenderedReport
from climb.help.capture import HELP_TIMEOUT_SECONDS, capture_help
from climb.help.parser import HelpParser
from climb.help.types import ParsedCommand, ParsedOption
from climb.process.types import Executor
from climb.render.tree import render_report

logger = logging.getLogger(__name__)

CONFIDENCE_THRESHOLD = 0.35
MAX_LISTED_SUBCOMMANDS = 15
MAX_LISTED_OPTIONS = 50

NO_SUBCOMMANDS = "(no further subcommands detected)"
NO_OPTIONS = "(no options detected)"


def _sort_key(value: str) -> tuple[str, str]:
    # ASCII-only case folding
    folded = "".join(ch.lower() if ch.isascii() else ch for ch in value)
    return folded, value


def format_option(option: ParsedOption) -> str:
    """`-o,--output <file>` style display string."""
    names = ",".join(option.names)
    if option.argument:
        return f"{names} {option.argument}"
    return names


def select_candidates(
    commands: Iterable[ParsedCommand],
    path: Sequence[str] = (),
    threshold: float = CONFIDENCE_THRESHOLD,
    limit: int = MAX_LISTED_SUBCOMMANDS,
) -> list[ParsedCommand]:
    """Filter, dedupe, sort and cap parsed commands for one listing level."""
    in_path = set(path)
    best: dict[str, ParsedCommand] = {}
    for command in commands:
        if command.confidence < threshold or command.name in in_path:
            continue
        current = best.get(command.name)
        if current is None or command.confidence > current.confidence:
            best[command.name] = command

    ordered = sorted(best.values(), key=lambda c: _sort_key(c.name))
    return ordered[:limit]


def probe_has_subcommands(
    executor: Executor,
    path: Sequence[str],
    name: str,
    parser: HelpParser,
    timeout: float = HELP_TIMEOUT_SECONDS,
) -> bool:
    """True when `path + [name]` lists at least one command other than itself."""
    try:
        text = capture_help(executor, [*path, name], timeout=timeout)
        if not text.strip():
            return False
        result = parser.parse(text)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Look-ahead for %s failed: %s", [*path, name], exc)
        return False
    return any(other != name for other in result.command_names())


def list_options(
    executor: Executor,
    request: DiscoveryRequest,
    timeout: float = HELP_TIMEOUT_SECONDS,
    parser: Optional[HelpParser] = None,
) -> RenderedReport:
    parser = parser or HelpParser()
    text = capture_help(executor, request.base_path, timeout=timeout)
    result = parser.parse(text)

    formatted = sorted({format_option(o) for o in result.options}, key=_sort_key)
    formatted = formatted[:MAX_LISTED_OPTIONS]
    logger.debug("Found %d options for %s", len(formatted), request.title)

    lines = render_report(f"{request.title} options", formatted, placeholder=NO_OPTIONS)
    return RenderedReport(lines=tuple(lines))


def list_subcommands(
    executor: Executor,
    request: DiscoveryRequest,
    timeout: float = HELP_TIMEOUT_SECONDS,
    parser: Optional[HelpParser] = None,
) -> RenderedReport:
    parser = parser or HelpParser()
    path = request.base_path
    text = capture_help(executor, path, timeout=timeout)
    result = parser.parse(text)

    logger.debug("Parsed help for %s: %s", request.title, result.to_dict())
    candidates = select_candidates(result.commands, path)
    logger.debug(
        "Parsed %d commands for %s, %d kept",
        len(result.commands), request.title, len(candidates),
    )

    entries = [
        DiscoveryEntry(
            name=candidate.name,
            confidence=candidate.confidence,
            has_subcommands=probe_has_subcommands(
                executor, path, candidate.name, parser, timeout=timeout,
            ),
        )
        for candidate in candidates
    ]

    lines = render_report(
        request.title,
        [entry.label for entry in entries],
        placeholder=NO_SUBCOMMANDS,
    )
    return RenderedReport(lines=tuple(lines))


def discover_generic(
    executor: Executor,
    request: DiscoveryRequest,
    timeout: float = HELP_TIMEOUT_SECONDS,
) -> RenderedReport:
    if request.wants_options:
        return list_options(executor, request, timeout=timeout)
    return list_subcommands(executor, request, timeout=timeout)
