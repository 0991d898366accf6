"""Help-text parser.

Turns one blob of captured help output into candidate subcommands and
options:

1. Strip terminal escapes (captured text may be coloured).
2. Split into lines and feed each through the section state machine.
3. Classify non-header lines with the rule table in `rules`.
4. Merge: a command seen on several lines keeps its highest confidence and
   its first description; options are kept once per name set. Output order
   is order of first appearance.

Parsing is a pure function of its input and never raises; lines that no
rule claims are dropped.
"""

import logging

from climb.help.ansi import strip_ansi
from climb.help.rules import classify_line
from climb.help.sections import HelpLine, SectionTracker
from climb.help.types import HelpParseResult, ParsedCommand, ParsedOption

logger = logging.getLogger(__name__)


class HelpParser:
    """Stateless parser; one instance can be reused for any number of texts."""

    def parse(self, raw_text: str) -> HelpParseResult:
        text = strip_ansi(raw_text or "")
        if not text.strip():
            return HelpParseResult()

        tracker = SectionTracker()
        commands: dict[str, ParsedCommand] = {}
        options: dict[tuple[str, ...], ParsedOption] = {}

        for number, raw_line in enumerate(text.split("\n"), start=1):
            line = HelpLine(number=number, raw=raw_line)
            if tracker.advance(line) is not None:
                continue

            try:
                match = classify_line(line, tracker.current, tracker.column)
            except Exception:  # noqa: BLE001
                logger.debug("Dropping unclassifiable line %d: %r", number, raw_line)
                continue
            if match is None:
                continue

            for command in match.commands:
                _merge_command(commands, command)
            for option in match.options:
                options.setdefault(option.names, option)

        result = HelpParseResult(
            commands=tuple(commands.values()),
            options=tuple(options.values()),
        )
        logger.debug(
            "Parsed help text: %d commands, %d options",
            len(result.commands),
            len(result.options),
        )
        return result


def _merge_command(commands: dict[str, ParsedCommand], command: ParsedCommand) -> None:
    existing = commands.get(command.name)
    if existing is None:
        commands[command.name] = command
        return
    if command.confidence > existing.confidence:
        commands[command.name] = ParsedCommand(
            name=command.name,
            confidence=command.confidence,
            description=existing.description or command.description,
        )


def parse_help(raw_text: str) -> HelpParseResult:
    """Module-level shortcut for HelpParser().parse()."""
    return HelpParser().parse(raw_text)
