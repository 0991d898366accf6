"""Help-text capture and parsing.

Public API:
    capture_help(executor, path) -> str
    parse_help(raw_text) -> HelpParseResult
"""

from climb.help.capture import capture_help
from climb.help.parser import HelpParser, parse_help
from climb.help.types import HelpParseResult, ParsedCommand, ParsedOption

__all__ = [
    "capture_help",
    "parse_help",
    "HelpParser",
    "HelpParseResult",
    "ParsedCommand",
    "ParsedOption",
]
