"""Section headers and the section state machine.

Help text is scanned top to bottom; each header line switches the current
section, which decides how the following lines are scored. A USAGE block
ends at its first blank line (usage is a single paragraph). A COMMANDS
block ends at the first unindented line ("Run 'tool help <command>' ...").
Every other section lasts until the next header.
"""

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional


class Section(StrEnum):
    """Where a line sits in the help text."""

    NONE = "none"              # before any header, or after a usage paragraph
    USAGE = "usage"
    COMMANDS = "commands"
    OPTIONS = "options"
    ARGUMENTS = "arguments"    # argparse "positional arguments:"
    EXAMPLES = "examples"      # examples / see also; never yields candidates
    OTHER = "other"            # any header we don't recognise


# Sections whose lines are never candidates of any kind
NOISE_SECTIONS = frozenset({Section.USAGE, Section.EXAMPLES})

_MAX_HEADER_INDENT = 2
_MAX_HEADER_WORDS = 8

_INLINE_USAGE = re.compile(r"^\s{0,2}usage\s*:", re.IGNORECASE)
_COLON_HEADER = re.compile(r"^(?P<label>[^\s-][^:]*):\s*$")
_MAN_HEADER = re.compile(r"^[A-Z][A-Z0-9 ]*[A-Z0-9]$|^[A-Z]$")
_PARENTHETICAL = re.compile(r"\([^)]*\)")


@dataclass(frozen=True)
class HelpLine:
    """One line of help text, ANSI already stripped."""

    number: int
    raw: str

    @property
    def text(self) -> str:
        return self.raw.strip()

    @property
    def indent(self) -> int:
        expanded = self.raw.expandtabs(8)
        return len(expanded) - len(expanded.lstrip(" "))

    @property
    def is_blank(self) -> bool:
        return not self.raw.strip()


def classify_label(label: str) -> Section:
    """Map a header label (without the colon) to a section."""
    normalized = _PARENTHETICAL.sub("", label).strip().lower()
    if normalized.startswith(("usage", "synopsis")):
        return Section.USAGE
    if "command" in normalized:
        return Section.COMMANDS
    if "option" in normalized or "flag" in normalized:
        return Section.OPTIONS
    if "argument" in normalized:
        return Section.ARGUMENTS
    if "example" in normalized or normalized == "see also":
        return Section.EXAMPLES
    return Section.OTHER


def classify_header(line: HelpLine) -> Optional[Section]:
    """Return the section a header line opens, or None if it isn't a header."""
    if line.is_blank:
        return None

    if _INLINE_USAGE.match(line.raw):
        return Section.USAGE

    if line.indent > _MAX_HEADER_INDENT:
        return None

    match = _COLON_HEADER.match(line.text)
    if match:
        label = match.group("label")
        if len(label.split()) > _MAX_HEADER_WORDS:
            return None
        return classify_label(label)

    if line.indent == 0 and _MAN_HEADER.match(line.text) and len(line.text) > 1:
        return classify_label(line.text)

    return None


class SectionTracker:
    """Feeds lines through the header state machine.

    Inside a COMMANDS section, column is the indent of the first listed
    row; an unindented line that isn't a header closes the section.
    """

    def __init__(self) -> None:
        self.current = Section.NONE
        self.column: Optional[int] = None

    def advance(self, line: HelpLine) -> Optional[Section]:
        """Update state for one line.

        Returns the new section when the line is a header (the caller should
        not classify it further), otherwise None.
        """
        header = classify_header(line)
        if header is not None:
            self.current = header
            self.column = None
            return header
        if line.is_blank:
            if self.current is Section.USAGE:
                self.current = Section.NONE
            return None
        if self.current is Section.COMMANDS:
            if line.indent == 0:
                self.current = Section.NONE
                self.column = None
            elif self.column is None:
                self.column = line.indent
        return None
