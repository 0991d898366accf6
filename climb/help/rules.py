"""Per-line classification rules for help text.

Each rule looks at one line (already placed in a section by the header
state machine) and either claims it, returning the candidates it yields,
or returns None to let the next rule try. Rules run in RULES order and the
first claim wins. A claimed line may still yield nothing (e.g. a noise
token), which stops later rules from misreading it.

Scoring is a closed-form function of the section, whether the token has a
description, and whether the token is all upper case (placeholders and
environment variables usually are):

    confidence = SECTION_BASE[section]
                 + DESCRIPTION_BONUS   if a description follows
                 - UPPERCASE_PENALTY   if the token is all upper case
                                       (outside COMMANDS)

Brace groups ({a,b,c}) are argparse's explicit subcommand listing and get a
fixed BRACE_GROUP_CONFIDENCE. Repeats are merged by the parser (max wins).
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from climb.help.sections import NOISE_SECTIONS, HelpLine, Section
from climb.help.types import ParsedCommand, ParsedOption

SECTION_BASE: dict[Section, float] = {
    Section.COMMANDS: 0.75,
    Section.OPTIONS: 0.0,
    Section.NONE: 0.30,
    Section.OTHER: 0.25,
    Section.ARGUMENTS: 0.15,
}
DESCRIPTION_BONUS = 0.15
UPPERCASE_PENALTY = 0.15
BRACE_GROUP_CONFIDENCE = 0.8

MAX_TOKEN_LENGTH = 32

# Tokens that look like commands but never are
NOISE_TOKENS = frozenset({
    "usage",
    "options",
    "flags",
    "examples",
    "see",
    "also",
    "commands",
    "subcommands",
    "arguments",
})

_TOKEN = r"[A-Za-z0-9][A-Za-z0-9_-]*"
_IDENTIFIER = re.compile(rf"^{_TOKEN}$")

_BRACE_GROUP = re.compile(rf"^\{{(?P<items>{_TOKEN}(?:\s*,\s*{_TOKEN})*)\}}(?:\s+(?P<desc>\S.*))?$")
_COMMA_LIST = re.compile(rf"^{_TOKEN}(?:\s*,\s*{_TOKEN})+,?$")

# "name, alias  Description" - aliases are separated by ',' or '|'; gh style
# rows put a colon right after the name ("auth:  Authenticate gh")
_COMMAND_STRICT = re.compile(
    rf"^(?P<token>{_TOKEN}):?(?P<aliases>(?:\s*[,|]\s*{_TOKEN})*)"
    r"(?:(?:\s{2,}|\t+)(?P<desc>\S.*))?$"
)
_COMMAND_LOOSE = re.compile(
    rf"^(?P<token>{_TOKEN}):?(?P<aliases>(?:\s*[,|]\s*{_TOKEN})*)"
    r"(?:\s+(?P<desc>\S.*))?$"
)
# Prose starts with a word, a number, a quote or a bracket
_PROSE_START = re.compile(r"^[A-Za-z0-9\"'(\[]")

# Head and description of an option line are separated by 2+ spaces or a tab
_DESCRIPTION_GAP = re.compile(r"\s{2,}|\t")
_FLAG_ITEM = re.compile(
    r"(?P<flag>--?[A-Za-z0-9?@#][A-Za-z0-9_.?#-]*)"
    r"(?:(?:=|\s)?(?P<arg><[^>]*>|\[[^\]]*\]|\{[^}]*\}|[A-Z][A-Z0-9_-]*(?![a-z])))?"
)
_FLAG_SEPARATOR = re.compile(r"^[\s,|/]*$")


@dataclass(frozen=True)
class LineMatch:
    """What a rule extracted from one line."""

    rule: str
    commands: tuple[ParsedCommand, ...] = ()
    options: tuple[ParsedOption, ...] = ()


Rule = Callable[[HelpLine, Section], Optional[LineMatch]]


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def score(section: Section, token: str, has_description: bool) -> float:
    """Closed-form confidence for a command token."""
    value = SECTION_BASE.get(section, 0.0)
    if has_description:
        value += DESCRIPTION_BONUS
    if section is not Section.COMMANDS and _is_all_upper(token):
        value -= UPPERCASE_PENALTY
    return round(min(1.0, max(0.0, value)), 2)


def is_candidate_token(token: str) -> bool:
    """Identifier-safe, not a flag, not noise, not absurdly long."""
    if not token or len(token) > MAX_TOKEN_LENGTH:
        return False
    if token.startswith("-"):
        return False
    if not _IDENTIFIER.match(token):
        return False
    return token.lower() not in NOISE_TOKENS


def _is_all_upper(token: str) -> bool:
    letters = [c for c in token if c.isalpha()]
    return bool(letters) and all(c.isupper() for c in letters)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def match_brace_group(line: HelpLine, section: Section) -> Optional[LineMatch]:
    """argparse subparser listing: `{build,test,deploy}`."""
    match = _BRACE_GROUP.match(line.text)
    if not match:
        return None
    names = [n.strip() for n in match.group("items").split(",")]
    commands = tuple(
        ParsedCommand(name=name, confidence=BRACE_GROUP_CONFIDENCE)
        for name in names
        if is_candidate_token(name)
    )
    return LineMatch(rule="brace_group", commands=commands)


def match_option_line(line: HelpLine, section: Section) -> Optional[LineMatch]:
    """`-o, --output <path>  Description` and friends."""
    if not line.text.startswith("-"):
        return None
    option = parse_option_spec(line.text)
    if option is None:
        # A dash-led line that isn't a clean flag spec is still not a command.
        return LineMatch(rule="option_line")
    return LineMatch(rule="option_line", options=(option,))


def match_comma_list(line: HelpLine, section: Section) -> Optional[LineMatch]:
    """npm style `access, adduser, audit,` inside a commands section."""
    if section is not Section.COMMANDS:
        return None
    if not _COMMA_LIST.match(line.text):
        return None
    names = [n.strip() for n in line.text.rstrip(",").split(",")]
    commands = tuple(
        ParsedCommand(name=name, confidence=score(section, name, False))
        for name in names
        if is_candidate_token(name)
    )
    return LineMatch(rule="comma_list", commands=commands)


def match_command_line(line: HelpLine, section: Section) -> Optional[LineMatch]:
    """`<token>[, alias]<gap><description>`.

    Inside a commands section the row must be indented, the gap may be a
    single space and the description is optional. Elsewhere we need a 2+
    space gap followed by prose, the shape of a two-column listing.
    """
    if section is Section.COMMANDS:
        if line.indent == 0:
            return None
        match = _COMMAND_LOOSE.match(line.text)
    else:
        match = _COMMAND_STRICT.match(line.text)
    if not match:
        return None

    token = match.group("token")
    description = match.group("desc")
    if section is not Section.COMMANDS:
        if not description or not _PROSE_START.match(description):
            return None

    if not is_candidate_token(token):
        return LineMatch(rule="command_line")

    command = ParsedCommand(
        name=token,
        confidence=score(section, token, bool(description)),
        description=description.strip() if description else None,
    )
    return LineMatch(rule="command_line", commands=(command,))


RULES: tuple[Rule, ...] = (
    match_brace_group,
    match_option_line,
    match_comma_list,
    match_command_line,
)


def classify_line(
    line: HelpLine,
    section: Section,
    column: Optional[int] = None,
) -> Optional[LineMatch]:
    """Run RULES in order; first claim wins. None means the line is dropped.

    column is the indent of the current commands listing; deeper lines in a
    COMMANDS section are wrapped descriptions and are dropped.
    """
    if line.is_blank or section in NOISE_SECTIONS:
        return None
    if section is Section.COMMANDS and column is not None and line.indent > column:
        return None
    for rule in RULES:
        result = rule(line, section)
        if result is not None:
            return result
    return None


# ---------------------------------------------------------------------------
# Option spec parsing
# ---------------------------------------------------------------------------

def parse_option_spec(text: str) -> Optional[ParsedOption]:
    """Parse the flag part of an option line.

    Flags are read left to right while only separators (',', '|', '/',
    whitespace) sit between them. The first `--flag` becomes long, the
    first single-dash flag short, the rest aliases. The first placeholder
    attached to any flag becomes the argument.
    """
    gap = _DESCRIPTION_GAP.search(text)
    if gap:
        head, description = text[: gap.start()], text[gap.end():].strip() or None
    else:
        head, description = text, None

    flags: list[str] = []
    argument: Optional[str] = None
    position = 0
    for match in _FLAG_ITEM.finditer(head):
        if not _FLAG_SEPARATOR.match(head[position: match.start()]):
            break
        flags.append(match.group("flag"))
        if argument is None and match.group("arg"):
            argument = match.group("arg")
        position = match.end()

    if not flags:
        return None

    long_flag = next((f for f in flags if f.startswith("--")), None)
    short_flag = next((f for f in flags if not f.startswith("--")), None)
    aliases: list[str] = []
    for flag in flags:
        if flag in (long_flag, short_flag) or flag in aliases:
            continue
        aliases.append(flag)

    return ParsedOption(
        long=long_flag,
        short=short_flag,
        aliases=tuple(aliases),
        argument=argument,
        description=description,
    )
