"""Types for the help-text parser.

All values are immutable and produced fresh per parse call.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParsedCommand:
    """A candidate subcommand inferred from one line of help text.

    confidence: 0.0 to 1.0, how likely the token names a real subcommand.
    """

    name: str
    confidence: float
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "confidence": round(self.confidence, 2),
            "description": self.description,
        }


@dataclass(frozen=True)
class ParsedOption:
    """A flag found in help text.

    argument is the value placeholder (e.g. "<file>", "PORT") and is None
    for boolean flags.
    """

    long: Optional[str] = None
    short: Optional[str] = None
    aliases: tuple[str, ...] = ()
    argument: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.long and not self.short:
            raise ValueError("ParsedOption needs a long or short flag")

    @property
    def names(self) -> tuple[str, ...]:
        """Flag names in display order: short, long, then aliases."""
        head = tuple(n for n in (self.short, self.long) if n)
        return head + self.aliases

    def to_dict(self) -> dict:
        return {
            "long": self.long,
            "short": self.short,
            "aliases": list(self.aliases),
            "argument": self.argument,
            "description": self.description,
        }


@dataclass(frozen=True)
class HelpParseResult:
    commands: tuple[ParsedCommand, ...] = ()
    options: tuple[ParsedOption, ...] = ()

    def command_names(self) -> list[str]:
        return [c.name for c in self.commands]

    def to_dict(self) -> dict:
        return {
            "commands": [c.to_dict() for c in self.commands],
            "options": [o.to_dict() for o in self.options],
        }
