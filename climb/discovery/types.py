"""Types for discovery requests and reports."""

from dataclasses import dataclass

# Trailing path marker that switches to option listing
OPTIONS_MARKER = "--"


@dataclass(frozen=True)
class DiscoveryRequest:
    """Which program to introspect and where in its command tree.

    path is the sequence of subcommand tokens below the program root; a
    trailing OPTIONS_MARKER asks for the options of the preceding path.
    """

    target: str
    path: tuple[str, ...] = ()

    @property
    def wants_options(self) -> bool:
        return bool(self.path) and self.path[-1] == OPTIONS_MARKER

    @property
    def base_path(self) -> tuple[str, ...]:
        return self.path[:-1] if self.wants_options else self.path

    @property
    def title(self) -> str:
        return " ".join((self.target, *self.base_path)).strip()


@dataclass(frozen=True)
class DiscoveryEntry:
    """One rendered subcommand at one level.

    has_subcommands comes from the look-ahead probe, not from the parse
    that found the entry.
    """

    name: str
    confidence: float
    has_subcommands: bool = False

    @property
    def label(self) -> str:
        suffix = ", sub" if self.has_subcommands else ""
        return f"{self.name} [c={self.confidence:.2f}{suffix}]"


@dataclass(frozen=True)
class RenderedReport:
    """Final report lines, ready for stdout."""

    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)
