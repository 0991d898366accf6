"""climb: infer the command tree of an unknown CLI from its help output."""

__version__ = "0.1.0"
