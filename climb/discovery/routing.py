"""Resolve raw CLI tokens into a DiscoveryRequest.

    discover [<target-program>] [<path-segment>...] [--]

The first token names the target program unless it is one of the registry
keywords, in which case the configured default target is used and every
token becomes part of the path.
"""

from typing import Sequence

from climb.core.config import Settings
from climb.discovery.types import DiscoveryRequest
from climb.errors import ConfigurationError
from climb.registry.client import REGISTRY_PROGRAM

RESERVED_TOKENS = frozenset({"servers", "tools", "groups", "prompts", "tool"})
STRUCTURED_TARGET = REGISTRY_PROGRAM


def resolve_request(argv: Sequence[str], settings: Settings) -> DiscoveryRequest:
    """Split tokens into target and path.

    Raises:
        ConfigurationError: no target given and none configured.
    """
    tokens = list(argv)
    target = settings.target_cli
    path: list[str] = []

    if tokens:
        first = tokens[0]
        if first in RESERVED_TOKENS:
            path = tokens
        else:
            target = first.strip()
            path = tokens[1:]

    if not target:
        raise ConfigurationError(
            "No target program to discover",
            hint=(
                "Pass the program name, e.g. `climb discover git`, "
                "or set CLIMB_TARGET_CLI."
            ),
        )
    return DiscoveryRequest(target=target, path=tuple(path))


def is_structured(request: DiscoveryRequest) -> bool:
    return request.target == STRUCTURED_TARGET
