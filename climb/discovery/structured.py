"""Structured discovery for the mcpjungle registry.

The registry CLI has a stable listing API, so its resources are read
directly instead of inferred from help text:

    []                  overview with one counter per listing
    [servers|tools|groups|prompts]
                        one listing, nested under the registry root
    [tool, <name>]      required/optional input parameters of one tool

A failed listing is logged and counts as empty; a tool whose usage cannot
be read or parsed renders "-" for both parameter groups.
"""

import asyncio
import logging
from typing import Any, Callable, Optional, Sequence

from climb.discovery.types import RenderedReport
from climb.errors import ProcessError, SchemaParsingError
from climb.registry.client import REGISTRY_PROGRAM, RegistryClient
from climb.registry.parser import parse_tool_schema_strict
from climb.render.tree import render_list, render_tree

logger = logging.getLogger(__name__)

LISTING_KINDS = ("servers", "tools", "groups", "prompts")


def _on_off(enabled: bool) -> str:
    return " [on]" if enabled else " [off]"


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

def _listing_call(client: RegistryClient, kind: str) -> Callable[[], list[Any]]:
    return {
        "servers": client.list_servers,
        "tools": client.list_tools,
        "groups": client.list_groups,
        "prompts": client.list_prompts,
    }[kind]


def _list_safe(client: RegistryClient, kind: str) -> list[Any]:
    try:
        return _listing_call(client, kind)()
    except ProcessError as exc:
        logger.warning("Listing %s failed: %s", kind, exc)
        return []


async def gather_listings(client: RegistryClient) -> dict[str, list[Any]]:
    """Fetch all four listings concurrently; failed ones come back empty."""
    results = await asyncio.gather(
        *(asyncio.to_thread(_listing_call(client, kind)) for kind in LISTING_KINDS),
        return_exceptions=True,
    )

    listings: dict[str, list[Any]] = {}
    for kind, result in zip(LISTING_KINDS, results):
        if isinstance(result, BaseException):
            logger.warning("Listing %s failed: %s", kind, result)
            listings[kind] = []
        else:
            listings[kind] = result
    return listings


def _item_labels(kind: str, items: Sequence[Any]) -> list[str]:
    if kind == "servers":
        return [f"{s.name}{_on_off(s.enabled)}" for s in items]
    if kind == "tools":
        return [f"{t.canonical_name}{_on_off(t.enabled)}" for t in items]
    if kind == "groups":
        return [g.name for g in items]
    return [p.canonical_name for p in items]


def _overview(client: RegistryClient) -> list[str]:
    listings = asyncio.run(gather_listings(client))
    counters = [f"{kind} [n={len(listings[kind])}]" for kind in LISTING_KINDS]
    return [REGISTRY_PROGRAM, *render_tree(counters, level=1)]


# ---------------------------------------------------------------------------
# Tool parameters
# ---------------------------------------------------------------------------

def _tool_parameters(
    client: RegistryClient,
    tool_name: str,
    usage_timeout: Optional[float],
) -> list[str]:
    try:
        usage = client.usage(tool_name, timeout=usage_timeout)
        schema = parse_tool_schema_strict(tool_name, usage)
    except (ProcessError, SchemaParsingError) as exc:
        logger.debug("No schema for tool %s: %s", tool_name, exc)
        return [tool_name, *render_tree(["req: -", "opt: -"], level=1)]

    required = ",".join(schema.required) or "-"
    optional = ",".join(schema.optional) or "-"
    return [tool_name, *render_tree([f"req: {required}", f"opt: {optional}"], level=1)]


def discover_registry(
    client: RegistryClient,
    path: Sequence[str] = (),
    usage_timeout: Optional[float] = None,
) -> RenderedReport:
    head = path[0] if path else None

    if head in LISTING_KINDS:
        items = _list_safe(client, head)
        lines = render_list(REGISTRY_PROGRAM, head, _item_labels(head, items))
    elif head == "tool":
        if len(path) < 2 or not path[1]:
            lines = [REGISTRY_PROGRAM, *render_tree(["tool <name>"], level=1)]
        else:
            lines = _tool_parameters(client, path[1], usage_timeout)
    else:
        if head is not None:
            logger.debug("Unknown registry path %s, showing overview", list(path))
        lines = _overview(client)

    return RenderedReport(lines=tuple(lines))
