"""Parsers for mcpjungle CLI output.

The registry CLI prints either box-drawn tables or simple one-per-line
listings depending on version, so every parser accepts both. Parsers never
raise: unrecognisable output yields an empty list (or None for schemas).
"""

import json
import logging
import re
from typing import Optional

from climb.errors import SchemaParsingError
from climb.help.ansi import strip_ansi
from climb.registry.types import MCPPrompt, MCPServer, MCPTool, ToolGroup, ToolSchema

logger = logging.getLogger(__name__)

_RULE_MARKERS = ("───", "---", "═══")
_CELL_SPLIT = re.compile(r"[│|]")
_SIMPLE_SERVER = re.compile(r"^([^\s(]+)(?:\s+\(([^)]+)\))?")
_COLUMN_SPLIT = re.compile(r"\s{2,}")
_HEADER_NAME = re.compile(r"\bname\b", re.IGNORECASE)
_TEXT_PARAM = re.compile(r"[-•]\s*(\w+)\s*\((\w+)\)(?:\s*:\s*(.+))?")


def _clean(raw_output: str) -> str:
    return strip_ansi(raw_output or "").strip()


def _is_empty_listing(clean: str, kind: str) -> bool:
    lowered = clean.lower()
    return not clean or f"no {kind}" in lowered or "connection refused" in lowered


def _content_lines(clean: str) -> list[str]:
    return [
        line
        for line in clean.split("\n")
        if line.strip() and not any(marker in line for marker in _RULE_MARKERS)
    ]


def _cells(line: str) -> list[str]:
    return [cell.strip() for cell in _CELL_SPLIT.split(line) if cell.strip()]


def _is_table_row(line: str) -> bool:
    return "│" in line or "|" in line


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

def parse_servers(raw_output: str) -> list[MCPServer]:
    """Parse `mcpjungle list servers`.

    Table rows: name | transport | url | status. Simple rows:
    `name (transport)`.
    """
    clean = _clean(raw_output)
    if _is_empty_listing(clean, "servers"):
        return []

    lines = _content_lines(clean)
    if lines and (_HEADER_NAME.search(lines[0]) or "│" in lines[0]):
        lines = lines[1:]

    servers: list[MCPServer] = []
    for line in lines:
        line = line.strip()
        if _is_table_row(line):
            parts = _cells(line)
            if len(parts) < 2:
                continue
            status = parts[3].lower() if len(parts) > 3 else ""
            servers.append(MCPServer(
                name=parts[0],
                transport=parts[1] or "streamable_http",
                url=parts[2] if len(parts) > 2 else None,
                enabled=status != "disabled",
            ))
            continue

        match = _SIMPLE_SERVER.match(line)
        if match:
            servers.append(MCPServer(
                name=match.group(1),
                transport=match.group(2) or "streamable_http",
            ))
    return servers


def parse_tools(raw_output: str) -> list[MCPTool]:
    """Parse `mcpjungle list tools`; only `server__tool` names are kept."""
    clean = _clean(raw_output)
    if _is_empty_listing(clean, "tools"):
        return []

    lines = _content_lines(clean)
    if lines and "__" not in lines[0] and ("tool" in lines[0].lower() or "│" in lines[0]):
        lines = lines[1:]

    tools: list[MCPTool] = []
    for line in lines:
        line = line.strip()
        if _is_table_row(line):
            parts = _cells(line)
            canonical = parts[0] if parts else ""
            description = parts[1] if len(parts) > 1 else ""
        else:
            canonical, _, description = line.partition(" ")
            description = description.strip()

        if "__" not in canonical:
            continue
        server_name, _, tool_name = canonical.partition("__")
        tools.append(MCPTool(
            name=tool_name,
            server_name=server_name,
            canonical_name=canonical,
            description=description,
        ))
    return tools


def parse_prompts(raw_output: str) -> list[MCPPrompt]:
    """Parse `mcpjungle list prompts`."""
    clean = _clean(raw_output)
    if _is_empty_listing(clean, "prompts"):
        return []

    prompts: list[MCPPrompt] = []
    for line in clean.split("\n"):
        if "__" not in line:
            continue
        parts = line.split()
        canonical = parts[0]
        server_name, _, prompt_name = canonical.partition("__")
        prompts.append(MCPPrompt(
            name=prompt_name,
            server_name=server_name,
            canonical_name=canonical,
            description=" ".join(parts[1:]),
        ))
    return prompts


def parse_groups(raw_output: str) -> list[ToolGroup]:
    """Parse `mcpjungle list groups`: name, description, endpoint columns."""
    clean = _clean(raw_output)
    if _is_empty_listing(clean, "groups"):
        return []

    groups: list[ToolGroup] = []
    for line in _content_lines(clean):
        parts = _COLUMN_SPLIT.split(line.strip())
        if not parts or not parts[0]:
            continue
        groups.append(ToolGroup(
            name=parts[0],
            description=parts[1] if len(parts) > 1 else None,
            endpoint=parts[2] if len(parts) > 2 else None,
        ))
    return groups


# ---------------------------------------------------------------------------
# Tool schema
# ---------------------------------------------------------------------------

def parse_tool_schema(raw_output: str) -> Optional[ToolSchema]:
    """Extract the input schema from `mcpjungle usage <tool>` output.

    Looks for the first embedded JSON object that describes an object
    schema; failing that, falls back to `- name (type): description`
    parameter lines. Returns None when neither is present.
    """
    clean = strip_ansi(raw_output or "")

    schema = _find_json_schema(clean)
    if schema is not None:
        return schema
    return _parse_schema_from_text(clean)


def parse_tool_schema_strict(tool_name: str, raw_output: str) -> ToolSchema:
    """Like parse_tool_schema, but raises SchemaParsingError on failure."""
    schema = parse_tool_schema(raw_output)
    if schema is None:
        raise SchemaParsingError(tool_name)
    return schema


def _find_json_schema(text: str) -> Optional[ToolSchema]:
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            value, end = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        found = _schema_in(value)
        if found is not None:
            return ToolSchema.from_dict(found)
        start = text.find("{", end)
    return None


def _schema_in(value: object) -> Optional[dict]:
    """Depth-first search for a dict that looks like an object schema."""
    if isinstance(value, dict):
        if value.get("type") == "object" or isinstance(value.get("properties"), dict):
            return value
        children = list(value.values())
    elif isinstance(value, list):
        children = value
    else:
        return None
    for child in children:
        found = _schema_in(child)
        if found is not None:
            return found
    return None


def _parse_schema_from_text(text: str) -> Optional[ToolSchema]:
    schema = ToolSchema()
    for match in _TEXT_PARAM.finditer(text):
        name, type_name, description = match.groups()
        schema.properties[name] = {
            "type": type_name.lower(),
            "description": description.strip() if description else None,
        }
    if not schema.properties:
        logger.debug("No schema found in usage output")
        return None
    return schema
