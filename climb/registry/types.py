"""Record types for the MCP registry CLI (mcpjungle).

Only the fields discovery renders are kept: names, enabled state, and the
tool input schema.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class MCPServer:
    name: str
    transport: str = "streamable_http"
    url: Optional[str] = None
    enabled: bool = True


@dataclass
class MCPTool:
    """A tool exposed by a registered server.

    canonical_name has the form `<server>__<tool>`.
    """

    name: str
    server_name: str
    canonical_name: str
    description: str = ""
    enabled: bool = True


@dataclass
class MCPPrompt:
    name: str
    server_name: str
    canonical_name: str
    description: str = ""
    enabled: bool = True


@dataclass
class ToolGroup:
    name: str
    description: Optional[str] = None
    endpoint: Optional[str] = None


@dataclass
class ToolSchema:
    """JSON-schema-like description of a tool's input."""

    type: str = "object"
    properties: dict[str, Any] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    @property
    def optional(self) -> list[str]:
        """Property names not listed as required, in declaration order."""
        return [name for name in self.properties if name not in self.required]

    @classmethod
    def from_dict(cls, data: dict) -> "ToolSchema":
        properties = data.get("properties")
        required = data.get("required")
        return cls(
            type=str(data.get("type") or "object"),
            properties=dict(properties) if isinstance(properties, dict) else {},
            required=[str(r) for r in required] if isinstance(required, list) else [],
        )
