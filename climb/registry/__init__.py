"""Structured listing of an MCP registry through the mcpjungle CLI.

Public API:
    RegistryClient(executor).list_servers() / list_tools() / list_groups()
    / list_prompts() / usage(tool_name)
"""

from climb.registry.client import REGISTRY_PROGRAM, RegistryClient
from climb.registry.types import MCPPrompt, MCPServer, MCPTool, ToolGroup, ToolSchema

__all__ = [
    "REGISTRY_PROGRAM",
    "RegistryClient",
    "MCPPrompt",
    "MCPServer",
    "MCPTool",
    "ToolGroup",
    "ToolSchema",
]
