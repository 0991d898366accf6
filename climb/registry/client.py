"""Client for the mcpjungle registry CLI.

Each call runs one `mcpjungle` subcommand through an Executor and parses
its output. Failures (missing binary, timeout, non-zero exit) surface as
ProcessError; the caller decides how to degrade.
"""

import logging
from typing import Optional

from climb.core.config import DEFAULT_REGISTRY_URL
from climb.process.types import Executor
from climb.registry.parser import parse_groups, parse_prompts, parse_servers, parse_tools
from climb.registry.types import MCPPrompt, MCPServer, MCPTool, ToolGroup

logger = logging.getLogger(__name__)

REGISTRY_PROGRAM = "mcpjungle"


class RegistryClient:
    def __init__(
        self,
        executor: Executor,
        registry_url: str = DEFAULT_REGISTRY_URL,
        timeout: Optional[float] = None,
    ):
        self.executor = executor
        self.registry_url = registry_url
        self.timeout = timeout

    def _args(self, *args: str) -> list[str]:
        # The CLI already targets the default registry; only pass non-default URLs.
        final = list(args)
        if self.registry_url and self.registry_url != DEFAULT_REGISTRY_URL:
            final += ["--registry", self.registry_url]
        return final

    def _run(self, *args: str, timeout: Optional[float] = None) -> str:
        result = self.executor.execute(
            self._args(*args),
            timeout=timeout if timeout is not None else self.timeout,
        )
        return result.stdout

    def list_servers(self) -> list[MCPServer]:
        return parse_servers(self._run("list", "servers"))

    def list_tools(self) -> list[MCPTool]:
        return parse_tools(self._run("list", "tools"))

    def list_groups(self) -> list[ToolGroup]:
        return parse_groups(self._run("list", "groups"))

    def list_prompts(self) -> list[MCPPrompt]:
        return parse_prompts(self._run("list", "prompts"))

    def usage(self, tool_name: str, timeout: Optional[float] = None) -> str:
        """Raw `usage <tool>` output; schema extraction is up to the caller."""
        return self._run("usage", tool_name, timeout=timeout)
