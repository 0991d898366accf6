"""Tests for mcpjungle output parsers."""

import pytest

from climb.errors import SchemaParsingError
from climb.registry.parser import (
    parse_groups,
    parse_prompts,
    parse_servers,
    parse_tool_schema,
    parse_tool_schema_strict,
    parse_tools,
)

SERVER_TABLE = """\
NAME     │ TRANSPORT       │ URL                    │ STATUS
─────────┼─────────────────┼────────────────────────┼─────────
github   │ streamable_http │ https://gh.example/mcp │ enabled
time     │ stdio           │ -                      │ disabled
"""


class TestParseServers:
    def test_table(self):
        servers = parse_servers(SERVER_TABLE)

        assert [s.name for s in servers] == ["github", "time"]
        assert servers[0].transport == "streamable_http"
        assert servers[0].url == "https://gh.example/mcp"
        assert servers[0].enabled is True
        assert servers[1].enabled is False

    def test_simple_lines(self):
        servers = parse_servers("github (streamable_http)\ntime (stdio)\n")

        assert [(s.name, s.transport) for s in servers] == [
            ("github", "streamable_http"),
            ("time", "stdio"),
        ]

    def test_coloured_output(self):
        servers = parse_servers("\x1b[32mgithub\x1b[0m (stdio)")
        assert [s.name for s in servers] == ["github"]

    @pytest.mark.parametrize("raw", [
        "",
        "No servers registered",
        "Error: dial tcp 127.0.0.1:8080: connection refused",
    ])
    def test_empty_listings(self, raw):
        assert parse_servers(raw) == []


class TestParseTools:
    def test_simple_lines(self):
        tools = parse_tools(
            "github__create_issue  Create an issue\n"
            "time__now  Current time\n"
            "not a tool line\n"
        )

        assert [t.canonical_name for t in tools] == ["github__create_issue", "time__now"]
        assert tools[0].server_name == "github"
        assert tools[0].name == "create_issue"
        assert tools[0].description == "Create an issue"

    def test_table_header_skipped(self):
        tools = parse_tools(
            "TOOL                 │ DESCRIPTION\n"
            "─────────────────────┼────────────\n"
            "github__create_issue │ Create an issue\n"
        )

        assert len(tools) == 1
        assert tools[0].description == "Create an issue"

    def test_no_tools(self):
        assert parse_tools("No tools available") == []


class TestParsePromptsAndGroups:
    def test_prompts(self):
        prompts = parse_prompts("github__summarize_pr  Summarize a pull request\nnoise\n")

        assert len(prompts) == 1
        assert prompts[0].canonical_name == "github__summarize_pr"
        assert prompts[0].name == "summarize_pr"
        assert prompts[0].description == "Summarize a pull request"

    def test_groups(self):
        groups = parse_groups(
            "dev-tools    Tools for development    http://127.0.0.1:8080/v0/groups/dev\n"
            "ops\n"
        )

        assert [g.name for g in groups] == ["dev-tools", "ops"]
        assert groups[0].description == "Tools for development"
        assert groups[0].endpoint == "http://127.0.0.1:8080/v0/groups/dev"
        assert groups[1].description is None

    def test_no_groups(self):
        assert parse_groups("No groups configured") == []


class TestParseToolSchema:
    def test_embedded_json(self):
        raw = (
            "Tool: github__create_issue\n"
            "Input Schema:\n"
            '{"type": "object", "properties": {"repo": {"type": "string"}, '
            '"title": {"type": "string"}, "body": {}}, "required": ["repo", "title"]}\n'
        )
        schema = parse_tool_schema(raw)

        assert schema.required == ["repo", "title"]
        assert schema.optional == ["body"]

    def test_nested_schema(self):
        raw = '{"name": "x", "inputSchema": {"type": "object", "properties": {"a": {}}}}'
        schema = parse_tool_schema(raw)

        assert list(schema.properties) == ["a"]
        assert schema.required == []

    def test_text_fallback(self):
        raw = "Parameters:\n- repo (string): Repository name\n- limit (integer)\n"
        schema = parse_tool_schema(raw)

        assert list(schema.properties) == ["repo", "limit"]
        assert schema.properties["repo"]["description"] == "Repository name"
        assert schema.optional == ["repo", "limit"]

    def test_broken_json_falls_back(self):
        assert parse_tool_schema("{not json at all") is None

    def test_nothing_found(self):
        assert parse_tool_schema("This tool takes no input.") is None

    def test_strict_raises(self):
        with pytest.raises(SchemaParsingError) as exc_info:
            parse_tool_schema_strict("time__now", "nothing here")

        assert exc_info.value.tool_name == "time__now"
        assert "time__now" in exc_info.value.message
