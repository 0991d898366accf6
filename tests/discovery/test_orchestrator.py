"""Tests for the top-level discover() entry point."""

from unittest.mock import MagicMock, patch

import pytest

from climb.core.config import Settings
from climb.discovery.orchestrator import discover
from climb.errors import ConfigurationError


@pytest.fixture
def factory(make_executor):
    """Executor factory recording how executors were built."""

    class Factory:
        def __init__(self):
            self.responses: dict = {}
            self.created: list = []

        def __call__(self, program, default_timeout=None):
            executor = make_executor(self.responses, program=program)
            self.created.append((program, default_timeout, executor))
            return executor

    return Factory()


class TestRouting:
    def test_generic_target(self, settings, factory):
        factory.responses = {("--help",): "Commands:\n  push   Push changes\n"}

        report = discover(["git"], settings=settings, executor_factory=factory)

        assert report.lines == ("git", "└─ push [c=0.90]")
        program, default_timeout, _ = factory.created[0]
        assert program == "git"
        assert default_timeout == settings.help_timeout_seconds

    def test_probes_use_help_timeout(self, factory):
        settings = Settings(_env_file=None, help_timeout_seconds=2.0)

        discover(["git", "remote"], settings=settings, executor_factory=factory)

        executor = factory.created[0][2]
        assert {call[1] for call in executor.calls} == {2.0}

    def test_reserved_token_routes_to_registry(self, settings, factory):
        factory.responses = {("list", "servers"): "github (stdio)\n"}

        report = discover(["servers"], settings=settings, executor_factory=factory)

        assert report.lines == ("mcpjungle", "└─ servers [n=1]", "   └─ github [on]")
        program, default_timeout, _ = factory.created[0]
        assert program == settings.registry_binary
        assert default_timeout == settings.registry_timeout_seconds

    def test_structured_literal_routes_to_registry(self, settings, factory):
        report = discover(["mcpjungle"], settings=settings, executor_factory=factory)

        assert report.lines == (
            "mcpjungle",
            "├─ servers [n=0]",
            "├─ tools [n=0]",
            "├─ groups [n=0]",
            "└─ prompts [n=0]",
        )

    def test_option_mode(self, settings, factory):
        factory.responses = {("build", "--help"): "Options:\n  -o, --output <file>  Output path\n"}

        report = discover(["mytool", "build", "--"], settings=settings, executor_factory=factory)

        assert report.lines == ("mytool build options", "└─ -o,--output <file>")

    def test_reserved_tool_token_wins_over_option_marker(self, settings, factory):
        report = discover(["tool", "x", "--"], settings=settings, executor_factory=factory)

        assert report.lines == ("x", "├─ req: -", "└─ opt: -")
        assert factory.created[0][0] == settings.registry_binary
        assert factory.created[0][2].argv_calls == [("usage", "x")]

    def test_configuration_error_propagates(self, factory):
        settings = Settings(_env_file=None, target_cli="")

        with pytest.raises(ConfigurationError):
            discover([], settings=settings, executor_factory=factory)
        assert factory.created == []


class TestWithRealExecutor:
    @patch("climb.process.executor.subprocess.run")
    def test_help_captured_through_subprocess(self, mock_run, settings):
        def fake_run(argv, **kwargs):
            if argv == ["git", "--help"]:
                return MagicMock(returncode=1, stdout="Commands:\n  push   Push changes\n", stderr="")
            return MagicMock(returncode=0, stdout="", stderr="")

        mock_run.side_effect = fake_run

        report = discover(["git"], settings=settings)

        assert report.text == "git\n└─ push [c=0.90]\n"

    @patch("climb.process.executor.subprocess.run")
    def test_missing_program_is_not_fatal(self, mock_run, settings):
        mock_run.side_effect = FileNotFoundError("no such file")

        report = discover(["nonexistent-tool"], settings=settings)

        assert report.lines == ("nonexistent-tool", "└─ (no further subcommands detected)")
