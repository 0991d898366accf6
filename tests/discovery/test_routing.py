"""Tests for request routing and discovery value types."""

import pytest

from climb.core.config import Settings
from climb.discovery.routing import RESERVED_TOKENS, is_structured, resolve_request
from climb.discovery.types import DiscoveryEntry, DiscoveryRequest, RenderedReport
from climb.errors import ConfigurationError


class TestResolveRequest:
    def test_first_token_is_target(self, settings):
        request = resolve_request(["git", "remote", "add"], settings)

        assert request.target == "git"
        assert request.path == ("remote", "add")

    @pytest.mark.parametrize("token", sorted(RESERVED_TOKENS))
    def test_reserved_token_uses_default_target(self, settings, token):
        request = resolve_request([token, "x"], settings)

        assert request.target == settings.target_cli
        assert request.path == (token, "x")

    def test_no_tokens_uses_default_target(self, settings):
        request = resolve_request([], settings)

        assert request.target == "mcpjungle"
        assert request.path == ()

    def test_reserved_tool_token_keeps_options_marker_in_path(self, settings):
        request = resolve_request(["tool", "x", "--"], settings)

        assert is_structured(request)
        assert request.target == "mcpjungle"
        assert request.path == ("tool", "x", "--")

    def test_structured_literal_as_target(self, settings):
        request = resolve_request(["mcpjungle", "tools"], settings)

        assert is_structured(request)
        assert request.path == ("tools",)

    def test_generic_target_is_not_structured(self, settings):
        assert not is_structured(resolve_request(["git"], settings))

    def test_missing_target_is_a_configuration_error(self):
        settings = Settings(_env_file=None, target_cli="")

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_request([], settings)

        assert "CLIMB_TARGET_CLI" in exc_info.value.hint

    def test_reserved_token_without_default_is_a_configuration_error(self):
        settings = Settings(_env_file=None, target_cli="   ")

        with pytest.raises(ConfigurationError):
            resolve_request(["servers"], settings)


class TestDiscoveryRequest:
    def test_options_marker(self):
        request = DiscoveryRequest(target="git", path=("build", "--"))

        assert request.wants_options is True
        assert request.base_path == ("build",)
        assert request.title == "git build"

    def test_subcommand_mode(self):
        request = DiscoveryRequest(target="git", path=("remote",))

        assert request.wants_options is False
        assert request.base_path == ("remote",)

    def test_root_options(self):
        request = DiscoveryRequest(target="git", path=("--",))

        assert request.wants_options is True
        assert request.base_path == ()
        assert request.title == "git"


class TestValueTypes:
    def test_entry_label(self):
        assert DiscoveryEntry("push", 0.9).label == "push [c=0.90]"
        assert DiscoveryEntry("remote", 0.75, has_subcommands=True).label == "remote [c=0.75, sub]"

    def test_report_text(self):
        report = RenderedReport(lines=("git", "└─ push [c=0.90]"))
        assert report.text == "git\n└─ push [c=0.90]\n"
