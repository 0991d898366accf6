"""Shared fakes for climb tests.

FakeExecutor stands in for CLIExecutor: it maps argument tuples to canned
output (or to an exception to raise) and records every call. No test spawns
a real process.
"""

import logging
from typing import Optional, Sequence

import pytest
import structlog

from climb.core.config import Settings
from climb.process.types import ProcessResult


class FakeExecutor:
    def __init__(self, responses: Optional[dict] = None, program: str = "tool", default=""):
        self.program = program
        self.responses = {tuple(k): v for k, v in (responses or {}).items()}
        self.default = default
        self.calls: list[tuple[tuple[str, ...], Optional[float], bool]] = []

    def execute(
        self,
        args: Sequence[str],
        timeout: Optional[float] = None,
        accept_output_on_error: bool = False,
    ) -> ProcessResult:
        key = tuple(args)
        self.calls.append((key, timeout, accept_output_on_error))
        response = self.responses.get(key, self.default)
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, ProcessResult):
            return response
        return ProcessResult(
            argv=(self.program, *key),
            stdout=response,
            stderr="",
            exit_code=0,
            duration_seconds=0.0,
        )

    @property
    def argv_calls(self) -> list[tuple[str, ...]]:
        return [call[0] for call in self.calls]


@pytest.fixture
def make_executor():
    return FakeExecutor


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, target_cli="mcpjungle")


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
