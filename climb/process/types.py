"""Types for the process capability.

ProcessResult is what every external invocation returns. Executor is the
single seam between discovery code and real subprocesses; tests substitute
their own implementation.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence


@dataclass(frozen=True)
class ProcessResult:
    """Captured output of one invocation.

    exit_code is -1 when the process was killed on timeout.
    """

    argv: tuple[str, ...]
    stdout: str
    stderr: str
    exit_code: int
    duration_seconds: float
    timed_out: bool = False

    @property
    def is_success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out

    def to_dict(self) -> dict:
        return {
            "argv": list(self.argv),
            "exit_code": self.exit_code,
            "duration_seconds": round(self.duration_seconds, 3),
            "timed_out": self.timed_out,
            "stdout_lines": self.stdout.count("\n") + 1 if self.stdout else 0,
            "stderr_lines": self.stderr.count("\n") + 1 if self.stderr else 0,
        }


class Executor(Protocol):
    """Runs the target program with extra arguments."""

    def execute(
        self,
        args: Sequence[str],
        timeout: Optional[float] = None,
        accept_output_on_error: bool = False,
    ) -> ProcessResult:
        ...
