"""Subprocess executor for target programs.

Every invocation runs `<program> <args...>` directly (never through a
shell) with stdin closed and a mandatory wall-clock timeout.

accept_output_on_error:
  Many CLIs print their help text and then exit non-zero, or hang after
  printing it. With this flag set, a non-zero exit or a timeout still
  returns whatever was captured. Without it both raise ProcessError.

A missing binary always raises, since there is no output to accept.
"""

import logging
import os
import subprocess
import time
from typing import Optional, Sequence

from climb.errors import ProcessError
from climb.process.types import ProcessResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0

# Hints for well-behaved CLIs; colour that still gets through is stripped by
# the parsers.
_QUIET_ENV = {"NO_COLOR": "1", "TERM": "dumb"}


class CLIExecutor:
    """Executes a single target program with varying arguments."""

    def __init__(
        self,
        program: str,
        default_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        extra_env: Optional[dict[str, str]] = None,
    ):
        self.program = program
        self.default_timeout = default_timeout
        self.extra_env = dict(extra_env or {})

    def _build_env(self) -> dict[str, str]:
        env = dict(os.environ)
        env.update(_QUIET_ENV)
        env.update(self.extra_env)
        return env

    def execute(
        self,
        args: Sequence[str],
        timeout: Optional[float] = None,
        accept_output_on_error: bool = False,
    ) -> ProcessResult:
        """Run the program and capture stdout/stderr.

        Raises:
            ProcessError: binary not found, OS-level spawn failure, or a
                timeout / non-zero exit when accept_output_on_error is off.
        """
        argv = (self.program, *args)
        timeout = timeout if timeout is not None else self.default_timeout
        logger.debug("Executing %s (timeout=%.1fs)", " ".join(argv), timeout)
        start = time.monotonic()

        try:
            completed = subprocess.run(
                list(argv),
                capture_output=True,
                stdin=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                env=self._build_env(),
            )
        except FileNotFoundError as exc:
            raise ProcessError(
                argv,
                reason="not_found",
                message=f"Program not found: {self.program}",
                cause=exc,
            )
        except subprocess.TimeoutExpired as exc:
            duration = time.monotonic() - start
            partial = _decode_partial(exc.stdout)
            if not accept_output_on_error:
                raise ProcessError(
                    argv,
                    reason="timeout",
                    message=f"Command timed out after {timeout:g}s: {' '.join(argv)}",
                    stdout=partial,
                    cause=exc,
                )
            logger.debug(
                "Timed out after %.1fs, keeping %d chars of output",
                duration,
                len(partial),
            )
            return ProcessResult(
                argv=argv,
                stdout=partial,
                stderr=_decode_partial(exc.stderr),
                exit_code=-1,
                duration_seconds=duration,
                timed_out=True,
            )
        except OSError as exc:
            raise ProcessError(
                argv,
                reason="os_error",
                message=f"Cannot execute {self.program}: {exc}",
                cause=exc,
            )

        result = ProcessResult(
            argv=argv,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            exit_code=completed.returncode,
            duration_seconds=time.monotonic() - start,
        )
        logger.debug("Finished %s", result.to_dict())

        if not result.is_success and not accept_output_on_error:
            raise ProcessError(
                argv,
                reason="exit",
                message=f"Command failed with exit code {result.exit_code}: {' '.join(argv)}",
                exit_code=result.exit_code,
                stdout=result.stdout,
            )
        return result


def _decode_partial(value: bytes | str | None) -> str:
    """TimeoutExpired carries raw bytes even in text mode."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
