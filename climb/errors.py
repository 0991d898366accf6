"""Error types for climb.

Only ConfigurationError is allowed to escape a discovery call. ProcessError
is raised by the executor and caught wherever a probe or listing is made;
SchemaParsingError is converted into the "no parameters known" rendering.
"""

from typing import Optional, Sequence


class ClimbError(Exception):
    """Base class for climb errors.

    Carries the original exception (if any) and a hint telling the user
    what to do about it.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.cause = cause
        self.hint = hint
        super().__init__(message)


class ProcessError(ClimbError):
    """Raised by the executor when an invocation produced no usable result.

    reason is one of "not_found", "timeout", "exit" or "os_error".
    """

    def __init__(
        self,
        argv: Sequence[str],
        reason: str,
        message: str,
        exit_code: Optional[int] = None,
        stdout: str = "",
        cause: Optional[BaseException] = None,
    ):
        self.argv = list(argv)
        self.reason = reason
        self.exit_code = exit_code
        self.stdout = stdout
        super().__init__(message, cause=cause)


class ConfigurationError(ClimbError):
    """Raised when the target program cannot be resolved at all."""


class SchemaParsingError(ClimbError):
    """Raised when tool usage text contains no recognisable input schema."""

    def __init__(self, tool_name: str, cause: Optional[BaseException] = None):
        self.tool_name = tool_name
        super().__init__(
            f'Failed to parse schema for tool "{tool_name}"',
            cause=cause,
            hint="The tool may not publish an input schema.",
        )


def format_error(exc: BaseException) -> str:
    """Render an exception as plain text for standard error."""
    if not isinstance(exc, ClimbError):
        return f"error: {exc}"

    lines = [f"error: {exc.message}"]
    if exc.cause is not None:
        lines.append(f"caused by: {exc.cause}")
    if exc.hint:
        lines.append(f"hint: {exc.hint}")
    return "\n".join(lines)
