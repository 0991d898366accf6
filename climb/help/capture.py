"""Help capture protocol.

For a command path, try the usual ways of asking a CLI for help, in order:

    <path...> --help
    <path...> -h
    help <path...>

and return the first output that isn't blank. Each attempt accepts output
from a non-zero exit (lots of CLIs print help and exit 1 or 2). An empty
string means no help was available; it is a normal result, not an error.
"""

import logging
from typing import Sequence

from climb.errors import ProcessError
from climb.process.types import Executor, ProcessResult

logger = logging.getLogger(__name__)

HELP_TIMEOUT_SECONDS = 8.0


def help_probes(path: Sequence[str]) -> list[list[str]]:
    """Argument lists tried for `path`, in order."""
    return [
        [*path, "--help"],
        [*path, "-h"],
        ["help", *path],
    ]


def _probe_output(result: ProcessResult) -> str:
    # Usage errors often go to stderr; a pseudo-terminal would have merged them.
    if result.stdout.strip():
        return result.stdout
    return result.stderr


def capture_help(
    executor: Executor,
    path: Sequence[str],
    timeout: float = HELP_TIMEOUT_SECONDS,
) -> str:
    """Return the first non-blank help output for `path`, or ""."""
    for args in help_probes(path):
        try:
            result = executor.execute(args, timeout=timeout, accept_output_on_error=True)
        except (ProcessError, OSError) as exc:
            logger.debug("Help probe %s failed: %s", args, exc)
            continue

        if not result.is_success:
            logger.debug("Help probe %s: %s", args, result.to_dict())

        output = _probe_output(result)
        if output.strip():
            return output
        logger.debug("Help probe %s returned no output", args)

    logger.debug("No help available for path %s", list(path))
    return ""
