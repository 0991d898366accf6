"""Process capability: run a target program with a timeout.

Public API:
    CLIExecutor(program).execute(args, timeout, accept_output_on_error) -> ProcessResult
"""

from climb.process.executor import CLIExecutor
from climb.process.types import Executor, ProcessResult

__all__ = ["CLIExecutor", "Executor", "ProcessResult"]
