from .executor import array_executor, run_array, run_sequence
from .shell import RunResult, ShellExecutor
from .types import CommandFailed, CommandResult, TaskCallbackError, TaskError

__all__ = [
    "array_executor",
    "run_array",
    "run_sequence",
    "ShellExecutor",
    "RunResult",
    "CommandResult",
    "CommandFailed",
    "TaskError",
    "TaskCallbackError",
]
