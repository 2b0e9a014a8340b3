from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

Done = Callable[[Any, Any], None]
Task = Callable[[int, Any, Done], None]
Callback = Callable[[None, list[Any]], None]


class TaskError(Exception):
    """Failure of a single task, wrapped with its position in the parameter list.

    ``cause`` is whatever the task reported, untouched. When it is an exception
    it is also chained as ``__cause__`` so tracebacks show it.
    """

    def __init__(self, index: int, cause: Any) -> None:
        super().__init__(f"Task {index} failed")
        self.index = index
        self.cause = cause
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    @property
    def message(self) -> str:
        return str(self.args[0])


class TaskCallbackError(RuntimeError):
    def __init__(self, index: int) -> None:
        super().__init__(f"Completion callback of task {index} called more than once")
        self.index = index


@dataclass(frozen=True)
class CommandResult:
    index: int
    command: str
    returncode: int
    stdout: str
    stderr: str
    duration_s: float


class CommandFailed(Exception):
    def __init__(self, result: CommandResult) -> None:
        super().__init__(
            f"Command {result.index} exited with code {result.returncode}: {result.command}"
        )
        self.result = result
