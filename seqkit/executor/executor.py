from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence

from seqkit.errors import ArgumentError

from .types import Callback, Done, Task, TaskCallbackError, TaskError

logger = logging.getLogger(__name__)


class _ArrayRun:
    """One pass of ``task`` over ``params``, one step per loop turn.

    Every step is handed to ``loop.call_soon`` so the next task starts only
    after the previous ``done`` has returned and the stack has unwound.
    """

    def __init__(
        self,
        params: Sequence[Any],
        stop_on_error: bool,
        task: Task,
        callback: Callback,
        loop: asyncio.AbstractEventLoop,
    ):
        self.params = params
        self.stop_on_error = stop_on_error
        self.task = task
        self.callback = callback
        self.loop = loop
        self.results: list[Any] = []
        self.cursor = 0

    def start(self) -> None:
        self._schedule(0)

    def _schedule(self, index: int) -> None:
        logger.debug("Scheduling task %d of %d", index, len(self.params))
        self.loop.call_soon(self._step, index)

    def _step(self, index: int) -> None:
        done = _Done(self, index)
        try:
            self.task(index, self.params[index], done)
        except (Exception, asyncio.CancelledError) as exc:
            # Raising before reporting counts as the task's failure.
            if done.fired:
                raise
            done(exc, None)

    def _complete(self, index: int, err: Any, res: Any) -> None:
        if err:
            logger.debug("Task %d failed: %r", index, err)
            self.results.append(TaskError(index, err))
            if self.stop_on_error:
                self._finish()
                return
        else:
            self.results.append(res)

        self.cursor += 1
        if self.cursor < len(self.params):
            self._schedule(self.cursor)
        else:
            self._finish()

    def _finish(self) -> None:
        logger.debug(
            "Finished after %d of %d tasks", len(self.results), len(self.params)
        )
        self.callback(None, self.results)


class _Done:
    def __init__(self, run: _ArrayRun, index: int):
        self.run = run
        self.index = index
        self.fired = False

    def __call__(self, err: Any = None, res: Any = None) -> None:
        if self.fired:
            raise TaskCallbackError(self.index)
        self.fired = True
        self.run._complete(self.index, err, res)


def _check_args(params: Any, stop_on_error: Any, task: Any) -> None:
    if not isinstance(params, (list, tuple)):
        raise ArgumentError(
            f"argument 'params' must be a list or tuple, got {type(params)}"
        )
    if not isinstance(stop_on_error, bool):
        raise ArgumentError(
            f"argument 'stop_on_error' must be bool, got {type(stop_on_error)}"
        )
    if not callable(task):
        raise ArgumentError("argument 'task' must be callable")


def array_executor(
    params: Sequence[Any],
    stop_on_error: bool,
    task: Task,
    callback: Callback,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> None:
    """Run ``task(index, param, done)`` for every element of ``params``, in order.

    Tasks never overlap: task ``i + 1`` is scheduled only once task ``i`` has
    called ``done``. ``done(err, None)`` reports a failure, ``done(None, res)``
    a success; ``done`` may be called once.

    ``callback(None, results)`` is called exactly once, when every task has
    completed or, with ``stop_on_error``, right after the first failure.
    ``results[i]`` is the result of task ``i`` or a :class:`TaskError` wrapping
    what it reported. An empty ``params`` calls ``callback`` immediately.

    Steps run on ``loop`` (the running loop by default). A task that never
    calls ``done`` stalls the run; there is no timeout.
    """
    _check_args(params, stop_on_error, task)
    if not callable(callback):
        raise ArgumentError("argument 'callback' must be callable")

    if len(params) == 0:
        callback(None, [])
        return

    if loop is None:
        loop = asyncio.get_running_loop()

    _ArrayRun(params, stop_on_error, task, callback, loop).start()


async def run_array(
    params: Sequence[Any], stop_on_error: bool, task: Task
) -> list[Any]:
    """Awaitable form of :func:`array_executor` on the running loop."""
    loop = asyncio.get_running_loop()
    future: asyncio.Future[list[Any]] = loop.create_future()

    def callback(_err: None, results: list[Any]) -> None:
        if not future.done():
            future.set_result(results)

    array_executor(params, stop_on_error, task, callback, loop=loop)
    return await future


def _as_step(task: Callable[[int, Any], Awaitable[Any]]) -> Task:
    def step(index: int, param: Any, done: Done) -> None:
        fut = asyncio.ensure_future(task(index, param))

        def finished(f: asyncio.Future[Any]) -> None:
            if f.cancelled():
                done(asyncio.CancelledError(), None)
                return
            exc = f.exception()
            if exc is not None:
                done(exc, None)
            else:
                done(None, f.result())

        fut.add_done_callback(finished)

    return step


async def run_sequence(
    params: Sequence[Any],
    stop_on_error: bool,
    task: Callable[[int, Any], Awaitable[Any]],
) -> list[Any]:
    """Like :func:`run_array` for ``async def task(index, param)``.

    An exception raised by ``task`` is the failure, its return value the result.
    """
    _check_args(params, stop_on_error, task)
    return await run_array(params, stop_on_error, _as_step(task))
