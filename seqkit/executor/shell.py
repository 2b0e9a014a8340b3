from __future__ import annotations

import asyncio
import logging
import os
import time
from dataclasses import dataclass
from typing import Any

from seqkit.config import RunConfig

from .executor import run_array
from .types import CommandFailed, CommandResult, Done, TaskError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    commands: list[str]
    results: list[Any]
    failed: list[int]
    skipped: list[int]


class ShellExecutor:
    def __init__(self, config: RunConfig):
        self.config = config

    async def _spawn(self, index: int, command: str) -> CommandResult:
        start = time.monotonic()
        proc = await asyncio.create_subprocess_shell(
            command,
            cwd=self.config.working_dir or None,
            env={**os.environ, **self.config.env},
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
        duration = time.monotonic() - start

        return CommandResult(
            index,
            command,
            proc.returncode,
            stdout.decode(errors="replace"),
            stderr.decode(errors="replace"),
            duration,
        )

    def _task(self, index: int, command: str, done: Done) -> None:
        logger.info("Running command %d: %s", index, command)

        def finished(fut: asyncio.Future[CommandResult]) -> None:
            if fut.cancelled():
                done(asyncio.CancelledError(), None)
                return
            exc = fut.exception()
            if exc is not None:
                done(exc, None)
                return
            result = fut.result()
            if result.returncode == 0:
                done(None, result)
            else:
                done(CommandFailed(result), None)

        asyncio.ensure_future(self._spawn(index, command)).add_done_callback(finished)

    async def run(self, *, stop_on_error: bool | None = None) -> RunResult:
        if stop_on_error is None:
            stop_on_error = self.config.stop_on_error

        commands = list(self.config)
        results = await run_array(commands, stop_on_error, self._task)

        failed = [i for i, r in enumerate(results) if isinstance(r, TaskError)]
        skipped = list(range(len(results), len(commands)))
        if failed:
            logger.warning("%d of %d commands failed", len(failed), len(commands))

        return RunResult(commands, results, failed, skipped)
