from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from seqkit.config import ConfigError, load_document, load_run_config
from seqkit.executor import CommandFailed, RunResult, ShellExecutor, TaskError
from seqkit.util import get_path_value, object_copy

from .args import build_parser


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        _setup_logging(args.verbose)

        match args.command:
            case "run":
                return cmd_run(args)
            case "get":
                return cmd_get(args)
            case "pick":
                return cmd_pick(args)
            case _:
                return 2

    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def cmd_run(args: argparse.Namespace) -> int:
    config = load_run_config(args.config)
    executor = ShellExecutor(config)
    rr = asyncio.run(executor.run(stop_on_error=args.stop_on_error))
    _print_result(rr)
    return 1 if rr.failed else 0


def cmd_get(args: argparse.Namespace) -> int:
    document = load_document(args.config)
    print(json.dumps(get_path_value(document, args.path), default=str))
    return 0


def cmd_pick(args: argparse.Namespace) -> int:
    document = load_document(args.config)
    source = document if args.at is None else get_path_value(document, args.at)
    print(json.dumps(object_copy(source, args.keys), default=str))
    return 0


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_result(rr: RunResult) -> None:
    for index, command in enumerate(rr.commands):
        if index in rr.skipped:
            print(f"SKIP {index} {command}")
            continue

        entry = rr.results[index]
        if isinstance(entry, TaskError) and not isinstance(entry.cause, CommandFailed):
            print(f"FAIL {index} {command}: {entry.cause}")
            continue

        if isinstance(entry, TaskError):
            status, result = "FAIL", entry.cause.result
        else:
            status, result = "OK", entry
        print(
            f"{status} {index} {command}, {result.duration_s:.3f}s, exit code = {result.returncode}"
        )
