from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seqkit")

    parser.add_argument(
        "--config",
        default="seqkit.yml",
        help="Path to config file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log runner activity to stderr",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # run
    run = subparsers.add_parser("run", help="Run commands one after another")
    run.add_argument(
        "--stop-on-error",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Stop at the first failing command (default: from config)",
    )

    # get
    get = subparsers.add_parser("get", help="Print the value at a dotted path")
    get.add_argument("path", help="Dotted path, e.g. env.HOME")

    # pick
    pick = subparsers.add_parser("pick", help="Print a copy keeping only some keys")
    pick.add_argument("keys", nargs="+", help="Keys to keep")
    pick.add_argument(
        "--at",
        default=None,
        help="Dotted path of the object or list of objects to copy",
    )

    return parser
