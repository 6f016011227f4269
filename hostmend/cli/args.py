from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hostmend")

    parser.add_argument(
        "--config",
        default=None,
        help="Path to config file (.yml/.yaml, .toml, .json); defaults apply when omitted",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # run
    run = subparsers.add_parser("run", help="Run the maintenance tasks")
    run.add_argument(
        "--json",
        action="store_true",
        help="Print the run summary as JSON",
    )

    # list
    subparsers.add_parser("list", help="List the tasks that would run, in order")

    return parser
