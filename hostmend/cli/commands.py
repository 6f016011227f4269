from __future__ import annotations

import argparse
import io
import json
import sys

from hostmend.config import ConfigError, MaintenanceConfig, load_config
from hostmend.executor import SubprocessExecutor
from hostmend.log import MaintenanceLogger
from hostmend.runner import Orchestrator, RunSummary, TaskStatus
from hostmend.tasks import build_tasks

from .args import build_parser


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)

        match args.command:
            case "run":
                return cmd_run(args)
            case "list":
                return cmd_list(args)
            case _:
                return 2

    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def cmd_run(args: argparse.Namespace) -> int:
    config = _config_from(args)
    with MaintenanceLogger.from_config(config.log) as logger:
        executor = SubprocessExecutor(config.commands)
        orchestrator = Orchestrator(build_tasks(config, executor, logger), logger)
        run = orchestrator.run()
        summary = orchestrator.summarize(run)

    if args.json:
        print(json.dumps(summary.as_dict(), indent=2))
    else:
        _print_summary(summary)
    return 1 if run.failed else 0


def cmd_list(args: argparse.Namespace) -> int:
    config = _config_from(args)
    # Listing builds the tasks without touching the log files.
    with MaintenanceLogger(io.StringIO(), io.StringIO()) as logger:
        tasks = build_tasks(config, SubprocessExecutor(config.commands), logger)
    for task in tasks:
        print(f"{task.name}: {task.category.value}")
    return 0


def _config_from(args: argparse.Namespace) -> MaintenanceConfig:
    if args.config is None:
        return MaintenanceConfig()
    return load_config(args.config)


def _print_summary(summary: RunSummary) -> None:
    labels = {
        TaskStatus.SUCCESS: "OK",
        TaskStatus.RECOVERED_AFTER_RETRY: "RECOVERED",
        TaskStatus.FAILURE: "FAIL",
        TaskStatus.SKIPPED: "SKIP",
    }
    for row in summary.rows:
        print(f"{labels[row.status]} {row.task_name}, {row.duration_s:.3f}s, {row.message}")

    for change in summary.adapter_changes:
        if change.changed:
            print(
                f"NET {change.name}: {change.before.status.value} -> {change.after.status.value}"
            )

    counts = " ".join(f"{status.value}={n}" for status, n in summary.counts.items())
    print(f"{summary.total} tasks, {summary.duration_s:.1f}s, {counts}")
