# tests/test_executor.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest

from hostmend.executor import DEFAULT_COMMANDS, CommandError, MaintenanceError, SubprocessExecutor
from hostmend.runner.types import TaskFailure


def _py(code: str) -> list[str]:
    """
    Command line that runs `python -c "<code>"` with the current interpreter.
    """
    return [str(Path(sys.executable)), "-c", code]


def test_exit_status_and_output_are_captured() -> None:
    ex = SubprocessExecutor({"hello": _py("print('hi'); raise SystemExit(3)")})

    outcome = ex.execute("hello")

    assert outcome.exit_status == 3
    assert outcome.ok is False
    assert outcome.output.strip() == "hi"


def test_stderr_is_part_of_output() -> None:
    ex = SubprocessExecutor({"warn": _py("import sys; sys.stderr.write('careful')")})

    outcome = ex.execute("warn")

    assert outcome.ok
    assert "careful" in outcome.output


def test_arguments_are_appended_without_placeholders() -> None:
    ex = SubprocessExecutor({"echo": _py("import sys; print(' '.join(sys.argv[1:]))")})

    outcome = ex.execute("echo", ["a", "b c"])

    assert outcome.output.strip() == "a b c"


def test_placeholders_are_filled_in_place() -> None:
    ex = SubprocessExecutor({"netsh": ["netsh", "name={0}", "admin=disabled"]})

    assert ex.argv_for("netsh", ["Ethernet 2"]) == ["netsh", "name=Ethernet 2", "admin=disabled"]


def test_missing_placeholder_argument_raises() -> None:
    ex = SubprocessExecutor()

    with pytest.raises(CommandError):
        ex.argv_for("registry-export", ["HKLM\\SOFTWARE"])


def test_unknown_operation_raises() -> None:
    with pytest.raises(CommandError, match="unknown operation"):
        SubprocessExecutor().execute("defrag")


def test_missing_binary_raises_command_error(tmp_path: Path) -> None:
    ex = SubprocessExecutor({"ghost": [str(tmp_path / "no-such-binary")]})

    with pytest.raises(CommandError):
        ex.execute("ghost")


def test_overrides_replace_defaults_only_for_given_operations() -> None:
    ex = SubprocessExecutor({"sfc-scan": ["true"]})

    assert ex.commands["sfc-scan"] == ["true"]
    assert ex.commands["pnputil-scan"] == DEFAULT_COMMANDS["pnputil-scan"]


def test_command_errors_and_task_failures_share_a_base() -> None:
    assert issubclass(CommandError, MaintenanceError)
    assert issubclass(TaskFailure, MaintenanceError)
