# tests/test_cli.py
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from hostmend.cli import run_cli
from hostmend.tasks import DEFAULT_TASK_ORDER


def _py(code: str) -> list[str]:
    return [str(Path(sys.executable)), "-c", code]


def _write_config(path: Path, tmp_path: Path, *, enabled: list[str], **extra: object) -> Path:
    data = {
        "log": {"directory": str(tmp_path / "logs"), "console": False},
        "skip": [n for n in DEFAULT_TASK_ORDER if n not in enabled],
        "temp_dirs": [str(tmp_path / "temp")],
    }
    data.update(extra)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_list_prints_tasks_in_run_order(capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(["list"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert [line.split(":")[0] for line in out] == list(DEFAULT_TASK_ORDER)
    assert "update-install: retryable" in out
    assert "registry-backup: prerequisite-gated" in out


def test_list_honours_skip(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = _write_config(tmp_path / "hostmend.json", tmp_path, enabled=["temp-cleanup"])

    code = run_cli(["--config", str(cfg), "list"])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["temp-cleanup: independent"]


def test_run_reports_and_writes_log(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "temp").mkdir()
    (tmp_path / "temp" / "a.tmp").write_text("x", encoding="utf-8")
    cfg = _write_config(
        tmp_path / "hostmend.json", tmp_path, enabled=["log-cleanup", "temp-cleanup"]
    )

    code = run_cli(["--config", str(cfg), "run"])
    out = capsys.readouterr().out

    assert code == 0
    assert "OK log-cleanup" in out
    assert "OK temp-cleanup" in out
    assert not (tmp_path / "temp" / "a.tmp").exists()

    log = (tmp_path / "logs" / "maintenance.log").read_text(encoding="utf-8")
    assert "temp-cleanup: started" in log
    assert "[SUMMARY]" in log


def test_run_json_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = _write_config(tmp_path / "hostmend.json", tmp_path, enabled=["temp-cleanup"])

    code = run_cli(["--config", str(cfg), "run", "--json"])
    data = json.loads(capsys.readouterr().out)

    assert code == 0
    assert data["total"] == 1
    assert data["tasks"][0]["task"] == "temp-cleanup"
    assert data["tasks"][0]["status"] == "success"
    assert data["network_changes"] == []


def test_run_failure_returns_1(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = _write_config(
        tmp_path / "hostmend.json",
        tmp_path,
        enabled=["integrity-scan", "temp-cleanup"],
        commands={"sfc-scan": _py("raise SystemExit(5)")},
    )

    code = run_cli(["--config", str(cfg), "run"])
    out = capsys.readouterr().out

    assert code == 1
    assert "FAIL integrity-scan" in out
    assert "OK temp-cleanup" in out

    errors = (tmp_path / "logs" / "errors.log").read_text(encoding="utf-8")
    assert "integrity-scan failed: sfc-scan exited with code 5" in errors


def test_invalid_config_path_returns_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(["--config", str(tmp_path / "missing.json"), "list"])
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err != ""


def test_unknown_skip_returns_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "hostmend.json"
    cfg.write_text(
        json.dumps({"log": {"directory": str(tmp_path / "logs")}, "skip": ["defrag"]}),
        encoding="utf-8",
    )

    code = run_cli(["--config", str(cfg), "run"])
    captured = capsys.readouterr()

    assert code == 2
    assert "defrag" in captured.err
    assert not (tmp_path / "logs").exists()
