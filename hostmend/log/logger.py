"""
Maintenance event recorder.

Two append-only sinks:
- main sink: every record
- error sink: ERROR records only, duplicated from the main sink

Each line reads ``timestamp [LEVEL] message``. Recording never raises: when a
sink can't be written, the failure is reported on the other sink, and if that
fails too the record is dropped.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import IO

from hostmend.config.types import LogConfig

SUMMARY = 25
logging.addLevelName(SUMMARY, "SUMMARY")

_FORMATTER = logging.Formatter(
    fmt="%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


class Level(Enum):
    INFO = logging.INFO
    SUMMARY = SUMMARY
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class _SinkHandler(logging.StreamHandler):
    """Stream handler that reports its own write failures to a fallback sink."""

    def __init__(self, name: str, stream: IO[str], *, owns_stream: bool) -> None:
        super().__init__(stream)
        self.set_name(name)
        self.setFormatter(_FORMATTER)
        self.owns_stream = owns_stream
        self.fallback: _SinkHandler | None = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.stream.write(self.format(record) + self.terminator)
            self.flush()
        except Exception as exc:
            self._report_failure(exc)

    def close(self) -> None:
        self.acquire()
        try:
            if self.owns_stream and self.stream is not None:
                self.stream.close()
                self.stream = None
        finally:
            self.release()
            super().close()

    def _report_failure(self, exc: Exception) -> None:
        fallback = self.fallback
        if fallback is None:
            return

        notice = logging.makeLogRecord(
            {
                "name": self.name,
                "levelno": logging.ERROR,
                "levelname": logging.getLevelName(logging.ERROR),
                "msg": f"log sink '{self.name}' failed: {exc!r}",
            }
        )
        try:
            fallback.stream.write(fallback.format(notice) + fallback.terminator)
            fallback.flush()
        except Exception:
            # Both sinks are broken; the record is dropped.
            return


def _open_sink(target: str | Path | IO[str]) -> tuple[IO[str], bool]:
    if isinstance(target, (str, Path)):
        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path.open("a", encoding="utf-8"), True
    return target, False


class MaintenanceLogger:
    """
    Dual-sink, leveled logger for a maintenance run.

    Sinks are file paths (opened in append mode) or open text streams. The
    underlying ``logging.Logger`` is private to the instance, so separate runs
    never share handlers.
    """

    def __init__(
        self,
        main: str | Path | IO[str],
        errors: str | Path | IO[str],
        *,
        console: IO[str] | None = None,
        name: str = "hostmend.run",
    ) -> None:
        main_stream, owns_main = _open_sink(main)
        error_stream, owns_errors = _open_sink(errors)

        self._main = _SinkHandler("main", main_stream, owns_stream=owns_main)
        self._main.setLevel(logging.INFO)

        self._errors = _SinkHandler("errors", error_stream, owns_stream=owns_errors)
        self._errors.setLevel(logging.ERROR)

        self._main.fallback = self._errors
        self._errors.fallback = self._main

        # Not registered with logging.getLogger on purpose: no shared state.
        self._logger = logging.Logger(name, logging.INFO)
        self._logger.propagate = False
        self._logger.addHandler(self._main)
        self._logger.addHandler(self._errors)

        self._console: _SinkHandler | None = None
        if console is not None:
            self._console = _SinkHandler("console", console, owns_stream=False)
            self._console.setLevel(logging.INFO)
            self._console.fallback = self._errors
            self._logger.addHandler(self._console)

    @classmethod
    def from_config(
        cls, config: LogConfig, *, console: IO[str] | None = None
    ) -> MaintenanceLogger:
        if console is None and config.console:
            console = sys.stderr
        return cls(config.main_path, config.error_path, console=console)

    def record(self, level: Level, message: str) -> None:
        self._logger.log(level.value, "%s", message)

    def info(self, message: str) -> None:
        self.record(Level.INFO, message)

    def warning(self, message: str) -> None:
        self.record(Level.WARNING, message)

    def error(self, message: str) -> None:
        self.record(Level.ERROR, message)

    def summary(self, message: str) -> None:
        self.record(Level.SUMMARY, message)

    def close(self) -> None:
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

    def __enter__(self) -> MaintenanceLogger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
