from __future__ import annotations

import shutil
import tempfile
import time
from datetime import datetime
from pathlib import Path
from typing import Callable

from hostmend.executor.types import CommandExecutor
from hostmend.runner.types import ActionOutcome, CommandFailed, TaskFailure
from hostmend.runner.waiting import wait_until

from .base import GatedAction


def _is_released(path: Path) -> bool:
    try:
        with path.open("ab"):
            return True
    except OSError:
        return False


class RegistryBackup(GatedAction):
    """
    Export a registry key to a temporary file (the prerequisite), archive the
    export, then delete the temporary file once the exporter has let go of it.
    """

    operation = "registry-export"

    def __init__(
        self,
        executor: CommandExecutor,
        key: str,
        backup_dir: Path,
        *,
        release_timeout_s: float = 10.0,
        poll_interval_s: float = 0.5,
        temp_dir: Path | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.executor = executor
        self.key = key
        self.backup_dir = backup_dir
        self.release_timeout_s = release_timeout_s
        self.poll_interval_s = poll_interval_s
        self.temp_dir = temp_dir if temp_dir is not None else Path(tempfile.gettempdir())
        self.sleep = sleep
        self.clock = clock
        self.now = now

    def acquire(self) -> Path:
        path = self._export_path()

        outcome = self.executor.execute(self.operation, [self.key, str(path)])
        if not outcome.ok:
            raise CommandFailed(self.operation, outcome.exit_status, outcome.output)
        if not path.is_file():
            raise TaskFailure(f"{self.operation} reported success but wrote no file")

        return path

    def proceed(self, path: Path) -> ActionOutcome:
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        archived = self.backup_dir / path.name
        shutil.copy2(path, archived)

        released = wait_until(
            lambda: _is_released(path),
            timeout_s=self.release_timeout_s,
            interval_s=self.poll_interval_s,
            sleep=self.sleep,
            clock=self.clock,
        )
        if not released:
            raise TaskFailure(
                f"{path} still in use after {self.release_timeout_s:g}s; left in place"
            )

        path.unlink()
        return ActionOutcome(f"{self.key} backed up to {archived}")

    def _export_path(self) -> Path:
        # Never reuse a name still present in the temp or backup directory.
        stamp = self.now().strftime("%Y%m%d-%H%M%S-%f")
        name = f"registry-{stamp}.reg"
        n = 1
        while (self.temp_dir / name).exists() or (self.backup_dir / name).exists():
            name = f"registry-{stamp}-{n}.reg"
            n += 1
        return self.temp_dir / name
