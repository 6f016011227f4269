from __future__ import annotations

import shutil
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Sequence

from hostmend.runner.types import ActionOutcome, MaintenanceAction


class LogCleanup(MaintenanceAction):
    """Deletes ``*.log`` files older than the retention window, never the active sinks."""

    def __init__(
        self,
        directory: Path,
        retention_days: int,
        *,
        keep: Iterable[Path] = (),
        now: Callable[[], float] = time.time,
    ):
        self.directory = directory
        self.retention_days = retention_days
        self.keep = {Path(p).resolve() for p in keep}
        self.now = now

    def run(self) -> ActionOutcome:
        if not self.directory.is_dir():
            return ActionOutcome(f"no log directory at {self.directory}")

        cutoff = self.now() - self.retention_days * 86400
        removed = 0
        failed = 0
        for path in sorted(self.directory.glob("*.log")):
            if path.resolve() in self.keep:
                continue
            try:
                if path.stat().st_mtime >= cutoff:
                    continue
                path.unlink()
                removed += 1
            except FileNotFoundError:
                # Rotated away mid-scan.
                continue
            except OSError:
                failed += 1

        message = f"removed {removed} old log files"
        if failed:
            message += f", {failed} could not be removed"
        return ActionOutcome(message)


class TempCleanup(MaintenanceAction):
    """Empties temporary directories; entries held open by other processes are left alone."""

    def __init__(self, directories: Sequence[Path]):
        self.directories = list(directories)

    def run(self) -> ActionOutcome:
        removed = 0
        in_use = 0
        missing = 0

        for directory in self.directories:
            if not directory.is_dir():
                missing += 1
                continue

            for entry in directory.iterdir():
                try:
                    if entry.is_dir() and not entry.is_symlink():
                        shutil.rmtree(entry)
                    else:
                        entry.unlink()
                    removed += 1
                except OSError:
                    in_use += 1

        message = f"removed {removed} entries from {len(self.directories) - missing} directories"
        if in_use:
            message += f", {in_use} in use"
        if missing:
            message += f", {missing} missing"
        return ActionOutcome(message)


class CrashDumps(MaintenanceAction):
    """Reports crash dumps (count, newest, size) and optionally deletes them."""

    def __init__(self, directory: Path, *, delete: bool = False):
        self.directory = directory
        self.delete = delete

    def run(self) -> ActionOutcome:
        if not self.directory.is_dir():
            return ActionOutcome(f"no crash dump directory at {self.directory}")

        found = []
        for path in self.directory.glob("*.dmp"):
            try:
                found.append((path, path.stat()))
            except FileNotFoundError:
                continue
        if not found:
            return ActionOutcome("no crash dumps found")

        found.sort(key=lambda item: item[1].st_mtime)
        dumps = [path for path, _ in found]
        newest, newest_stat = found[-1]
        newest_at = datetime.fromtimestamp(newest_stat.st_mtime).strftime("%Y-%m-%d %H:%M")
        total_mb = sum(st.st_size for _, st in found) / (1024 * 1024)
        message = (
            f"{len(dumps)} crash dumps ({total_mb:.1f} MiB), "
            f"newest {newest.name} at {newest_at}"
        )

        if self.delete:
            kept = 0
            for dump in dumps:
                try:
                    dump.unlink()
                except OSError:
                    kept += 1
            message += f"; deleted {len(dumps) - kept}"
            if kept:
                message += f", {kept} locked"

        return ActionOutcome(message)
