from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable

from hostmend.config.types import DEFAULT_TASK_ORDER, ConfigError, MaintenanceConfig
from hostmend.executor.types import CommandExecutor
from hostmend.log import MaintenanceLogger
from hostmend.network.adapters import SystemAdapterControl
from hostmend.network.differ import NetworkStateDiffer
from hostmend.network.types import AdapterControl
from hostmend.runner.types import Task, TaskCategory

from .files import CrashDumps, LogCleanup, TempCleanup
from .network import NetworkReset
from .registry import RegistryBackup
from .system import (
    CriticalEventInspection,
    DiskCheck,
    DiskCleanup,
    DriverRescan,
    ImageCleanup,
    ImageRepair,
    IntegrityScan,
    RestartUpdateService,
    UpdateInstall,
)


def build_tasks(
    config: MaintenanceConfig,
    executor: CommandExecutor,
    logger: MaintenanceLogger,
    *,
    adapter_control: AdapterControl | None = None,
) -> list[Task]:
    """Build the default task list in run order, leaving out ``config.skip``."""
    for name in config.skip:
        if name not in DEFAULT_TASK_ORDER:
            raise ConfigError(f"skip: unknown task '{name}'")

    control = adapter_control if adapter_control is not None else SystemAdapterControl(executor)
    independent = TaskCategory.INDEPENDENT

    builders: dict[str, Callable[[], Task]] = {
        "log-cleanup": lambda: Task(
            "log-cleanup",
            independent,
            LogCleanup(
                config.log.directory,
                config.log.retention_days,
                keep=[config.log.main_path, config.log.error_path],
            ),
        ),
        "integrity-scan": lambda: Task("integrity-scan", independent, IntegrityScan(executor)),
        "image-repair": lambda: Task("image-repair", independent, ImageRepair(executor)),
        "image-cleanup": lambda: Task("image-cleanup", independent, ImageCleanup(executor)),
        "disk-check": lambda: Task("disk-check", independent, DiskCheck(executor)),
        "driver-rescan": lambda: Task("driver-rescan", independent, DriverRescan(executor)),
        "update-install": lambda: Task(
            "update-install",
            TaskCategory.RETRYABLE,
            UpdateInstall(executor, auto_reboot=config.auto_reboot),
            recovery=RestartUpdateService(executor),
        ),
        "network-reset": lambda: Task(
            "network-reset",
            independent,
            NetworkReset(
                NetworkStateDiffer(
                    control,
                    logger,
                    reset_operations=config.network.reset_operations,
                    stabilization_timeout_s=config.network.stabilization_timeout_s,
                    poll_interval_s=config.network.poll_interval_s,
                )
            ),
        ),
        "registry-backup": lambda: Task(
            "registry-backup",
            TaskCategory.PREREQUISITE_GATED,
            RegistryBackup(
                executor,
                config.registry.key,
                config.registry.backup_dir,
                release_timeout_s=config.registry.release_timeout_s,
            ),
        ),
        "critical-events": lambda: Task(
            "critical-events", independent, CriticalEventInspection(executor)
        ),
        "temp-cleanup": lambda: Task(
            "temp-cleanup",
            independent,
            TempCleanup(config.temp_dirs or [Path(tempfile.gettempdir())]),
        ),
        "disk-cleanup": lambda: Task("disk-cleanup", independent, DiskCleanup(executor)),
        "crash-dumps": lambda: Task(
            "crash-dumps",
            independent,
            CrashDumps(config.crash_dump_dir, delete=config.delete_crash_dumps),
        ),
    }

    return [builders[name]() for name in DEFAULT_TASK_ORDER if config.is_enabled(name)]
