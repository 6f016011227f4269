from .base import CommandAction, GatedAction
from .catalog import DEFAULT_TASK_ORDER, build_tasks
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

__all__ = [
    "build_tasks",
    "DEFAULT_TASK_ORDER",
    "CommandAction",
    "GatedAction",
    "LogCleanup",
    "TempCleanup",
    "CrashDumps",
    "NetworkReset",
    "RegistryBackup",
    "IntegrityScan",
    "ImageRepair",
    "ImageCleanup",
    "DiskCheck",
    "DriverRescan",
    "DiskCleanup",
    "UpdateInstall",
    "RestartUpdateService",
    "CriticalEventInspection",
]
