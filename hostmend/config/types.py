from dataclasses import dataclass, field
from pathlib import Path

# Run order of the built-in tasks; also the names `skip` may refer to.
DEFAULT_TASK_ORDER: tuple[str, ...] = (
    "log-cleanup",
    "integrity-scan",
    "image-repair",
    "image-cleanup",
    "disk-check",
    "driver-rescan",
    "update-install",
    "network-reset",
    "registry-backup",
    "critical-events",
    "temp-cleanup",
    "disk-cleanup",
    "crash-dumps",
)


@dataclass
class LogConfig:
    directory: Path = Path("logs")
    main_file: str = "maintenance.log"
    error_file: str = "errors.log"
    console: bool = True
    retention_days: int = 14

    @property
    def main_path(self) -> Path:
        return self.directory / self.main_file

    @property
    def error_path(self) -> Path:
        return self.directory / self.error_file


@dataclass
class RegistryConfig:
    key: str = "HKLM\\SOFTWARE"
    backup_dir: Path = Path("backups")
    release_timeout_s: float = 10.0


@dataclass
class NetworkConfig:
    reset_operations: list[str] = field(
        default_factory=lambda: ["winsock-reset", "ip-reset", "flush-dns"]
    )
    stabilization_timeout_s: float = 30.0
    poll_interval_s: float = 1.0


@dataclass
class MaintenanceConfig:
    log: LogConfig = field(default_factory=LogConfig)
    auto_reboot: bool = False
    skip: list[str] = field(default_factory=list)
    temp_dirs: list[Path] = field(default_factory=list)
    crash_dump_dir: Path = Path("C:/Windows/Minidump")
    delete_crash_dumps: bool = False
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    commands: dict[str, list[str]] = field(default_factory=dict)

    def is_enabled(self, task_name: str) -> bool:
        return task_name not in self.skip


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
