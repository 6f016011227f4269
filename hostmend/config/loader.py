import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import (
    DEFAULT_TASK_ORDER,
    ConfigError,
    LogConfig,
    MaintenanceConfig,
    NetworkConfig,
    RegistryConfig,
    UnsupportedConfigFormatError,
)


def load_config(path: str | Path) -> MaintenanceConfig:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return _build_maintenance_config(raw_file)


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    match fmt:
        case "yaml":
            return _parse_yaml(path)
        case "toml":
            return _parse_toml(path)
        case "json":
            return _parse_json(path)
        case _:
            raise AssertionError("Unreachable")


def _parse_yaml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML") from exc

    # An empty YAML document means "all defaults".
    if raw_file is None:
        return {}

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: YAML parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _parse_toml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML") from exc

    return raw_file


def _parse_json(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON") from exc

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: JSON parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_maintenance_config(raw: Mapping[str, Any]) -> MaintenanceConfig:
    keys = {
        "log",
        "auto_reboot",
        "skip",
        "temp_dirs",
        "crash_dump_dir",
        "delete_crash_dumps",
        "registry",
        "network",
        "commands",
    }
    _reject_unknown("config", raw, keys)

    config = MaintenanceConfig()

    if "log" in raw:
        config.log = _build_log_config(_section(raw, "log"))

    if "auto_reboot" in raw:
        config.auto_reboot = _bool("auto_reboot", raw["auto_reboot"])

    if "skip" in raw:
        config.skip = _string_list("skip", raw["skip"])
        for name in config.skip:
            if name not in DEFAULT_TASK_ORDER:
                raise ConfigError(f"skip: unknown task '{name}'")

    if "temp_dirs" in raw:
        config.temp_dirs = [Path(p) for p in _string_list("temp_dirs", raw["temp_dirs"])]

    if "crash_dump_dir" in raw:
        config.crash_dump_dir = Path(_string("crash_dump_dir", raw["crash_dump_dir"]))

    if "delete_crash_dumps" in raw:
        config.delete_crash_dumps = _bool("delete_crash_dumps", raw["delete_crash_dumps"])

    if "registry" in raw:
        config.registry = _build_registry_config(_section(raw, "registry"))

    if "network" in raw:
        config.network = _build_network_config(_section(raw, "network"))

    if "commands" in raw:
        config.commands = _build_commands(_section(raw, "commands"))

    return config


def _build_log_config(fields: Mapping[str, Any]) -> LogConfig:
    _reject_unknown(
        "log", fields, {"directory", "main_file", "error_file", "console", "retention_days"}
    )
    log = LogConfig()

    if "directory" in fields:
        log.directory = Path(_string("log.directory", fields["directory"]))

    if "main_file" in fields:
        log.main_file = _string("log.main_file", fields["main_file"])

    if "error_file" in fields:
        log.error_file = _string("log.error_file", fields["error_file"])

    if log.main_file == log.error_file:
        raise ConfigError("log: main_file and error_file must differ")

    if "console" in fields:
        log.console = _bool("log.console", fields["console"])

    if "retention_days" in fields:
        days = fields["retention_days"]
        if isinstance(days, bool) or not isinstance(days, int) or days < 0:
            raise ConfigError("log.retention_days: expected a non-negative integer")
        log.retention_days = days

    return log


def _build_registry_config(fields: Mapping[str, Any]) -> RegistryConfig:
    _reject_unknown("registry", fields, {"key", "backup_dir", "release_timeout_s"})
    registry = RegistryConfig()

    if "key" in fields:
        registry.key = _string("registry.key", fields["key"])

    if "backup_dir" in fields:
        registry.backup_dir = Path(_string("registry.backup_dir", fields["backup_dir"]))

    if "release_timeout_s" in fields:
        registry.release_timeout_s = _seconds(
            "registry.release_timeout_s", fields["release_timeout_s"]
        )

    return registry


def _build_network_config(fields: Mapping[str, Any]) -> NetworkConfig:
    _reject_unknown(
        "network",
        fields,
        {"reset_operations", "stabilization_timeout_s", "poll_interval_s"},
    )
    network = NetworkConfig()

    if "reset_operations" in fields:
        network.reset_operations = _string_list(
            "network.reset_operations", fields["reset_operations"]
        )

    if "stabilization_timeout_s" in fields:
        network.stabilization_timeout_s = _seconds(
            "network.stabilization_timeout_s", fields["stabilization_timeout_s"]
        )

    if "poll_interval_s" in fields:
        network.poll_interval_s = _seconds(
            "network.poll_interval_s", fields["poll_interval_s"]
        )

    return network


def _build_commands(fields: Mapping[str, Any]) -> dict[str, list[str]]:
    commands = {}

    for operation, argv in fields.items():
        if not isinstance(operation, str) or len(operation.strip()) < 1:
            raise ConfigError("commands: operation names must be non-empty strings")

        tokens = _string_list(f"commands.{operation}", argv, dedupe=False)
        if len(tokens) < 1:
            raise ConfigError(f"commands.{operation}: command line can't be empty")

        commands[operation.strip()] = tokens

    return commands


def _reject_unknown(where: str, fields: Mapping[str, Any], keys: set[str]) -> None:
    for field in fields.keys():
        if field not in keys:
            raise ConfigError(f"{where}: Can't process: {field}")


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = raw[name]
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{name}' must be a mapping, got {type(value)}")
    return value


def _string(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{name}: expected a string, got {type(value)}")

    if len(value.strip()) < 1:
        raise ConfigError(f"{name}: Please provide a string or remove this field")

    return value.strip()


def _string_list(name: str, value: Any, *, dedupe: bool = True) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{name}: expected a list")

    items = []
    seen = set()
    for item in value:
        text = _string(name, item)

        # Allows to ignore duplicated entries
        if dedupe and text in seen:
            continue

        items.append(text)
        seen.add(text)

    return items


def _bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{name}: expected true or false, got {type(value)}")
    return value


def _seconds(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name}: expected a number of seconds, got {type(value)}")

    if value < 0:
        raise ConfigError(f"{name}: can't be negative")

    return float(value)
