# tests/test_config_loader.py
from __future__ import annotations

import json
from pathlib import Path

import pytest

from hostmend.config.loader import load_config
from hostmend.config.types import ConfigError, MaintenanceConfig, UnsupportedConfigFormatError


# -------------------------
# Helpers
# -------------------------


def write_text(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def write_json(path: Path, obj: object) -> Path:
    path.write_text(json.dumps(obj), encoding="utf-8")
    return path


# -------------------------
# Basic file/path errors
# -------------------------


def test_missing_file_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


def test_path_is_dir_raises_config_error(tmp_path: Path) -> None:
    d = tmp_path / "dir"
    d.mkdir()
    with pytest.raises(ConfigError):
        load_config(d)


def test_unsupported_extension_raises_unsupported_format(tmp_path: Path) -> None:
    p = write_text(tmp_path / "config.txt", "auto_reboot: true")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(p)


# -------------------------
# Parse errors are wrapped
# -------------------------


@pytest.mark.parametrize(
    "name, content",
    [
        ("config.yaml", "skip: [\n"),
        ("config.toml", "skip = ["),
        ("config.json", '{"skip": '),
    ],
)
def test_invalid_syntax_is_wrapped_as_config_error(tmp_path: Path, name: str, content: str) -> None:
    p = write_text(tmp_path / name, content)
    with pytest.raises(ConfigError):
        load_config(p)


# -------------------------
# Shape validation
# -------------------------


@pytest.mark.parametrize(
    "ext, content",
    [
        (".yaml", "[]\n"),
        (".json", "[]"),
        (".json", "null"),
    ],
)
def test_top_level_not_mapping_raises(tmp_path: Path, ext: str, content: str) -> None:
    p = write_text(tmp_path / f"config{ext}", content)
    with pytest.raises(ConfigError):
        load_config(p)


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    p = write_text(tmp_path / "config.yaml", "")
    assert load_config(p) == MaintenanceConfig()


@pytest.mark.parametrize(
    "content",
    [
        "nope: 1\n",
        "log:\n  colour: true\n",
        "network:\n  retries: 3\n",
        "skip: [defrag]\n",
        "registry:\n  hive: HKLM\n",
    ],
)
def test_unknown_field_raises(tmp_path: Path, content: str) -> None:
    p = write_text(tmp_path / "config.yaml", content)
    with pytest.raises(ConfigError):
        load_config(p)


@pytest.mark.parametrize(
    "content",
    [
        "auto_reboot: yes please\n",
        "auto_reboot: 1\n",
        "skip: disk-cleanup\n",
        "skip: [1]\n",
        'skip: ["   "]\n',
        "log: []\n",
        "log:\n  retention_days: -1\n",
        "log:\n  retention_days: true\n",
        "log:\n  main_file: same.log\n  error_file: same.log\n",
        "network:\n  poll_interval_s: -1\n",
        "network:\n  stabilization_timeout_s: soon\n",
        "registry:\n  release_timeout_s: false\n",
        "commands:\n  sfc-scan: sfc /scannow\n",
        "commands:\n  sfc-scan: []\n",
        'crash_dump_dir: "  "\n',
    ],
)
def test_wrong_types_raise(tmp_path: Path, content: str) -> None:
    p = write_text(tmp_path / "config.yaml", content)
    with pytest.raises(ConfigError):
        load_config(p)


# -------------------------
# Normalization
# -------------------------


def test_duplicate_skip_entries_are_ignored_and_preserve_order(tmp_path: Path) -> None:
    p = write_text(
        tmp_path / "config.yaml",
        'skip: [disk-cleanup, " disk-cleanup ", crash-dumps, disk-cleanup]\n',
    )
    assert load_config(p).skip == ["disk-cleanup", "crash-dumps"]


def test_command_tokens_keep_duplicates(tmp_path: Path) -> None:
    p = write_text(
        tmp_path / "config.yaml",
        "commands:\n  adapter-enable: [netsh, interface, set, interface, 'name={0}', admin=enabled]\n",
    )
    assert load_config(p).commands["adapter-enable"] == [
        "netsh",
        "interface",
        "set",
        "interface",
        "name={0}",
        "admin=enabled",
    ]


# -------------------------
# Happy paths (all formats)
# -------------------------


def test_valid_yaml_loads(tmp_path: Path) -> None:
    p = write_text(
        tmp_path / "config.yaml",
        "log:\n"
        "  directory: var/log\n"
        "  console: false\n"
        "  retention_days: 7\n"
        "auto_reboot: true\n"
        "skip: [network-reset]\n"
        "temp_dirs: [/tmp/a, /tmp/b]\n"
        "delete_crash_dumps: true\n"
        "registry:\n"
        "  key: HKCU\\Software\n"
        "  release_timeout_s: 2\n"
        "network:\n"
        "  reset_operations: [flush-dns]\n"
        "  stabilization_timeout_s: 5\n"
        "  poll_interval_s: 0.5\n",
    )
    config = load_config(p)

    assert config.log.directory == Path("var/log")
    assert config.log.console is False
    assert config.log.retention_days == 7
    assert config.log.main_path == Path("var/log/maintenance.log")
    assert config.auto_reboot is True
    assert config.skip == ["network-reset"]
    assert config.temp_dirs == [Path("/tmp/a"), Path("/tmp/b")]
    assert config.delete_crash_dumps is True
    assert config.registry.key == "HKCU\\Software"
    assert config.registry.release_timeout_s == 2.0
    assert config.network.reset_operations == ["flush-dns"]
    assert config.network.poll_interval_s == 0.5
    assert config.is_enabled("network-reset") is False


def test_valid_json_loads(tmp_path: Path) -> None:
    p = write_json(
        tmp_path / "config.json",
        {"auto_reboot": False, "commands": {"sfc-scan": ["sfc", "/verifyonly"]}},
    )
    config = load_config(p)
    assert config.commands == {"sfc-scan": ["sfc", "/verifyonly"]}


def test_valid_toml_loads(tmp_path: Path) -> None:
    p = write_text(
        tmp_path / "config.toml",
        "auto_reboot = true\n"
        'skip = ["disk-cleanup"]\n'
        "\n"
        "[network]\n"
        "stabilization_timeout_s = 12\n",
    )
    config = load_config(p)
    assert config.auto_reboot is True
    assert config.skip == ["disk-cleanup"]
    assert config.network.stabilization_timeout_s == 12.0


def test_defaults() -> None:
    config = MaintenanceConfig()
    assert config.auto_reboot is False
    assert config.skip == []
    assert config.network.reset_operations == ["winsock-reset", "ip-reset", "flush-dns"]
