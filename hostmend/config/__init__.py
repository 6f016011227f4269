from .loader import load_config
from .types import (
    DEFAULT_TASK_ORDER,
    ConfigError,
    LogConfig,
    MaintenanceConfig,
    NetworkConfig,
    RegistryConfig,
    UnsupportedConfigFormatError,
)

__all__ = [
    "load_config",
    "MaintenanceConfig",
    "LogConfig",
    "NetworkConfig",
    "RegistryConfig",
    "ConfigError",
    "DEFAULT_TASK_ORDER",
    "UnsupportedConfigFormatError",
]
