from .types import (
    AdapterChange,
    AdapterControl,
    AdapterState,
    AdapterStatus,
    EnumerationError,
    NetworkReport,
)
from .adapters import SystemAdapterControl
from .differ import NetworkStateDiffer, diff_adapters

__all__ = [
    "AdapterState",
    "AdapterStatus",
    "AdapterChange",
    "AdapterControl",
    "NetworkReport",
    "EnumerationError",
    "NetworkStateDiffer",
    "SystemAdapterControl",
    "diff_adapters",
]
