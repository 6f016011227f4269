from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from hostmend.executor.types import CommandOutcome
from hostmend.runner.types import TaskFailure


class AdapterStatus(Enum):
    UP = "up"
    DOWN = "down"
    DISABLED = "disabled"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AdapterState:
    name: str
    status: AdapterStatus
    link_speed_mbps: int = 0


@dataclass(frozen=True)
class AdapterChange:
    name: str
    before: AdapterState
    after: AdapterState
    changed: bool


@dataclass(frozen=True)
class NetworkReport:
    before: tuple[AdapterState, ...]
    after: tuple[AdapterState, ...]
    changes: tuple[AdapterChange, ...]
    warnings: tuple[str, ...] = field(default=())

    @property
    def changed(self) -> list[str]:
        return [c.name for c in self.changes if c.changed]


class AdapterControl(Protocol):
    def list_adapters(self) -> list[AdapterState]: ...

    def restart(self, name: str) -> None: ...

    def reset(self, operation: str) -> CommandOutcome: ...


class EnumerationError(TaskFailure):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
