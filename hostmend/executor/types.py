from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(frozen=True)
class CommandOutcome:
    exit_status: int
    output: str

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


class CommandExecutor(Protocol):
    def execute(self, operation: str, args: Sequence[str] = ()) -> CommandOutcome: ...


class MaintenanceError(Exception):
    """Base for every error raised by hostmend itself."""


class CommandError(MaintenanceError):
    """The operation could not be started at all (unknown name, missing binary)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation}: {reason}")
        self.operation = operation
        self.reason = reason
