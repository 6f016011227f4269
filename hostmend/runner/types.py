from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Callable

from hostmend.executor.types import MaintenanceError

if TYPE_CHECKING:
    from hostmend.network.types import AdapterChange


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskCategory(Enum):
    INDEPENDENT = "independent"
    PREREQUISITE_GATED = "prerequisite-gated"
    RETRYABLE = "retryable"


class TaskStatus(Enum):
    SUCCESS = "success"
    RECOVERED_AFTER_RETRY = "recovered-after-retry"
    FAILURE = "failure"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ActionOutcome:
    message: str = ""
    recovered: bool = False
    adapter_changes: tuple[AdapterChange, ...] = ()


def as_outcome(value: object) -> ActionOutcome:
    """Normalize what an action returned; anything unexpected is a TypeError."""
    if value is None:
        return ActionOutcome()
    if isinstance(value, str):
        return ActionOutcome(value)
    if not isinstance(value, ActionOutcome):
        raise TypeError(f"action returned {type(value).__name__}, expected ActionOutcome")
    return value


class MaintenanceAction(ABC):
    """A maintenance operation. Failure is signalled by raising."""

    @abstractmethod
    def run(self) -> ActionOutcome | None: ...


class FunctionAction(MaintenanceAction):
    """Adapts a plain zero-argument callable to ``MaintenanceAction``."""

    def __init__(self, func: Callable[[], ActionOutcome | str | None]):
        self.func = func

    def run(self) -> ActionOutcome | None:
        outcome = self.func()
        if isinstance(outcome, str):
            return ActionOutcome(outcome)
        return outcome


@dataclass(frozen=True)
class Task:
    name: str
    category: TaskCategory
    action: MaintenanceAction
    recovery: MaintenanceAction | None = None

    def __post_init__(self) -> None:
        if len(self.name.strip()) < 1:
            raise ValueError("A task name can't be empty")

        if self.category is TaskCategory.RETRYABLE and self.recovery is None:
            raise ValueError(f"{self.name}: a retryable task needs a recovery action")

        if self.category is not TaskCategory.RETRYABLE and self.recovery is not None:
            raise ValueError(f"{self.name}: only retryable tasks take a recovery action")


@dataclass(frozen=True)
class TaskResult:
    task_name: str
    status: TaskStatus
    message: str
    started_at: datetime
    finished_at: datetime
    adapter_changes: tuple[AdapterChange, ...] = ()

    @property
    def duration_s(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()


@dataclass
class MaintenanceRun:
    started_at: datetime
    finished_at: datetime | None = None
    results: list[TaskResult] = field(default_factory=list)

    def append(self, result: TaskResult) -> None:
        if self.finished_at is not None:
            raise RuntimeError("Cannot append to a finished run")
        self.results.append(result)

    def finish(self, at: datetime) -> None:
        self.finished_at = at

    @property
    def duration_s(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def counts(self) -> dict[TaskStatus, int]:
        counts = {status: 0 for status in TaskStatus}
        for result in self.results:
            counts[result.status] += 1
        return counts

    @property
    def failed(self) -> list[str]:
        return [r.task_name for r in self.results if r.status is TaskStatus.FAILURE]


class TaskFailure(MaintenanceError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class PrerequisiteFailure(TaskFailure):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class RecoveryFailed(TaskFailure):
    def __init__(self, original: BaseException, recovery_error: BaseException) -> None:
        super().__init__(f"recovery action failed: {recovery_error}")
        self.original = original
        self.recovery_error = recovery_error


class RetryFailed(TaskFailure):
    def __init__(self, original: BaseException, retry_error: BaseException) -> None:
        super().__init__(f"retry after recovery failed: {retry_error}")
        self.original = original
        self.retry_error = retry_error


class CommandFailed(TaskFailure):
    def __init__(self, operation: str, exit_status: int, output: str = "") -> None:
        super().__init__(f"{operation} exited with code {exit_status}")
        self.operation = operation
        self.exit_status = exit_status
        self.output = output
