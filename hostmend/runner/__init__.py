from .orchestrator import Orchestrator
from .retry import RetryPolicy
from .runner import TaskRunner
from .summary import RunSummary, SummaryRow
from .types import (
    ActionOutcome,
    CommandFailed,
    FunctionAction,
    MaintenanceAction,
    MaintenanceRun,
    PrerequisiteFailure,
    RecoveryFailed,
    RetryFailed,
    Task,
    TaskCategory,
    TaskFailure,
    TaskResult,
    TaskStatus,
    as_outcome,
    utc_now,
)
from .waiting import wait_until

__all__ = [
    "Orchestrator",
    "TaskRunner",
    "RetryPolicy",
    "RunSummary",
    "SummaryRow",
    "Task",
    "TaskCategory",
    "TaskResult",
    "TaskStatus",
    "MaintenanceRun",
    "MaintenanceAction",
    "FunctionAction",
    "ActionOutcome",
    "TaskFailure",
    "PrerequisiteFailure",
    "RecoveryFailed",
    "RetryFailed",
    "CommandFailed",
    "utc_now",
    "as_outcome",
    "wait_until",
]
