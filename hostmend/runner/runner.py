from __future__ import annotations

from datetime import datetime
from typing import Callable

from hostmend.log import MaintenanceLogger

from .retry import RetryPolicy
from .types import (
    MaintenanceAction,
    PrerequisiteFailure,
    Task,
    TaskCategory,
    TaskResult,
    TaskStatus,
    as_outcome,
    utc_now,
)


class TaskRunner:
    """Runs one task and turns whatever happens into a TaskResult."""

    def __init__(
        self,
        logger: MaintenanceLogger,
        *,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.logger = logger
        self.clock = clock

    def run(self, task: Task) -> TaskResult:
        started_at = self.clock()
        self.logger.info(f"{task.name}: started")

        try:
            outcome = as_outcome(self._action_for(task).run())
        except PrerequisiteFailure as exc:
            if task.category is not TaskCategory.PREREQUISITE_GATED:
                return self._failed(task, exc, started_at)
            message = f"prerequisite failed: {exc.reason}"
            self.logger.error(f"{task.name} skipped: {message}")
            return TaskResult(task.name, TaskStatus.SKIPPED, message, started_at, self.clock())
        except Exception as exc:
            return self._failed(task, exc, started_at)

        status = TaskStatus.RECOVERED_AFTER_RETRY if outcome.recovered else TaskStatus.SUCCESS
        message = outcome.message or "completed"
        self.logger.info(f"{task.name}: {status.value}: {message}")

        return TaskResult(
            task.name,
            status,
            message,
            started_at,
            self.clock(),
            adapter_changes=outcome.adapter_changes,
        )

    def _action_for(self, task: Task) -> MaintenanceAction:
        if task.category is TaskCategory.RETRYABLE and task.recovery is not None:
            return RetryPolicy(task.name, task.action, task.recovery, self.logger)
        return task.action

    def _failed(self, task: Task, exc: Exception, started_at: datetime) -> TaskResult:
        detail = str(exc) or type(exc).__name__
        self.logger.error(f"{task.name} failed: {detail}")
        return TaskResult(task.name, TaskStatus.FAILURE, detail, started_at, self.clock())
