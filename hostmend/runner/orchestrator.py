from __future__ import annotations

from datetime import datetime
from typing import Callable, Sequence

from hostmend.log import MaintenanceLogger

from .runner import TaskRunner
from .summary import RunSummary
from .types import MaintenanceRun, Task, utc_now


class Orchestrator:
    def __init__(
        self,
        tasks: Sequence[Task],
        logger: MaintenanceLogger,
        *,
        runner: TaskRunner | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        seen: set[str] = set()
        for task in tasks:
            if task.name in seen:
                raise ValueError(f"Duplicate task name: {task.name}")
            seen.add(task.name)

        self.tasks: tuple[Task, ...] = tuple(tasks)
        self.logger = logger
        self.clock = clock
        self.runner = runner if runner is not None else TaskRunner(logger, clock=clock)

    def task_names(self) -> list[str]:
        return [task.name for task in self.tasks]

    def run(self) -> MaintenanceRun:
        run = MaintenanceRun(started_at=self.clock())
        self.logger.info(f"maintenance run started: {len(self.tasks)} tasks")

        for task in self.tasks:
            run.append(self.runner.run(task))

        run.finish(self.clock())
        self.emit_summary(run)
        return run

    def summarize(self, run: MaintenanceRun) -> RunSummary:
        return RunSummary.from_run(run)

    def emit_summary(self, run: MaintenanceRun) -> RunSummary:
        summary = self.summarize(run)
        for line in summary.lines():
            self.logger.summary(line)
        return summary
