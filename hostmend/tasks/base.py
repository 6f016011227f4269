from __future__ import annotations

from abc import abstractmethod
from typing import Sequence

from hostmend.executor.types import CommandExecutor, CommandOutcome
from hostmend.runner.types import (
    ActionOutcome,
    CommandFailed,
    MaintenanceAction,
    PrerequisiteFailure,
)


class CommandAction(MaintenanceAction):
    """Runs one named operation; a non-zero exit is a failure unless ``interpret`` says otherwise."""

    operation: str = ""
    done_message: str = "completed"

    def __init__(self, executor: CommandExecutor, args: Sequence[str] = ()):
        self.executor = executor
        self.args = list(args)

    def run(self) -> ActionOutcome:
        outcome = self.executor.execute(self.operation, self.args)
        return ActionOutcome(self.interpret(outcome))

    def interpret(self, outcome: CommandOutcome) -> str:
        if not outcome.ok:
            raise CommandFailed(self.operation, outcome.exit_status, outcome.output)
        return self.done_message


class GatedAction(MaintenanceAction):
    """
    An action whose later steps depend on a prerequisite step.

    Whatever ``acquire`` returns is handed to ``proceed``, so no run leaves
    state on the action. If ``acquire`` raises, ``proceed`` is never called
    and the failure is re-raised as PrerequisiteFailure.
    """

    def run(self) -> ActionOutcome:
        try:
            acquired = self.acquire()
        except Exception as exc:
            raise PrerequisiteFailure(str(exc) or type(exc).__name__) from exc
        return self.proceed(acquired)

    @abstractmethod
    def acquire(self) -> object: ...

    @abstractmethod
    def proceed(self, acquired: object) -> ActionOutcome: ...
