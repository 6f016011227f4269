from __future__ import annotations

from dataclasses import replace

from hostmend.log import MaintenanceLogger

from .types import ActionOutcome, MaintenanceAction, RecoveryFailed, RetryFailed, as_outcome


class RetryPolicy(MaintenanceAction):
    """
    Run an action once; on failure run the recovery action, then the action
    exactly one more time.

    - recovery raises -> RecoveryFailed, no retry
    - retry raises    -> RetryFailed
    - retry succeeds  -> outcome with recovered=True

    The first failure is logged here; the terminal error is left to the caller.
    """

    def __init__(
        self,
        task_name: str,
        action: MaintenanceAction,
        recovery: MaintenanceAction,
        logger: MaintenanceLogger,
    ):
        self.task_name = task_name
        self.action = action
        self.recovery = recovery
        self.logger = logger
        self.attempts = 0

    def run(self) -> ActionOutcome:
        try:
            return self._attempt()
        except Exception as first:
            self.logger.error(f"{self.task_name}: attempt failed: {first}")
            original = first

        self.logger.info(f"{self.task_name}: running recovery action")
        try:
            self.recovery.run()
        except Exception as exc:
            raise RecoveryFailed(original, exc) from exc
        self.logger.info(f"{self.task_name}: recovery action completed, retrying")

        try:
            outcome = self._attempt()
        except Exception as exc:
            raise RetryFailed(original, exc) from exc

        return replace(outcome, recovered=True)

    def _attempt(self) -> ActionOutcome:
        self.attempts += 1
        return as_outcome(self.action.run())
