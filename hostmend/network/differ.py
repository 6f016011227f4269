from __future__ import annotations

import time
from typing import Callable, Sequence

from hostmend.log import MaintenanceLogger
from hostmend.runner.waiting import wait_until

from .types import (
    AdapterChange,
    AdapterControl,
    AdapterState,
    AdapterStatus,
    EnumerationError,
    NetworkReport,
)


def diff_adapters(
    before: Sequence[AdapterState], after: Sequence[AdapterState]
) -> list[AdapterChange]:
    after_by_name = {state.name: state for state in after}
    changes = []
    for old in before:
        new = after_by_name.get(old.name, AdapterState(old.name, AdapterStatus.UNKNOWN, 0))
        changes.append(AdapterChange(old.name, old, new, old.status != new.status))
    return changes


class NetworkStateDiffer:
    """
    Snapshot adapters, reset the network stack, restart each adapter, wait for
    the adapters that were up to come back, snapshot again and diff.
    """

    def __init__(
        self,
        control: AdapterControl,
        logger: MaintenanceLogger,
        *,
        reset_operations: Sequence[str] = ("winsock-reset", "ip-reset", "flush-dns"),
        stabilization_timeout_s: float = 30.0,
        poll_interval_s: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.control = control
        self.logger = logger
        self.reset_operations = tuple(reset_operations)
        self.stabilization_timeout_s = stabilization_timeout_s
        self.poll_interval_s = poll_interval_s
        self.sleep = sleep
        self.clock = clock

    def snapshot(self) -> list[AdapterState]:
        try:
            adapters = list(self.control.list_adapters())
        except Exception as exc:
            raise EnumerationError(f"could not enumerate network adapters: {exc}") from exc

        if not adapters:
            raise EnumerationError("no network adapters found")

        return adapters

    def reset(self) -> NetworkReport:
        before = self.snapshot()
        self.logger.info(
            "network adapters before reset: "
            + ", ".join(f"{a.name}={a.status.value}" for a in before)
        )

        warnings: list[str] = []
        for operation in self.reset_operations:
            warning = self._reset_stack(operation)
            if warning:
                self.logger.warning(warning)
                warnings.append(warning)

        for adapter in before:
            try:
                self.control.restart(adapter.name)
            except Exception as exc:
                self.logger.error(f"adapter {adapter.name}: restart failed: {exc}")

        expected_up = {a.name for a in before if a.status is AdapterStatus.UP}
        stable = wait_until(
            lambda: self._all_up(expected_up),
            timeout_s=self.stabilization_timeout_s,
            interval_s=self.poll_interval_s,
            sleep=self.sleep,
            clock=self.clock,
        )
        if not stable:
            warning = (
                f"adapters not back up after {self.stabilization_timeout_s:g}s: "
                + ", ".join(sorted(expected_up - self._up_names()))
            )
            self.logger.warning(warning)
            warnings.append(warning)

        try:
            after = list(self.control.list_adapters())
        except Exception as exc:
            warning = f"could not enumerate network adapters after reset: {exc}"
            self.logger.warning(warning)
            warnings.append(warning)
            after = []

        changes = diff_adapters(before, after)
        for change in changes:
            if change.changed:
                self.logger.info(
                    f"adapter {change.name}: {change.before.status.value} -> "
                    f"{change.after.status.value}"
                )

        return NetworkReport(tuple(before), tuple(after), tuple(changes), tuple(warnings))

    def _reset_stack(self, operation: str) -> str | None:
        try:
            outcome = self.control.reset(operation)
        except Exception as exc:
            return f"{operation}: {exc}"

        if not outcome.ok:
            return f"{operation} exited with code {outcome.exit_status}"
        return None

    def _up_names(self) -> set[str]:
        try:
            current = self.control.list_adapters()
        except Exception:
            return set()
        return {a.name for a in current if a.status is AdapterStatus.UP}

    def _all_up(self, names: set[str]) -> bool:
        return names <= self._up_names()
