from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .types import MaintenanceRun, TaskStatus

if TYPE_CHECKING:
    from hostmend.network.types import AdapterChange


@dataclass(frozen=True)
class SummaryRow:
    task_name: str
    status: TaskStatus
    message: str
    duration_s: float


@dataclass(frozen=True)
class RunSummary:
    duration_s: float
    total: int
    counts: dict[TaskStatus, int]
    rows: tuple[SummaryRow, ...]
    adapter_changes: tuple[AdapterChange, ...]

    @classmethod
    def from_run(cls, run: MaintenanceRun) -> RunSummary:
        rows = tuple(
            SummaryRow(r.task_name, r.status, r.message, r.duration_s) for r in run.results
        )
        changes = tuple(change for r in run.results for change in r.adapter_changes)
        return cls(run.duration_s, len(run.results), run.counts(), rows, changes)

    def as_dict(self) -> dict[str, Any]:
        return {
            "duration_s": round(self.duration_s, 3),
            "total": self.total,
            "counts": {status.value: n for status, n in self.counts.items()},
            "tasks": [
                {
                    "task": row.task_name,
                    "status": row.status.value,
                    "message": row.message,
                    "duration_s": round(row.duration_s, 3),
                }
                for row in self.rows
            ],
            "network_changes": [
                {
                    "adapter": change.name,
                    "before": change.before.status.value,
                    "after": change.after.status.value,
                    "changed": change.changed,
                }
                for change in self.adapter_changes
            ],
        }

    def lines(self) -> list[str]:
        counts = ", ".join(f"{status.value}={n}" for status, n in self.counts.items())
        out = [
            f"{self.total} tasks in {self.duration_s:.1f}s ({counts})",
        ]
        for row in self.rows:
            out.append(f"{row.status.value.upper()} {row.task_name}, {row.duration_s:.3f}s: {row.message}")
        for change in self.adapter_changes:
            mark = "changed" if change.changed else "unchanged"
            out.append(
                f"adapter {change.name}: {change.before.status.value} -> "
                f"{change.after.status.value} ({mark})"
            )
        return out
