from hostmend.network.differ import NetworkStateDiffer
from hostmend.runner.types import ActionOutcome, MaintenanceAction


class NetworkReset(MaintenanceAction):
    def __init__(self, differ: NetworkStateDiffer):
        self.differ = differ

    def run(self) -> ActionOutcome:
        report = self.differ.reset()

        changed = report.changed
        message = f"{len(report.changes)} adapters checked, {len(changed)} changed"
        if changed:
            message += f" ({', '.join(changed)})"
        if report.warnings:
            message += f", {len(report.warnings)} warnings"

        return ActionOutcome(message, adapter_changes=report.changes)
