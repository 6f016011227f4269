from __future__ import annotations

from hostmend.executor.types import CommandExecutor, CommandOutcome
from hostmend.runner.types import CommandFailed, TaskFailure

from .base import CommandAction


class IntegrityScan(CommandAction):
    operation = "sfc-scan"

    def interpret(self, outcome: CommandOutcome) -> str:
        # sfc writes UTF-16 on some consoles; collapse NULs before matching.
        text = outcome.output.replace("\x00", "").lower()

        if "did not find any integrity violations" in text:
            return "no integrity violations found"
        if "successfully repaired" in text:
            return "corrupt files found and repaired"
        if "unable to fix" in text:
            raise TaskFailure("corrupt files found but some could not be repaired")
        if not outcome.ok:
            raise CommandFailed(self.operation, outcome.exit_status, outcome.output)
        return "integrity scan completed"


class ImageRepair(CommandAction):
    operation = "dism-restore-health"
    done_message = "system image restored to a healthy state"


class ImageCleanup(CommandAction):
    operation = "dism-component-cleanup"
    done_message = "superseded components removed"


class DiskCheck(CommandAction):
    operation = "chkdsk-scan"

    _MESSAGES = {
        0: "no errors found",
        1: "errors found and fixed",
        2: "disk cleanup performed, no errors",
    }

    def interpret(self, outcome: CommandOutcome) -> str:
        if outcome.exit_status in self._MESSAGES:
            return self._MESSAGES[outcome.exit_status]
        raise TaskFailure(
            f"disk check could not complete or left errors unfixed "
            f"(exit code {outcome.exit_status})"
        )


class DriverRescan(CommandAction):
    operation = "pnputil-scan"
    done_message = "device tree rescanned"


class DiskCleanup(CommandAction):
    operation = "disk-cleanup"
    done_message = "disk cleanup completed"


class UpdateInstall(CommandAction):
    operation = "update-install"

    def __init__(self, executor: CommandExecutor, *, auto_reboot: bool = False):
        super().__init__(executor, ["-AutoReboot" if auto_reboot else "-IgnoreReboot"])
        self.auto_reboot = auto_reboot

    def interpret(self, outcome: CommandOutcome) -> str:
        super().interpret(outcome)
        reboot = "reboot allowed" if self.auto_reboot else "reboot deferred"
        return f"updates installed ({reboot})"


class RestartUpdateService(CommandAction):
    operation = "restart-update-service"
    done_message = "update service restarted"


class CriticalEventInspection(CommandAction):
    operation = "query-critical-events"

    def interpret(self, outcome: CommandOutcome) -> str:
        super().interpret(outcome)

        count = outcome.output.count("Event[")
        if count == 0:
            return "no critical events recorded"
        return f"{count} critical events recorded"
