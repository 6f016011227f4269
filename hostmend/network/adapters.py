import psutil

from hostmend.executor.types import CommandError, CommandExecutor, CommandOutcome

from .types import AdapterState, AdapterStatus

_LOOPBACK_PREFIXES = ("lo", "Loopback")


class SystemAdapterControl:
    """
    Adapter control backed by the host.

    Enumeration reads ``psutil.net_if_stats()``; restarts and stack-level
    resets go through the command executor.
    """

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def list_adapters(self) -> list[AdapterState]:
        adapters = []
        for name, stats in sorted(psutil.net_if_stats().items()):
            if name.startswith(_LOOPBACK_PREFIXES):
                continue
            status = AdapterStatus.UP if stats.isup else AdapterStatus.DOWN
            adapters.append(AdapterState(name, status, int(stats.speed or 0)))
        return adapters

    def restart(self, name: str) -> None:
        for operation in ("adapter-disable", "adapter-enable"):
            outcome = self.executor.execute(operation, [name])
            if not outcome.ok:
                raise CommandError(operation, f"exit code {outcome.exit_status} for {name}")

    def reset(self, operation: str) -> CommandOutcome:
        return self.executor.execute(operation)
