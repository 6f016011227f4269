from .commands import DEFAULT_COMMANDS
from .executor import SubprocessExecutor
from .types import CommandError, CommandExecutor, CommandOutcome, MaintenanceError

__all__ = [
    "CommandExecutor",
    "CommandOutcome",
    "CommandError",
    "MaintenanceError",
    "SubprocessExecutor",
    "DEFAULT_COMMANDS",
]
