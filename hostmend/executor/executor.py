import subprocess
from typing import Mapping, Sequence

from .commands import DEFAULT_COMMANDS
from .types import CommandError, CommandOutcome


class SubprocessExecutor:
    def __init__(self, commands: Mapping[str, Sequence[str]] | None = None):
        self.commands: dict[str, list[str]] = {
            name: list(argv) for name, argv in DEFAULT_COMMANDS.items()
        }
        if commands:
            self.commands.update({name: list(argv) for name, argv in commands.items()})

    def argv_for(self, operation: str, args: Sequence[str] = ()) -> list[str]:
        if operation not in self.commands:
            raise CommandError(operation, "unknown operation")

        template = self.commands[operation]
        if not any("{" in token for token in template):
            return [*template, *args]

        try:
            return [token.format(*args) for token in template]
        except (IndexError, KeyError) as exc:
            raise CommandError(
                operation, f"expected more arguments than {list(args)}"
            ) from exc

    def execute(self, operation: str, args: Sequence[str] = ()) -> CommandOutcome:
        argv = self.argv_for(operation, args)

        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as exc:
            raise CommandError(operation, f"could not start {argv[0]!r}: {exc}") from exc

        output = result.stdout
        if result.stderr:
            output = f"{output}{result.stderr}"

        return CommandOutcome(result.returncode, output)
