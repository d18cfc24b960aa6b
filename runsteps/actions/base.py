"""
Base class for the registered actions.

An action is a zero-argument callable returning ActionOutcome. External
commands go through the injected CommandRunner; a non-zero exit stops the
action at that command (the ``a && b && c`` chain of a shell recipe).
"""

from __future__ import annotations

from typing import Any, Iterable

from ..config import RunConfig
from ..dispatch.models import ActionOutcome
from ..errors import CommandError
from .commands import Command, CommandRunner, merged_env, run_command


class BaseAction:
    name: str = ""
    description: str = ""

    def __init__(self, config: RunConfig, *, runner: CommandRunner = run_command):
        self.config = config
        self.runner = runner

    def __call__(self) -> ActionOutcome:
        return self.run()

    def run(self) -> ActionOutcome:
        raise NotImplementedError

    def log(self, message: str) -> None:
        print(f"[{self.name}] {message}")

    def execute(self, cmd: Command) -> None:
        """Run one command; raise CommandError on a non-zero exit."""
        self.log(f"$ {cmd.display()}")
        cp = self.runner(list(cmd.argv), cwd=cmd.cwd, env=merged_env(cmd.env))
        rc = int(getattr(cp, "returncode", 1))
        if rc != 0:
            raise CommandError(cmd.argv, rc)

    def execute_all(self, commands: Iterable[Command]) -> int:
        """Run commands in order, stopping at the first failure. Returns the count run."""
        count = 0
        for cmd in commands:
            self.execute(cmd)
            count += 1
        return count

    def command_failure(self, err: CommandError, **details: Any) -> ActionOutcome:
        return ActionOutcome.failure(str(err), command=list(err.argv), returncode=err.returncode, **details)
