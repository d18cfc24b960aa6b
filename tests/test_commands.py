from __future__ import annotations

import sys
from pathlib import Path

import pytest

from _testutil import RecordingRunner, ensure_repo_on_path

ensure_repo_on_path()

from runsteps.actions.base import BaseAction  # noqa: E402
from runsteps.actions.commands import Command, merged_env, run_command, shell_pipeline  # noqa: E402
from runsteps.config import RunConfig  # noqa: E402
from runsteps.dispatch.models import ActionOutcome  # noqa: E402
from runsteps.errors import CommandError  # noqa: E402


class _ChainAction(BaseAction):
    name = "chain"

    def __init__(self, config, commands, **kw):
        super().__init__(config, **kw)
        self._commands = commands

    def run(self) -> ActionOutcome:
        try:
            n = self.execute_all(self._commands)
        except CommandError as e:
            return self.command_failure(e)
        return ActionOutcome.success(commands=n)


def test_run_command_returns_exit_status(tmp_path: Path) -> None:
    ok = run_command([sys.executable, "-c", "import sys; sys.exit(0)"], cwd=tmp_path)
    bad = run_command([sys.executable, "-c", "import sys; sys.exit(3)"])
    assert ok.returncode == 0
    assert bad.returncode == 3


def test_run_command_uses_cwd_and_env(tmp_path: Path) -> None:
    script = "import os, pathlib; pathlib.Path('out.txt').write_text(os.environ['RUNSTEPS_T'])"
    cp = run_command([sys.executable, "-c", script], cwd=tmp_path, env=merged_env({"RUNSTEPS_T": "hello"}))
    assert cp.returncode == 0
    assert (tmp_path / "out.txt").read_text() == "hello"


def test_run_command_missing_executable_raises(tmp_path: Path) -> None:
    with pytest.raises(CommandError) as ei:
        run_command([str(tmp_path / "no-such-binary")])
    assert ei.value.returncode is None


def test_merged_env_keeps_parent_environment() -> None:
    assert merged_env(None) is None
    env = merged_env({"X_RUNSTEPS": "1"})
    assert env is not None
    assert env["X_RUNSTEPS"] == "1"
    assert "PATH" in env


def test_command_display_quotes() -> None:
    assert Command(argv=("echo", "a b")).display() == "echo 'a b'"
    assert shell_pipeline("a | b") == ("sh", "-c", "a | b")


def test_chain_stops_at_first_failure(tmp_path: Path) -> None:
    runner = RecordingRunner(fail_on={("two",): 4})
    action = _ChainAction(
        RunConfig(project_dir=tmp_path),
        [Command(argv=("one",)), Command(argv=("two",)), Command(argv=("three",))],
        runner=runner,
    )

    out = action()

    assert not out.ok
    assert runner.argvs == [["one"], ["two"]]
    assert out.details["returncode"] == 4
    assert out.details["command"] == ["two"]
    assert "rc=4" in out.reason


def test_chain_real_processes(tmp_path: Path, capsys) -> None:
    action = _ChainAction(
        RunConfig(project_dir=tmp_path),
        [
            Command(argv=(sys.executable, "-c", "pass")),
            Command(argv=(sys.executable, "-c", "raise SystemExit(1)")),
        ],
    )
    out = action()

    assert not out.ok
    assert out.details["returncode"] == 1
    printed = capsys.readouterr().out
    assert printed.count("[chain] $ ") == 2
