from __future__ import annotations

import os
import shlex
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, TextIO, Tuple

from ..errors import CommandError

# runner(argv, cwd=..., env=...) -> object with a ``returncode`` attribute.
CommandRunner = Callable[..., Any]


@dataclass(frozen=True)
class Command:
    """One external process invocation made by an action."""

    argv: Tuple[str, ...]
    cwd: Optional[Path] = None
    # Extra variables layered over the current environment for this process only.
    env: Optional[Dict[str, str]] = None

    def display(self) -> str:
        return shlex.join(self.argv)


def merged_env(extra: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
    if not extra:
        return None
    env = dict(os.environ)
    env.update({str(k): str(v) for k, v in extra.items()})
    return env


def run_command(
    argv: Sequence[str],
    *,
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> subprocess.CompletedProcess:
    """Run a process and wait for it.

    Output streams straight to the terminal so long builds stay visible. The
    child writes to whatever ``sys.stdout`` currently is when that has a file
    descriptor, so ``redirect_stdout(sys.stderr)`` moves process output too.
    Raises CommandError when the executable cannot be started.
    """
    cmd = [str(a) for a in argv]
    out = _stdout_target()
    if out is not None:
        out.flush()
    try:
        return subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            env=dict(env) if env else None,
            stdout=out,
            check=False,
        )
    except OSError as e:
        raise CommandError(cmd, None, str(e)) from e


def _stdout_target() -> Optional[TextIO]:
    # In-memory streams (StringIO) have no fileno; the child then inherits fd 1.
    stream = sys.stdout
    try:
        stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None
    return stream


def shell_pipeline(script: str) -> Tuple[str, ...]:
    """argv running ``script`` through ``sh -c`` (for pipes such as ``curl ... | sh``)."""
    return ("sh", "-c", script)
