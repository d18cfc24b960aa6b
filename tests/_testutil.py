from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence


def ensure_repo_on_path() -> Path:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))
    return repo_root


@dataclass
class FakeCompleted:
    returncode: int


class RecordingRunner:
    """CommandRunner stand-in: records argv/cwd/env, returns scripted return codes.

    ``fail_on`` maps an argv prefix (tuple) to the return code to report.
    """

    def __init__(self, fail_on: Optional[Dict[tuple, int]] = None):
        self.calls: List[Dict[str, Any]] = []
        self.fail_on = dict(fail_on or {})

    def __call__(self, argv: Sequence[str], *, cwd: Any = None, env: Any = None) -> FakeCompleted:
        argv = [str(a) for a in argv]
        self.calls.append({"argv": argv, "cwd": cwd, "env": env})
        for prefix, rc in self.fail_on.items():
            if tuple(argv[: len(prefix)]) == tuple(prefix):
                return FakeCompleted(returncode=rc)
        return FakeCompleted(returncode=0)

    @property
    def argvs(self) -> List[List[str]]:
        return [c["argv"] for c in self.calls]
