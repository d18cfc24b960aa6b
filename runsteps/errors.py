from __future__ import annotations

from typing import List, Optional, Sequence


class RunstepsError(Exception):
    """Base class for runsteps errors."""


class NotFoundError(RunstepsError):
    """Raised when a requested file or entity cannot be found."""


class ValidationError(RunstepsError):
    """Raised when a config, action name, or input fails validation."""


class ConflictError(RunstepsError):
    """Raised when an operation conflicts with existing state."""


class CommandError(RunstepsError):
    """Raised when an external command exits non-zero or cannot be started."""

    def __init__(self, argv: Sequence[str], returncode: Optional[int], output: str = "") -> None:
        self.argv: List[str] = [str(a) for a in argv]
        self.returncode = returncode
        self.output = output
        if returncode is None:
            msg = f"command could not be started: {' '.join(self.argv)}"
        else:
            msg = f"command failed (rc={returncode}): {' '.join(self.argv)}"
        super().__init__(msg)
