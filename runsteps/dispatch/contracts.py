from __future__ import annotations

from typing import Any, Optional, Protocol

from .models import ActionOutcome, StepOutcome


class Action(Protocol):
    """Zero-argument unit of work. Must not return before its side effects finish."""

    def __call__(self) -> ActionOutcome:
        raise NotImplementedError


class StepObserver(Protocol):
    """Optional progress callback.

    ``event`` is one of START, OK, FAIL, UNKNOWN, HALT. ``outcome`` is None for
    START and HALT.
    """

    def __call__(self, event: str, index: int, name: str, outcome: Optional[StepOutcome]) -> Any:
        raise NotImplementedError
