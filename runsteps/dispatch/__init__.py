from __future__ import annotations

from .models import (
    ActionOutcome,
    RunResult,
    RunState,
    StepOutcome,
    advance,
    start_run,
)

from .contracts import Action, StepObserver

from .registry import ActionRegistry

from .dispatcher import Dispatcher, run_plan, unknown_action_reason

__all__ = [
    "ActionOutcome",
    "RunResult",
    "RunState",
    "StepOutcome",
    "advance",
    "start_run",
    "Action",
    "StepObserver",
    "ActionRegistry",
    "Dispatcher",
    "run_plan",
    "unknown_action_reason",
]
