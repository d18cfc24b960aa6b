"""
Dispatcher: plan of action names -> lookup -> run -> gate on outcome -> next.

Runs one action at a time. After a failed or unresolvable step the remaining
names are neither looked up nor executed. No prints inside; progress is
reported through the optional ``on_step`` callback and the returned RunResult.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .contracts import StepObserver
from .models import (
    REASON_ACTION_EXCEPTION,
    REASON_ACTION_FAILED,
    REASON_OK,
    REASON_UNKNOWN_ACTION,
    ActionOutcome,
    RunResult,
    StepOutcome,
    advance,
    start_run,
)
from .registry import ActionRegistry


def unknown_action_reason(name: str) -> str:
    return f"unknown action `{name}`"


class Dispatcher:
    def __init__(self, registry: ActionRegistry, on_step: Optional[StepObserver] = None):
        self._registry = registry
        self._on_step = on_step

    def run(self, plan: Iterable[str]) -> RunResult:
        names = tuple(str(n) for n in plan)
        state = start_run(len(names))
        steps: List[StepOutcome] = []

        for index, name in enumerate(names):
            if not state.may_run_next():
                break
            self._emit("START", index, name, None)
            step = self._attempt(index, name)
            steps.append(step)
            if step.ok:
                self._emit("OK", index, name, step)
            elif step.reason_code == REASON_UNKNOWN_ACTION:
                self._emit("UNKNOWN", index, name, step)
            else:
                self._emit("FAIL", index, name, step)
            state = advance(state, len(names), step.outcome)

        if state.status == "HALTED":
            self._emit("HALT", state.position, names[state.position], None)

        return RunResult(plan=names, steps=tuple(steps), state=state)

    def _attempt(self, index: int, name: str) -> StepOutcome:
        action = self._registry.lookup(name)
        if action is None:
            return StepOutcome(
                index=index,
                name=name,
                outcome=ActionOutcome.failure(unknown_action_reason(name)),
                reason_code=REASON_UNKNOWN_ACTION,
            )

        try:
            out = action()
        except Exception as e:
            # The halt must still say which step failed and why.
            return StepOutcome(
                index=index,
                name=name,
                outcome=ActionOutcome.failure(f"{e.__class__.__name__}: {e}", exception=e.__class__.__name__),
                reason_code=REASON_ACTION_EXCEPTION,
            )

        if not isinstance(out, ActionOutcome):
            return StepOutcome(
                index=index,
                name=name,
                outcome=ActionOutcome.failure(f"action `{name}` returned no outcome ({type(out).__name__})"),
                reason_code=REASON_ACTION_FAILED,
            )

        return StepOutcome(
            index=index,
            name=name,
            outcome=out,
            reason_code=REASON_OK if out.ok else REASON_ACTION_FAILED,
        )

    def _emit(self, event: str, index: int, name: str, step: Optional[StepOutcome]) -> None:
        if self._on_step is not None:
            self._on_step(event, index, name, step)


def run_plan(registry: ActionRegistry, plan: Iterable[str], on_step: Optional[StepObserver] = None) -> RunResult:
    return Dispatcher(registry, on_step=on_step).run(plan)
