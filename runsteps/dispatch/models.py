from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal, Optional, Tuple

# Canonical run states. READY is the only initial state; HALTED and COMPLETED are terminal.
RunStatus = Literal["READY", "RUNNING", "HALTED", "COMPLETED"]
TERMINAL_STATUSES: Tuple[str, ...] = ("HALTED", "COMPLETED")

# Per-step reason codes.
REASON_OK = "ok"
REASON_UNKNOWN_ACTION = "unknown_action"
REASON_ACTION_FAILED = "action_failed"
REASON_ACTION_EXCEPTION = "action_exception"


@dataclass(frozen=True)
class ActionOutcome:
    """Binary result reported by an action: Success, or Failure with a reason."""

    ok: bool
    reason: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, **details: Any) -> "ActionOutcome":
        return cls(ok=True, reason="", details=dict(details))

    @classmethod
    def failure(cls, reason: str, **details: Any) -> "ActionOutcome":
        return cls(ok=False, reason=str(reason or "action failed"), details=dict(details))


# "No prior action" is treated as success so the first plan entry is always eligible.
NO_PRIOR_ACTION = ActionOutcome(ok=True)


@dataclass(frozen=True)
class StepOutcome:
    """Record of one attempted plan entry."""

    index: int
    name: str
    outcome: ActionOutcome
    reason_code: str = REASON_OK

    @property
    def ok(self) -> bool:
        return self.outcome.ok

    @property
    def reason(self) -> str:
        return self.outcome.reason

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "action": self.name,
            "ok": self.ok,
            "reason_code": self.reason_code,
            "reason": self.reason,
            "details": dict(self.outcome.details),
        }


@dataclass(frozen=True)
class RunState:
    """Per-invocation dispatcher state.

    ``position`` is the index of the step about to be attempted (RUNNING), the
    index of the step that halted the run (HALTED), or the plan length (COMPLETED).
    """

    status: RunStatus = "READY"
    position: int = 0
    previous: ActionOutcome = NO_PRIOR_ACTION
    halt_reason: str = ""

    @property
    def terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def may_run_next(self) -> bool:
        """Gate check: the next entry runs only if the previous step did not fail."""
        return self.status == "RUNNING" and self.previous.ok


def start_run(plan_length: int) -> RunState:
    """Ready -> Running(0), or Ready -> Completed for an empty plan."""
    if plan_length <= 0:
        return RunState(status="COMPLETED", position=0)
    return RunState(status="RUNNING", position=0)


def advance(state: RunState, plan_length: int, outcome: ActionOutcome) -> RunState:
    """Apply the outcome of the step at ``state.position`` and return the next state."""
    if state.status != "RUNNING":
        raise ValueError(f"cannot advance a run in state {state.status}")
    if not outcome.ok:
        return replace(state, status="HALTED", previous=outcome, halt_reason=outcome.reason)
    nxt = state.position + 1
    if nxt >= plan_length:
        return replace(state, status="COMPLETED", position=plan_length, previous=outcome)
    return replace(state, position=nxt, previous=outcome)


@dataclass(frozen=True)
class RunResult:
    """Outcome of one dispatcher invocation."""

    plan: Tuple[str, ...]
    steps: Tuple[StepOutcome, ...]
    state: RunState

    @property
    def ok(self) -> bool:
        return self.state.status == "COMPLETED" and all(s.ok for s in self.steps)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    @property
    def halted_at(self) -> Optional[int]:
        if self.state.status != "HALTED":
            return None
        return self.state.position

    @property
    def failed_step(self) -> Optional[StepOutcome]:
        for s in self.steps:
            if not s.ok:
                return s
        return None

    @property
    def skipped(self) -> List[str]:
        """Plan entries that were never looked up because the run halted first."""
        if self.halted_at is None:
            return []
        return list(self.plan[self.halted_at + 1:])

    def to_dict(self) -> Dict[str, Any]:
        failed = self.failed_step
        return {
            "ok": self.ok,
            "state": self.state.status,
            "plan": list(self.plan),
            "steps": [s.to_dict() for s in self.steps],
            "halted_at": self.halted_at,
            "failed_action": failed.name if failed else None,
            "reason": self.state.halt_reason,
            "skipped": self.skipped,
        }
