from __future__ import annotations

import unittest

from _testutil import ensure_repo_on_path


class TestRunStateTransitions(unittest.TestCase):
    def test_initial_state_is_ready_with_prior_success(self) -> None:
        ensure_repo_on_path()
        from runsteps.dispatch.models import RunState

        s = RunState()
        self.assertEqual(s.status, "READY")
        self.assertTrue(s.previous.ok)
        self.assertFalse(s.terminal)
        self.assertFalse(s.may_run_next())

    def test_start_run(self) -> None:
        ensure_repo_on_path()
        from runsteps.dispatch.models import start_run

        self.assertEqual(start_run(0).status, "COMPLETED")
        s = start_run(2)
        self.assertEqual((s.status, s.position), ("RUNNING", 0))
        self.assertTrue(s.may_run_next())

    def test_success_advances_then_completes(self) -> None:
        ensure_repo_on_path()
        from runsteps.dispatch.models import ActionOutcome, advance, start_run

        s = advance(start_run(2), 2, ActionOutcome.success())
        self.assertEqual((s.status, s.position), ("RUNNING", 1))
        s = advance(s, 2, ActionOutcome.success())
        self.assertEqual((s.status, s.position), ("COMPLETED", 2))
        self.assertTrue(s.terminal)

    def test_failure_halts_at_position(self) -> None:
        ensure_repo_on_path()
        from runsteps.dispatch.models import ActionOutcome, advance, start_run

        s = advance(start_run(3), 3, ActionOutcome.success())
        s = advance(s, 3, ActionOutcome.failure("rc=2"))
        self.assertEqual((s.status, s.position, s.halt_reason), ("HALTED", 1, "rc=2"))
        self.assertFalse(s.previous.ok)
        self.assertFalse(s.may_run_next())

    def test_advance_terminal_state_rejected(self) -> None:
        ensure_repo_on_path()
        from runsteps.dispatch.models import ActionOutcome, advance, start_run

        with self.assertRaises(ValueError):
            advance(start_run(0), 0, ActionOutcome.success())

    def test_failure_reason_defaults(self) -> None:
        ensure_repo_on_path()
        from runsteps.dispatch.models import ActionOutcome

        self.assertEqual(ActionOutcome.failure("").reason, "action failed")
        self.assertEqual(ActionOutcome.success(archive="a.tgz").details, {"archive": "a.tgz"})


if __name__ == "__main__":
    unittest.main()
