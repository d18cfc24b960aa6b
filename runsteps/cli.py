from __future__ import annotations

import argparse
import contextlib
import json
import sys
from typing import List, Optional

from .actions.catalog import action_help, build_default_registry
from .config import load_config, resolve_project_dir
from .dispatch.dispatcher import Dispatcher
from .dispatch.models import RunResult, StepOutcome
from .errors import RunstepsError


def _print_step(event: str, index: int, name: str, step: Optional[StepOutcome]) -> None:
    if event == "START":
        print(f"[runsteps] step={index} action={name} START")
    elif event == "OK":
        print(f"[runsteps] step={index} action={name} OK")
    elif event in ("FAIL", "UNKNOWN"):
        reason = step.reason if step is not None else ""
        print(f"[runsteps][FAILED] step={index} action={name} reason={reason}", file=sys.stderr)


def _print_summary(result: RunResult) -> None:
    if result.ok:
        print(f"[runsteps] completed steps={len(result.steps)}")
        return
    failed = result.failed_step
    name = failed.name if failed is not None else "?"
    print(
        f"[runsteps][HALTED] at step={result.halted_at} action={name} reason={result.state.halt_reason} skipped={result.skipped}",
        file=sys.stderr,
    )


def cmd_run(args: argparse.Namespace) -> int:
    try:
        project_dir = resolve_project_dir(args.project_dir)
        config = load_config(project_dir, args.config)
    except RunstepsError as e:
        print(f"[runsteps][ERROR] {e}", file=sys.stderr)
        return 2

    registry = build_default_registry(config)
    plan: List[str] = list(args.actions)

    if args.json:
        # stdout carries only the JSON object; action output goes to stderr.
        with contextlib.redirect_stdout(sys.stderr):
            result = Dispatcher(registry).run(plan)
        payload = result.to_dict()
        payload["config"] = config.source_path or None
        print(json.dumps(payload, ensure_ascii=False, default=str))
        return result.exit_code

    if config.source_path:
        print(f"[runsteps] config={config.source_path}")
    print(f"[runsteps] plan={plan}")
    result = Dispatcher(registry, on_step=_print_step).run(plan)
    _print_summary(result)
    return result.exit_code


def build_parser() -> argparse.ArgumentParser:
    epilog = "actions:\n" + "\n".join(f"  {n:<10} {d}" for n, d in action_help())
    p = argparse.ArgumentParser(
        prog="runsteps",
        description="Run named build/provisioning actions in order, stopping at the first failure.",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("actions", nargs="*", metavar="ACTION", help="Action names, executed in the given order")
    p.add_argument("--project-dir", default=None, help="Project directory (default: $RUNSTEPS_PROJECT_DIR or cwd)")
    p.add_argument("--config", default=None, help="Config YAML (default: $RUNSTEPS_CONFIG or <project-dir>/runsteps.yml)")
    p.add_argument("--json", action="store_true", help="Print the run result as one JSON object")
    p.set_defaults(func=cmd_run)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    # Options may appear anywhere between action names.
    args = parser.parse_intermixed_args(argv)
    return int(args.func(args) or 0)


if __name__ == "__main__":
    raise SystemExit(main())
