from __future__ import annotations

from typing import List, Tuple, Type

from ..config import RunConfig
from ..dispatch.registry import ActionRegistry
from .base import BaseAction
from .build import CleanAction, DebugAction, ReleaseAction
from .commands import CommandRunner, run_command
from .provision import ListAction, UbuntuAction

DEFAULT_ACTIONS: Tuple[Type[BaseAction], ...] = (
    ReleaseAction,
    DebugAction,
    CleanAction,
    ListAction,
    UbuntuAction,
)


def action_help() -> List[Tuple[str, str]]:
    return [(cls.name, cls.description) for cls in DEFAULT_ACTIONS]


def build_default_registry(config: RunConfig, *, runner: CommandRunner = run_command) -> ActionRegistry:
    """Register the build and provisioning actions, then freeze the registry."""
    registry = ActionRegistry()
    for cls in DEFAULT_ACTIONS:
        registry.register(cls.name, cls(config, runner=runner), cls.description)
    return registry.freeze()
