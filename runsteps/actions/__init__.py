from __future__ import annotations

from .base import BaseAction
from .build import CleanAction, DebugAction, ReleaseAction
from .catalog import build_default_registry
from .commands import Command, CommandRunner, run_command
from .provision import ListAction, UbuntuAction

__all__ = [
    "BaseAction",
    "CleanAction",
    "DebugAction",
    "ReleaseAction",
    "ListAction",
    "UbuntuAction",
    "build_default_registry",
    "Command",
    "CommandRunner",
    "run_command",
]
