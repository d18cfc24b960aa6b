"""Name -> action mapping consulted by the dispatcher.

The registry is assembled once at process start and then frozen; a frozen
registry rejects further registration. Before freezing, registering an
existing name replaces the earlier action.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from ..errors import ConflictError, ValidationError
from .contracts import Action


def validate_action_name(name: str) -> str:
    """Names are opaque and matched exactly; only blank names are rejected."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"action name must be non-empty: {name!r}")
    return name


class ActionRegistry:
    def __init__(self) -> None:
        self._actions: Dict[str, Action] = {}
        self._descriptions: Dict[str, str] = {}
        self._frozen = False

    def register(self, name: str, action: Action, description: str = "") -> None:
        if self._frozen:
            raise ConflictError(f"registry is frozen; cannot register {name!r}")
        if not callable(action):
            raise ValidationError(f"action for {name!r} must be callable")
        key = validate_action_name(name)
        self._actions[key] = action
        self._descriptions[key] = str(description or getattr(action, "description", "") or "")

    def lookup(self, name: str) -> Optional[Action]:
        """Return the action registered under ``name`` or None. Never raises."""
        return self._actions.get(name)

    def describe(self, name: str) -> str:
        return self._descriptions.get(name, "")

    def names(self) -> List[str]:
        return sorted(self._actions.keys())

    def freeze(self) -> "ActionRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._actions

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._actions)
