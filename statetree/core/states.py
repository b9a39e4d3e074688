# statetree/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional


class Lifecycle(str, Enum):
    """Reserved context names run by the transition engine."""

    ENTER = "enter"
    EXIT = "exit"
    STAY = "stay"


@dataclass(eq=False)
class State:
    """
    A named node in the state tree. Holds the name of its parent, an optional
    default substate and its context: the mapping of lifecycle hooks and actions
    attached to it.

    Hierarchy is stored by name; the StateGraph owns the name -> State mapping.
    """

    name: str
    parent: Optional[str] = None
    default_substate: Optional[str] = None
    context: Dict[str, Callable[..., Any]] = field(default_factory=dict)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def handler(self, name: str) -> Optional[Callable[..., Any]]:
        """
        Return the callable registered under ``name`` or None. Lifecycle members
        are accepted as names. Non-callable values are treated as absent.
        """
        key = name.value if isinstance(name, Lifecycle) else name
        value = self.context.get(key)
        return value if callable(value) else None

    def update(self, behaviors: Dict[str, Callable[..., Any]]) -> None:
        """Attach behaviors, overwriting any existing ones with the same name."""
        for key, value in behaviors.items():
            self.context[key.value if isinstance(key, Lifecycle) else key] = value

    def __repr__(self) -> str:
        return f"State(name={self.name!r}, parent={self.parent!r}, default_substate={self.default_substate!r})"
