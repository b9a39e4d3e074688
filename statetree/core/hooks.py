# statetree/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, List, Optional


class HookManager:
    """
    Manages the registration and execution of hooks that listen to state machine
    lifecycle steps (on_exit, on_enter, on_stay, on_error). Users can attach logging,
    monitoring, or custom side effects without altering core logic.
    """

    def __init__(self, hooks: Optional[List[Any]] = None) -> None:
        """
        Initialize with an optional list of hook objects.
        """
        self._hooks: List[Any] = list(hooks or [])
        self._invoker = _HookInvoker(self._hooks)

    def register_hook(self, hook: Any) -> None:
        """
        Add a new hook to the manager's list of hooks.

        :param hook: An object implementing some or all of the Hook protocol methods.
        """
        self._hooks.append(hook)

    @property
    def hooks(self) -> List[Any]:
        return list(self._hooks)

    def execute_on_enter(self, state: str) -> None:
        """
        Run all hooks' on_enter logic when entering a state.
        """
        self._invoker.invoke("on_enter", state)

    def execute_on_exit(self, state: str) -> None:
        """
        Run all hooks' on_exit logic when exiting a state.
        """
        self._invoker.invoke("on_exit", state)

    def execute_on_stay(self, state: str) -> None:
        """
        Run all hooks' on_stay logic once a transition settles on its target.
        """
        self._invoker.invoke("on_stay", state)

    def execute_on_error(self, error: Exception) -> None:
        """
        Run all hooks' on_error logic when a handler raises.
        """
        self._invoker.invoke("on_error", error)


class _HookInvoker:
    """
    Internal helper that iterates through a list of hooks and invokes their
    lifecycle methods. Hooks may implement any subset of the methods.
    """

    def __init__(self, hooks: List[Any]) -> None:
        self._hooks = hooks

    def invoke(self, method: str, arg: Any) -> None:
        for hook in list(self._hooks):
            fn = getattr(hook, method, None)
            if callable(fn):
                fn(arg)
