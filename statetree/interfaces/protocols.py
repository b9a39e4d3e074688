# statetree/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Protocol, runtime_checkable

from statetree.interfaces.types import EventName, StateName, Subscriber


@runtime_checkable
class Hook(Protocol):
    """
    Lifecycle observer protocol.

    Methods:
        on_exit(state): Called for each state left during a transition.
        on_enter(state): Called for each state entered during a transition.
        on_stay(state): Called once a transition has reached its target.
        on_error(error): Called when a handler raises.

    Runtime Invariants:
    - Hooks observe; their return values are ignored and cannot halt a transition.
    - Hooks are called after the state's own handler for the same step.

    Error Handling:
    - Exceptions raised by a hook propagate to the caller of go().
    """

    def on_exit(self, state: StateName) -> None:
        ...

    def on_enter(self, state: StateName) -> None:
        ...

    def on_stay(self, state: StateName) -> None:
        ...

    def on_error(self, error: Exception) -> None:
        ...


@runtime_checkable
class Publisher(Protocol):
    """
    Minimal event bus protocol the state machine publishes lifecycle notifications to.

    Runtime Invariants:
    - publish() is synchronous; subscribers have run when it returns.
    """

    def publish(self, event: EventName, *args: Any) -> Any:
        """Notify every subscriber of ``event`` and its namespace prefixes."""
        ...

    def subscribe(self, events: str, handler: Subscriber, receiver: Any = None, once: bool = False) -> Any:
        """Register ``handler`` for one or more space-separated events."""
        ...
