"""statetree: hierarchical state machine driven by named, nested states

Client code declares a tree of states, attaches behaviors to them and moves
between them by name. The machine runs exit/enter/stay hooks in tree order,
expands default substates and bubbles actions from the current state to the
root.

    sm = create(['A B', 'A -> !A1 A2'])
    sm.attach('A1', {'enter': on_enter, 'save': save})
    sm.go('A')      # current state is now A1
    sm.act('save')

Errors are reported through the standard logging module and ignored, unless a
machine is created with ``strict=True``.
"""

import logging

from .core import (
    BehaviorError,
    DeclarationError,
    DuplicateStateError,
    HaltPolicy,
    Lifecycle,
    Signal,
    State,
    StateMachine,
    StateNotFoundError,
    StateTreeError,
    create,
)
from .runtime import PubSub, ScheduledTask

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "StateMachine",
    "create",
    "State",
    "Lifecycle",
    "Signal",
    "HaltPolicy",
    "PubSub",
    "ScheduledTask",
    "StateTreeError",
    "StateNotFoundError",
    "DuplicateStateError",
    "DeclarationError",
    "BehaviorError",
]
