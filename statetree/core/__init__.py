"""
Core package providing the hierarchical state machine: state records, the
declaration parser, the transition engine and the action dispatcher.
"""

from .actions import ActionDispatcher, DispatchResult, Signal, is_stop
from .errors import BehaviorError, DeclarationError, DuplicateStateError, StateNotFoundError, StateTreeError
from .hooks import HookManager
from .parser import parse_declaration
from .state_machine import StateMachine, create
from .states import Lifecycle, State
from .transitions import HaltPolicy, TransitionEngine, TransitionRecord

__all__ = [
    # Machine
    "StateMachine",
    "create",
    # States and results
    "State",
    "Lifecycle",
    "Signal",
    "is_stop",
    "HaltPolicy",
    "TransitionRecord",
    "DispatchResult",
    # Components
    "ActionDispatcher",
    "TransitionEngine",
    "HookManager",
    "parse_declaration",
    # Errors
    "StateTreeError",
    "StateNotFoundError",
    "DuplicateStateError",
    "BehaviorError",
    "DeclarationError",
]
