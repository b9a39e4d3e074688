# statetree/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class StateTreeError(Exception):
    """
    Base exception class for errors within the state tree library. Only raised
    when a machine runs in strict mode; otherwise the same conditions are logged.
    """


class StateNotFoundError(StateTreeError):
    """
    Raised when a requested state does not exist in the tree.
    """

    def __init__(self, name: str, message: str = None) -> None:
        super().__init__(message or f"State {name} not defined")
        self.name = name


class DuplicateStateError(StateTreeError):
    """
    Raised when a state name is declared a second time.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"State {name} is already defined. New state not added.")
        self.name = name


class DeclarationError(StateTreeError):
    """
    Raised when a declaration string cannot be parsed.
    """


class BehaviorError(StateTreeError):
    """
    Raised when behaviors given to attach() are neither a mapping nor a callable.
    """
