# tests/unit/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


def test_error_hierarchy(error_classes):
    StateTreeError, StateNotFoundError, DuplicateStateError, DeclarationError = error_classes
    assert issubclass(StateNotFoundError, StateTreeError)
    assert issubclass(DuplicateStateError, StateTreeError)
    assert issubclass(DeclarationError, StateTreeError)


def test_exceptions_instantiation(error_classes):
    _, StateNotFoundError, DuplicateStateError, DeclarationError = error_classes
    e = StateNotFoundError("Missing")
    assert str(e) == "State Missing not defined"
    assert e.name == "Missing"
    e = StateNotFoundError("Missing", "custom message")
    assert str(e) == "custom message"
    e = DuplicateStateError("A")
    assert str(e) == "State A is already defined. New state not added."
    e = DeclarationError("Bad string")
    assert str(e) == "Bad string"


def test_behavior_error():
    from statetree.core.errors import BehaviorError, StateTreeError

    assert issubclass(BehaviorError, StateTreeError)
    assert str(BehaviorError("Bad behaviors")) == "Bad behaviors"
