# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest


class TraceRecorder:
    """Collects 'EXIT:x', 'ENTER:x', 'STAY:x' and action entries in call order."""

    def __init__(self):
        self.trace = []

    def lifecycle(self, states, machine):
        """Attach recording enter/exit/stay handlers to every named state."""
        for name in states:
            machine.attach(
                name,
                {
                    "exit": self._record("EXIT", name),
                    "enter": self._record("ENTER", name),
                    "stay": self._record("STAY", name),
                },
            )

    def _record(self, kind, name, result=None):
        def handler(sm, *args):
            self.trace.append(f"{kind}:{name}")
            return result

        return handler


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "timing: mark test as depending on real timers")


@pytest.fixture
def machine():
    """An empty machine with only the root state."""
    from statetree.core.state_machine import StateMachine

    return StateMachine()


@pytest.fixture
def strict_machine():
    """An empty machine that raises instead of logging."""
    from statetree.core.state_machine import StateMachine

    return StateMachine(strict=True)


@pytest.fixture
def scenario_machine():
    """root -> A B, A -> !A1 A2."""
    from statetree.core.state_machine import StateMachine

    return StateMachine(["A B", "A -> !A1 A2"])


@pytest.fixture
def deep_machine():
    """
    root
    ├── A
    │   ├── A1 ── A11, A12
    │   └── A2
    └── B ── !B1 ── !B11
    """
    from statetree.core.state_machine import StateMachine

    return StateMachine(["A B", "A -> A1 A2", "A1 -> A11 A12", "B -> !B1", "B1 -> !B11"])


@pytest.fixture
def recorder():
    return TraceRecorder()


@pytest.fixture
def dummy_hook():
    """A hook mock implementing the full Hook protocol."""
    hook = MagicMock()
    hook.on_enter = MagicMock()
    hook.on_exit = MagicMock()
    hook.on_stay = MagicMock()
    hook.on_error = MagicMock()
    return hook


@pytest.fixture
def bus():
    from statetree.runtime.pubsub import PubSub

    return PubSub()


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from statetree.core.errors import DeclarationError, DuplicateStateError, StateNotFoundError, StateTreeError

    return StateTreeError, StateNotFoundError, DuplicateStateError, DeclarationError
