# tests/unit/test_states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from statetree.core.states import Lifecycle, State


def test_state_defaults():
    s = State("Idle")
    assert s.name == "Idle"
    assert s.parent is None
    assert s.default_substate is None
    assert s.context == {}
    assert s.is_root


def test_states_do_not_share_context():
    a, b = State("A"), State("B")
    a.context["x"] = print
    assert b.context == {}


def test_handler_lookup():
    fn = lambda sm: None  # noqa: E731
    s = State("A", parent="root", context={"enter": fn, "label": "not callable"})
    assert s.handler("enter") is fn
    assert s.handler(Lifecycle.ENTER) is fn
    assert s.handler("exit") is None
    assert s.handler("label") is None


def test_update_overwrites_and_adds():
    first, second, other = (lambda sm: 1), (lambda sm: 2), (lambda sm: 3)
    s = State("A")
    s.update({"save": first})
    s.update({"save": second, Lifecycle.STAY: other})
    assert s.context == {"save": second, "stay": other}


def test_lifecycle_values():
    assert [m.value for m in Lifecycle] == ["enter", "exit", "stay"]
    assert Lifecycle.STAY == "stay"
