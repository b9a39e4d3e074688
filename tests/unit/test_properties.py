# tests/unit/test_properties.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Property-based checks over randomly generated state trees."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from statetree.core.state_machine import StateMachine


@st.composite
def trees(draw, max_states=12):
    """
    Draw a list of (parent, child) declarations where every parent is declared
    before it is used. Child names are S0, S1, ...
    """
    size = draw(st.integers(min_value=1, max_value=max_states))
    declared = ["root"]
    pairs = []
    for i in range(size):
        parent = draw(st.sampled_from(declared))
        child = f"S{i}"
        pairs.append((parent, child))
        declared.append(child)
    return pairs


def _build(pairs):
    sm = StateMachine()
    for parent, child in pairs:
        sm.declare(f"{parent} -> {child}")
    return sm


@pytest.mark.property
@given(trees())
def test_tree_integrity(pairs):
    sm = _build(pairs)
    order = list(sm)
    for name in order[1:]:
        parent = sm.state(name).parent
        assert order.index(parent) < order.index(name)
    for name in order:
        expected = {n for n in order if sm.state(n).parent == name}
        assert set(sm.children(name)) == expected


@pytest.mark.property
@given(trees(), st.data())
def test_transition_paths(pairs, data):
    sm = _build(pairs)
    names = list(sm)
    source = data.draw(st.sampled_from(names))
    target = data.draw(st.sampled_from(names))

    trace = []
    for name in names:
        sm.attach(
            name,
            {
                "exit": lambda m, _n=name: trace.append(("exit", _n)),
                "enter": lambda m, _n=name: trace.append(("enter", _n)),
                "stay": lambda m, _n=name: trace.append(("stay", _n)),
            },
        )
    sm.go(source)
    trace.clear()
    sm.go(target)

    if source == target:
        assert trace == []
        return

    source_path = sm.graph.path_to_root(source)
    target_path = sm.graph.path_to_root(target)
    lca = next(n for n in source_path if n in target_path)
    exits = source_path[: source_path.index(lca)]
    entries = list(reversed(target_path[: target_path.index(lca)]))

    assert trace == [("exit", n) for n in exits] + [("enter", n) for n in entries] + [("stay", target)]
    assert sm.current == target


@pytest.mark.property
@settings(max_examples=50)
@given(trees(), st.data())
def test_redeclaration_is_noop(pairs, data):
    sm = _build(pairs)
    names = list(sm)[1:]
    victim = data.draw(st.sampled_from(names))
    new_parent = data.draw(st.sampled_from(list(sm)))
    before = (sm.state(victim).parent, dict(sm.state(victim).context), sm.state(victim).default_substate)

    sm.declare(f"{new_parent} -> !{victim}")
    after = (sm.state(victim).parent, dict(sm.state(victim).context), sm.state(victim).default_substate)
    assert before == after
    assert sm.state(new_parent).default_substate is None
