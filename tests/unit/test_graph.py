# tests/unit/test_graph.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from statetree.core.errors import DuplicateStateError, StateNotFoundError
from statetree.runtime.graph import StateGraph


@pytest.fixture
def graph():
    g = StateGraph()
    g.add_state("root", "A")
    g.add_state("root", "B")
    g.add_state("A", "A1", is_default=True)
    g.add_state("A", "A2")
    g.add_state("A1", "A11")
    g.add_state("B", "B1")
    return g


def test_graph_starts_with_root():
    g = StateGraph(root="top")
    assert g.root == "top"
    assert "top" in g
    assert len(g) == 1
    assert g.get_state("top").is_root


def test_add_state_links_parent(graph):
    assert graph.get_state("A1").parent == "A"
    assert graph.get_state("A").default_substate == "A1"
    assert graph.get_state("A2").context == {}


def test_add_state_unknown_parent(graph):
    with pytest.raises(StateNotFoundError) as exc:
        graph.add_state("Nope", "X")
    assert exc.value.name == "Nope"
    assert "X" not in graph


def test_add_state_duplicate_keeps_original(graph):
    with pytest.raises(DuplicateStateError):
        graph.add_state("B", "A1", is_default=True)
    assert graph.get_state("A1").parent == "A"
    assert graph.get_state("B").default_substate is None
    assert graph.get_children("B") == ["B1"]


def test_default_substate_overwrite_returns_previous(graph):
    assert graph.set_default_substate("A", "A2") == "A1"
    assert graph.get_state("A").default_substate == "A2"
    assert graph.set_default_substate("A", "A2") is None


def test_children_in_declaration_order(graph):
    assert graph.get_children("root") == ["A", "B"]
    assert graph.get_children("A") == ["A1", "A2"]
    assert graph.get_children("A2") == []
    assert graph.get_children("missing") == []


def test_children_returns_copy(graph):
    graph.get_children("A").append("Z")
    assert graph.get_children("A") == ["A1", "A2"]


def test_path_to_root(graph):
    assert graph.path_to_root("A11") == ["A11", "A1", "A", "root"]
    assert graph.path_to_root("root") == ["root"]
    assert graph.path_to_root("missing") == []
    assert graph.get_ancestors("A11") == ["A1", "A", "root"]


def test_is_ancestor(graph):
    assert graph.is_ancestor("A", "A11")
    assert graph.is_ancestor("root", "B1")
    assert not graph.is_ancestor("A11", "A11")
    assert not graph.is_ancestor("B", "A11")


@pytest.mark.parametrize(
    "source, target, exits, entries, lca",
    [
        ("A11", "B1", ["A11", "A1", "A"], ["B", "B1"], "root"),
        ("A11", "A", ["A11", "A1"], [], "A"),
        ("root", "A11", [], ["A", "A1", "A11"], "root"),
        ("A1", "A2", ["A1"], ["A2"], "A"),
        ("A11", "root", ["A11", "A1", "A"], [], "root"),
        ("B1", "B1", [], [], "B1"),
    ],
)
def test_find_lca(graph, source, target, exits, entries, lca):
    assert graph.find_lca(source, target) == (exits, entries, lca)


def test_iteration_in_declaration_order(graph):
    assert list(graph) == ["root", "A", "B", "A1", "A2", "A11", "B1"]
