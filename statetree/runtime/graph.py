# statetree/runtime/graph.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Name-keyed storage of the state hierarchy."""

from typing import Dict, Iterator, List, Optional, Tuple

from statetree.core.errors import DuplicateStateError, StateNotFoundError
from statetree.core.states import State


class StateGraph:
    """
    Owns every declared State of one machine, keyed by name, and answers the
    structural questions the transition engine asks: ancestor paths, children
    and the lowest common ancestor of two states.

    The graph starts with a single root state. States are only ever added.
    """

    def __init__(self, root: str = "root") -> None:
        self._root = root
        self._nodes: Dict[str, State] = {root: State(name=root)}
        self._children: Dict[str, List[str]] = {root: []}

    @property
    def root(self) -> str:
        """Name of the root state."""
        return self._root

    def add_state(self, parent: str, child: str, is_default: bool = False) -> Optional[str]:
        """
        Add ``child`` under ``parent``. This is the structured primitive behind
        the declaration strings.

        :param parent: Name of an already declared state.
        :param child: Name of the new state.
        :param is_default: Also record ``child`` as the parent's default substate.
        :return: The default substate that was replaced, if any.
        :raises StateNotFoundError: If ``parent`` is not declared.
        :raises DuplicateStateError: If ``child`` is already declared.
        """
        if parent not in self._nodes:
            raise StateNotFoundError(
                parent, f"State {parent} is not included in the tree. State {child} not added."
            )
        if child in self._nodes:
            raise DuplicateStateError(child)

        self._nodes[child] = State(name=child, parent=parent)
        self._children[child] = []
        self._children[parent].append(child)

        if is_default:
            return self.set_default_substate(parent, child)
        return None

    def set_default_substate(self, parent: str, child: str) -> Optional[str]:
        """
        Make ``child`` the default substate of ``parent``, overwriting any earlier one.

        :return: The previous default substate, or None.
        """
        state = self._require(parent)
        self._require(child)
        previous = state.default_substate
        state.default_substate = child
        return previous if previous != child else None

    def get_state(self, name: str) -> Optional[State]:
        return self._nodes.get(name)

    def get_children(self, name: str) -> List[str]:
        """Get immediate child state names in declaration order."""
        return list(self._children.get(name, []))

    def get_ancestors(self, name: str) -> List[str]:
        """Get all ancestor names in order from immediate parent to root."""
        return self.path_to_root(name)[1:]

    def path_to_root(self, name: str) -> List[str]:
        """Get ``[name, parent, ..., root]``; empty for an unknown name."""
        path = []
        current = name if name in self._nodes else None
        while current is not None:
            path.append(current)
            current = self._nodes[current].parent
        return path

    def is_ancestor(self, ancestor: str, name: str) -> bool:
        """True when ``ancestor`` is a strict ancestor of ``name``."""
        return ancestor in self.get_ancestors(name)

    def find_lca(self, source: str, target: str) -> Tuple[List[str], List[str], Optional[str]]:
        """
        Compute the path of a transition from ``source`` to ``target``.

        :return: ``(exits, entries, lca)`` where ``exits`` runs from ``source``
            upward and ``entries`` runs downward to ``target``, both excluding
            the lowest common ancestor.
        """
        exits = self.path_to_root(source)
        entries = self.path_to_root(target)
        for i, name in enumerate(exits):
            if name in entries:
                idx = entries.index(name)
                return exits[:i], list(reversed(entries[:idx])), name
        # Disjoint paths only happen for unknown names.
        return exits, list(reversed(entries)), None

    def _require(self, name: str) -> State:
        state = self._nodes.get(name)
        if state is None:
            raise StateNotFoundError(name)
        return state

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)
