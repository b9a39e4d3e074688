# statetree/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from statetree.core.actions import ActionDispatcher, DispatchResult
from statetree.core.errors import (
    BehaviorError,
    DeclarationError,
    DuplicateStateError,
    StateNotFoundError,
    StateTreeError,
)
from statetree.core.hooks import HookManager
from statetree.core.parser import normalize, parse_declaration, split_names
from statetree.core.states import Lifecycle, State
from statetree.core.transitions import HaltPolicy, TransitionEngine, TransitionRecord
from statetree.interfaces.protocols import Publisher
from statetree.runtime.graph import StateGraph

log = logging.getLogger(__name__)


class StateMachine:
    """
    A hierarchical state machine with exactly one current state.

    States are declared by name into a tree rooted at ``root``. Behaviors are
    attached per state; ``go()`` moves between states running exit, enter and
    stay hooks, and ``act()`` bubbles an action from the current state to the
    root. Every handler is called with the machine as its first argument.

    Invalid requests (unknown states, duplicate declarations, malformed
    declaration strings) are logged and ignored, or raised as StateTreeError
    subclasses when ``strict`` is set. All public operations return the machine
    so calls can be chained.
    """

    def __init__(
        self,
        states: Any = None,
        init: Optional[Callable[["StateMachine"], Any]] = None,
        root: str = "root",
        hooks: Optional[List[Any]] = None,
        bus: Optional[Publisher] = None,
        strict: bool = False,
        halt_policy: HaltPolicy = HaltPolicy.SETTLE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        :param states: Optional declarations, in any form accepted by declare().
        :param init: Callback run by init() with the machine as argument.
        :param root: Name of the root state.
        :param hooks: Objects implementing some of on_exit/on_enter/on_stay/on_error.
        :param bus: Event bus that receives exit/enter/stay notifications.
        :param strict: Raise StateTreeError subclasses instead of logging warnings.
        :param halt_policy: How a lifecycle hook returning False is treated.
        :param logger: Logger for diagnostics; defaults to this module's logger.
        """
        self._log = logger or log
        self._graph = StateGraph(root)
        self._hooks = HookManager(hooks)
        self._bus = bus
        self._strict = strict
        self._engine = TransitionEngine(self._graph, self._hooks, bus, halt_policy, self._log)
        self._dispatcher = ActionDispatcher(self._graph, self._log)
        self._on_init = init
        self._current = root
        self._active = root
        self._depth = 0
        self.last_transition: Optional[TransitionRecord] = None
        self.last_dispatch: Optional[DispatchResult] = None

        if states is not None:
            self.declare(states)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def root(self) -> str:
        return self._graph.root

    @property
    def current(self) -> str:
        """Name of the current state. Only changed by go()."""
        return self._current

    @property
    def context(self) -> Dict[str, Callable[..., Any]]:
        """
        Context of the active state: the state whose hook or action is running,
        or the current state when nothing is running.
        """
        return self._graph.get_state(self._active).context

    @property
    def active(self) -> str:
        """Name of the state whose context is active."""
        return self._active

    @property
    def graph(self) -> StateGraph:
        return self._graph

    @property
    def hooks(self) -> HookManager:
        return self._hooks

    @property
    def bus(self) -> Optional[Publisher]:
        return self._bus

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def halt_policy(self) -> HaltPolicy:
        return self._engine.halt_policy

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def declare(self, *specs: Any) -> "StateMachine":
        """
        Declare states.

        Usage:
            declare('parent -> child1 child2 ... childN')
            declare('child1 child2')                  # children of the root
            declare('parent -> !child1 child2')       # child1 is the default substate
            declare(['a -> b c', 'b -> !d e'])
            declare({'a': 'b c', 'b': '!d e'})

        A string whose parent is undeclared is dropped from that pair on.
        A child that already exists keeps its original definition.
        """
        for spec in specs:
            try:
                lines = normalize(spec)
            except DeclarationError as error:
                self._report(error)
                continue
            for line in lines:
                self._declare_line(line)
        return self

    add = declare

    def declare_state(self, parent: str, child: str, is_default: bool = False) -> "StateMachine":
        """
        Structured form of declare(): add ``child`` under ``parent``.

        :param parent: Name of a declared state.
        :param child: Name of the new state.
        :param is_default: Also make ``child`` the default substate of ``parent``.
        """
        self._add_state(parent, child, is_default)
        return self

    def _declare_line(self, line: str) -> None:
        try:
            declarations = parse_declaration(line, self.root)
        except DeclarationError as error:
            self._report(error)
            return
        for declaration in declarations:
            if not self._add_state(*declaration):
                return

    def _add_state(self, parent: str, child: str, is_default: bool) -> bool:
        """Returns False when ``parent`` is undeclared."""
        try:
            replaced = self._graph.add_state(parent, child, is_default)
        except StateNotFoundError as error:
            self._report(error)
            return False
        except DuplicateStateError as error:
            self._report(error)
            return True

        if replaced is not None:
            self._log.warning(
                "State %s already has a default substate %s which will be overwritten with %s",
                parent,
                replaced,
                child,
            )
        return True

    # ------------------------------------------------------------------
    # Behaviors
    # ------------------------------------------------------------------

    def attach(self, states: Any, behaviors: Any = None) -> "StateMachine":
        """
        Attach behaviors to one or more states. Existing behaviors with the same
        name are overwritten.

        Usage:
            attach('A', {'enter': fn, 'save': fn})
            attach('A B C', {'save': fn})
            attach({'A': {'save': fn}, 'B C': {'load': fn}})
            attach('A', fn)                         # shorthand for {'stay': fn}

        An undeclared name aborts the rest of the call. Behaviors that are
        neither a mapping nor a callable are rejected.
        """
        if isinstance(states, Mapping):
            for group, group_behaviors in states.items():
                self.attach(group, group_behaviors)
            return self

        if callable(behaviors):
            behaviors = {Lifecycle.STAY.value: behaviors}
        elif behaviors is None:
            behaviors = {}
        elif not isinstance(behaviors, Mapping):
            self._report(BehaviorError(f"Behaviors must be a mapping or a callable, not {type(behaviors).__name__}"))
            return self

        names = split_names(states) if isinstance(states, str) else list(states)
        for name in names:
            state = self._graph.get_state(name)
            if state is None:
                self._report(StateNotFoundError(name, f"State {name} doesn't exist. Actions not added."))
                return self
            state.update(behaviors)
        return self

    when = attach

    # ------------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------------

    def init(self) -> "StateMachine":
        """Run the ``init`` callback given at construction, if any."""
        if callable(self._on_init):
            with self._operation():
                self._on_init(self)
        return self

    def go(self, target: str) -> "StateMachine":
        """
        Transition to ``target``.

        Exits every state from the current one up to the lowest common ancestor,
        enters every state below it down to ``target``, runs ``stay`` on
        ``target`` and then follows default substates. Going to the current
        state does nothing.
        """
        if target not in self._graph:
            self._report(StateNotFoundError(target))
            return self
        if target == self._current:
            return self

        with self._operation():
            self.last_transition = self._engine.run(
                self,
                self._current,
                target,
                commit=self._commit,
                activate=self._activate,
                current_state=lambda: self._current,
            )
        return self

    def act(self, action_name: str, *args: Any, **kwargs: Any) -> "StateMachine":
        """
        Perform an action. Handlers named ``action_name`` run from the current
        state up to the root; a handler returning False (or Signal.STOP) ends
        the chain. A missing handler is not an error.
        """
        with self._operation():
            self.last_dispatch = self._dispatcher.dispatch(
                self, self._current, action_name, args, kwargs, activate=self._activate
            )
        return self

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def state(self, name: str) -> Optional[State]:
        """Return the State declared as ``name``, or None."""
        return self._graph.get_state(name)

    def children(self, name: str) -> List[str]:
        """Names of the substates of ``name``, in declaration order."""
        return self._graph.get_children(name)

    def is_in(self, name: str) -> bool:
        """True when ``name`` is the current state or one of its ancestors."""
        return name in self._graph.path_to_root(self._current)

    def __contains__(self, name: object) -> bool:
        return name in self._graph

    def __iter__(self) -> Iterator[str]:
        return iter(self._graph)

    def __len__(self) -> int:
        return len(self._graph)

    def __repr__(self) -> str:
        return f"<StateMachine current={self._current!r} states={len(self._graph)}>"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(self, name: str) -> None:
        self._current = name

    def _activate(self, name: str) -> None:
        self._active = name

    @contextmanager
    def _operation(self):
        """
        Bracket a public runtime call. Afterwards the active context goes back to
        what it was when the call started, or to the current state once the
        outermost call ends. Handler errors reach hooks once, at the outermost
        call.
        """
        previous = self._active
        self._depth += 1
        try:
            yield
        except Exception as error:
            if self._depth == 1:
                self._hooks.execute_on_error(error)
            raise
        finally:
            self._depth -= 1
            self._active = previous if self._depth else self._current

    def _report(self, error: StateTreeError) -> None:
        if self._strict:
            raise error
        self._log.warning("%s", error)


def create(states: Any = None, init: Optional[Callable[[StateMachine], Any]] = None, **options: Any) -> StateMachine:
    """
    Create an independent state machine.

    Usage:
        sm = create('A B')
        sm = create(['A B', 'A -> !A1 A2'], init=lambda sm: sm.go('A'))
    """
    return StateMachine(states=states, init=init, **options)
