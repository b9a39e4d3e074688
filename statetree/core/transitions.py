# statetree/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from statetree.core.actions import is_stop
from statetree.core.hooks import HookManager
from statetree.core.states import Lifecycle

if TYPE_CHECKING:
    from statetree.interfaces.protocols import Publisher
    from statetree.runtime.graph import StateGraph

logger = logging.getLogger(__name__)


class HaltPolicy(Enum):
    """
    What a lifecycle hook returning ``False`` (or ``Signal.STOP``) does.

    SETTLE: the transition stops where the hook ran. A halting ``exit`` keeps
        its state current and skips the entry phase; a halting ``enter`` makes
        its state current and skips the deeper entries; neither runs ``stay``
        or the default-substate cascade. A halting ``stay`` skips the cascade.
    IGNORE: return values of lifecycle hooks are ignored.
    """

    SETTLE = "settle"
    IGNORE = "ignore"


@dataclass
class TransitionRecord:
    """
    What one go() call did, default-substate cascade included.

    ``settled`` is the state the machine ended at. ``halted`` holds the
    (state, lifecycle name) of the hook that stopped the transition, if any.
    ``superseded`` is set when a hook started another transition that moved
    the machine, ending this one.
    """

    source: str
    target: str
    settled: str
    exited: List[str] = field(default_factory=list)
    entered: List[str] = field(default_factory=list)
    stayed: List[str] = field(default_factory=list)
    halted: Optional[Tuple[str, str]] = None
    superseded: bool = False

    @property
    def completed(self) -> bool:
        return self.halted is None or self.halted[1] == Lifecycle.STAY.value


class TransitionEngine:
    """
    Moves a machine between two states of a StateGraph: exit up to the lowest
    common ancestor, enter down to the target, stay, then cascade through
    default substates.

    The engine holds no current-state pointer. It receives the source state,
    reports every change through ``commit`` and returns the settled state in a
    TransitionRecord.
    """

    def __init__(
        self,
        graph: "StateGraph",
        hooks: Optional[HookManager] = None,
        bus: Optional["Publisher"] = None,
        halt_policy: HaltPolicy = HaltPolicy.SETTLE,
        log: Optional[logging.Logger] = None,
    ) -> None:
        """
        :param graph: Tree store holding states and their contexts.
        :param hooks: Observers notified after each lifecycle step.
        :param bus: Event bus receiving ``exit``/``enter``/``stay`` notifications.
        :param halt_policy: How halting hook results are treated.
        :param log: Logger for debug output; defaults to this module's logger.
        """
        self._graph = graph
        self._hooks = hooks or HookManager()
        self._bus = bus
        self._halt_policy = halt_policy
        self._log = log or logger

    @property
    def halt_policy(self) -> HaltPolicy:
        return self._halt_policy

    def plan(self, source: str, target: str) -> Tuple[List[str], List[str]]:
        """
        Return the exit path (source upward) and entry path (downward to
        target) of a transition, both exclusive of the common ancestor.
        """
        exits, entries, _ = self._graph.find_lca(source, target)
        return exits, entries

    def run(
        self,
        receiver: Any,
        source: str,
        target: str,
        commit: Callable[[str], None],
        activate: Optional[Callable[[str], None]] = None,
        current_state: Optional[Callable[[], str]] = None,
    ) -> TransitionRecord:
        """
        Execute the transition from ``source`` to ``target``.

        A hook may start another transition on the receiver. When
        ``current_state`` then reports a state other than the one this run last
        committed, this run stops and leaves the nested transition's result in
        place.

        :param receiver: First argument of every lifecycle hook.
        :param source: Current state name.
        :param target: Declared target state name, different from ``source``.
        :param commit: Called with each new current state name.
        :param activate: Called with a state name before its hook runs.
        :param current_state: Returns the receiver's committed current state.
        :return: The TransitionRecord of the whole cascade.
        """
        record = TransitionRecord(source=source, target=target, settled=source)
        current = source

        while target is not None and target != current:
            exits, entries = self.plan(current, target)
            self._log.debug("go %s -> %s: exit %s, enter %s", current, target, exits, entries)

            for name in exits:
                halted = self._step(receiver, name, Lifecycle.EXIT, activate)
                if self._superseded(record, current, current_state):
                    return record
                if halted:
                    return self._settle(record, name, Lifecycle.EXIT, commit)
                record.exited.append(name)

            for name in entries:
                halted = self._step(receiver, name, Lifecycle.ENTER, activate)
                record.entered.append(name)
                if self._superseded(record, current, current_state):
                    return record
                if halted:
                    return self._settle(record, name, Lifecycle.ENTER, commit)

            current = target
            record.settled = current
            commit(current)

            halted = self._step(receiver, current, Lifecycle.STAY, activate)
            record.stayed.append(current)
            if self._superseded(record, current, current_state):
                break
            if halted:
                record.halted = (current, Lifecycle.STAY.value)
                break

            target = self._graph.get_state(current).default_substate

        return record

    def _step(
        self,
        receiver: Any,
        name: str,
        lifecycle: Lifecycle,
        activate: Optional[Callable[[str], None]],
    ) -> bool:
        """Run one lifecycle hook and its notifications. Returns True on halt."""
        state = self._graph.get_state(name)
        if activate is not None:
            activate(name)

        halted = False
        handler = state.handler(lifecycle)
        if handler is not None:
            result = handler(receiver)
            halted = self._halt_policy is HaltPolicy.SETTLE and is_stop(result)

        if halted and lifecycle is Lifecycle.EXIT:
            # The state refused to be left; nothing to notify.
            return True

        getattr(self._hooks, f"execute_on_{lifecycle.value}")(name)
        if self._bus is not None:
            self._bus.publish(lifecycle.value, name)
        return halted

    def _settle(
        self, record: TransitionRecord, name: str, lifecycle: Lifecycle, commit: Callable[[str], None]
    ) -> TransitionRecord:
        self._log.debug("go %s -> %s halted by %s of %s", record.source, record.target, lifecycle.value, name)
        record.settled = name
        record.halted = (name, lifecycle.value)
        commit(name)
        return record

    def _superseded(
        self, record: TransitionRecord, expected: str, current_state: Optional[Callable[[], str]]
    ) -> bool:
        if current_state is None:
            return False
        actual = current_state()
        if actual == expected:
            return False
        self._log.debug("go %s -> %s superseded by a nested transition to %s", record.source, record.target, actual)
        record.settled = actual
        record.superseded = True
        return True
