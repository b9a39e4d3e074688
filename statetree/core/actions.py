# statetree/core/actions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from statetree.runtime.graph import StateGraph

logger = logging.getLogger(__name__)


class Signal(Enum):
    """
    Explicit handler results. Returning ``Signal.STOP`` is equivalent to
    returning ``False``; every other value, ``None`` included, means continue.
    """

    CONTINUE = "continue"
    STOP = "stop"


def is_stop(value: Any) -> bool:
    """True for the two halting results: exactly ``False`` or ``Signal.STOP``."""
    return value is False or value is Signal.STOP


@dataclass
class DispatchResult:
    """Outcome of one act() call."""

    action: str
    origin: str
    handled_by: List[str] = field(default_factory=list)
    stopped_at: Optional[str] = None

    @property
    def handled(self) -> bool:
        return bool(self.handled_by)

    @property
    def stopped(self) -> bool:
        return self.stopped_at is not None


class ActionDispatcher:
    """
    Resolves an action by walking from a state up to the root, calling the
    handler of every state whose context defines the action, until one of them
    returns a halting result.
    """

    def __init__(self, graph: "StateGraph", log: Optional[logging.Logger] = None) -> None:
        """
        :param graph: Tree store the walk reads parents from.
        :param log: Logger for debug output; defaults to this module's logger.
        """
        self._graph = graph
        self._log = log or logger

    def dispatch(
        self,
        receiver: Any,
        state: str,
        action: str,
        args: Tuple[Any, ...] = (),
        kwargs: Optional[Dict[str, Any]] = None,
        activate: Optional[Callable[[str], None]] = None,
    ) -> DispatchResult:
        """
        Bubble ``action`` from ``state`` to the root.

        :param receiver: Passed as the first argument of every handler.
        :param state: Name of the state the walk starts at.
        :param action: Context key to look up.
        :param args: Positional arguments forwarded to handlers.
        :param kwargs: Keyword arguments forwarded to handlers.
        :param activate: Called with each visited state name before its handler
            runs, so the receiver can track its active context.
        :return: A DispatchResult listing the states that handled the action.
        """
        kwargs = kwargs or {}
        result = DispatchResult(action=action, origin=state)

        for name in self._graph.path_to_root(state):
            node = self._graph.get_state(name)
            if activate is not None:
                activate(name)
            handler = node.handler(action)
            if handler is None:
                continue

            self._log.debug("act %s: handled in %s", action, name)
            result.handled_by.append(name)
            if is_stop(handler(receiver, *args, **kwargs)):
                result.stopped_at = name
                break

        return result
