# statetree/plugins/router.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Keeps a route table and a state machine in sync.

Routes whose name has the form ``state:<StateName>`` are bound to that state.
When the host router matches such a route it calls dispatch(), and the machine
goes to the bound state. When the machine settles on a bound state, the
``stay`` notification on the bus makes the adapter call ``navigate`` with the
route. Any router can be plugged in through ``navigate``.

Usage:

    bus = PubSub()
    sm = StateMachine('A B', bus=bus)
    router = StateRouter(sm, bus, navigate=history.push, routes={
        'some/route': 'state:A',
        'some/other/route': 'state:B',
    })
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Dict, Mapping, Optional

from statetree.core.states import Lifecycle
from statetree.interfaces.protocols import Publisher
from statetree.interfaces.types import Navigate

if TYPE_CHECKING:
    from statetree.core.state_machine import StateMachine

logger = logging.getLogger(__name__)

_STATE_ROUTE = re.compile(r"^state:(.+)")


class StateRouter:
    """Route table bound to a StateMachine through its event bus."""

    def __init__(
        self,
        machine: "StateMachine",
        bus: Publisher,
        navigate: Navigate,
        routes: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.machine = machine
        self.navigate = navigate
        self._routes: Dict[str, str] = {}
        self._state_routes: Dict[str, str] = {}
        bus.subscribe(Lifecycle.STAY.value, self._on_stay)
        for path, name in (routes or {}).items():
            self.route(path, name)

    def route(self, path: str, name: str) -> "StateRouter":
        """Register ``path`` under route ``name``; ``state:X`` names bind to state X."""
        self._routes[path] = name
        match = _STATE_ROUTE.match(name)
        if match:
            self._state_routes[match.group(1)] = path
        return self

    def route_for(self, state: str) -> Optional[str]:
        """Path bound to ``state``, if any."""
        return self._state_routes.get(state)

    def dispatch(self, path: str) -> bool:
        """
        Handle a matched route. Returns True when the route is bound to a state
        and the machine was asked to go there.
        """
        name = self._routes.get(path)
        match = _STATE_ROUTE.match(name) if name else None
        if not match:
            logger.debug("route %s is not bound to a state", path)
            return False
        self.machine.go(match.group(1))
        return True

    def _on_stay(self, state: str) -> None:
        path = self._state_routes.get(state)
        if path is not None:
            self.navigate(path)
