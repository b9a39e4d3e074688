# statetree/runtime/pubsub.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from statetree.core.parser import split_names
from statetree.interfaces.types import Subscriber
from statetree.runtime.timers import ScheduledTask

logger = logging.getLogger(__name__)

NAMESPACE_SEPARATOR = ":"


def namespaces(event: str) -> List[str]:
    """
    Expand a namespaced event into itself and its prefixes, most general first:
    ``"a:b:c"`` -> ``["a", "a:b", "a:b:c"]``.
    """
    parts = event.split(NAMESPACE_SEPARATOR)
    return [NAMESPACE_SEPARATOR.join(parts[: i + 1]) for i in range(len(parts))]


@dataclass
class _Subscription:
    handler: Subscriber
    receiver: Any = None
    once: bool = False

    def __call__(self, *args: Any) -> Any:
        if self.receiver is not None:
            return self.handler(self.receiver, *args)
        return self.handler(*args)


class PubSub:
    """
    Synchronous publish/subscribe bus with colon-namespaced events.

    Publishing ``"save:draft"`` notifies subscribers of ``"save"`` and then of
    ``"save:draft"``. A one-shot subscriber is removed after its first call that
    does not return False.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[_Subscription]] = {}

    def publish(self, event: str, *args: Any) -> "PubSub":
        """
        Publish ``event``, passing ``args`` to every subscriber.

        :param event: Event name, optionally namespaced with ``:``.
        """
        for name in namespaces(event):
            subscriptions = self._subscribers.get(name)
            if not subscriptions:
                continue
            logger.debug("publish %s to %d subscriber(s) of %s", event, len(subscriptions), name)
            for subscription in list(subscriptions):
                result = subscription(*args)
                if subscription.once and result is not False:
                    self.unsubscribe(name, subscription.handler)
        return self

    pub = publish

    def subscribe(self, events: str, handler: Subscriber, receiver: Any = None, once: bool = False) -> "PubSub":
        """
        Subscribe ``handler`` to one or more space-separated events.

        :param events: Event name(s).
        :param handler: Callable receiving the published arguments.
        :param receiver: Optional object passed as the handler's first argument.
        :param once: Unsubscribe after the first call that does not return False.
        """
        for event in split_names(events):
            self._subscribers.setdefault(event, []).append(_Subscription(handler, receiver, once))
        return self

    sub = subscribe

    def unsubscribe(self, events: str, handler: Subscriber) -> "PubSub":
        """Remove every subscription of ``handler`` to the given event(s)."""
        for event in split_names(events):
            subscriptions = self._subscribers.get(event)
            if subscriptions is None:
                continue
            self._subscribers[event] = [s for s in subscriptions if s.handler != handler]
        return self

    unsub = unsubscribe

    def once(self, events: str, handler: Subscriber, receiver: Any = None) -> "PubSub":
        """Subscribe for a single successful call. See subscribe()."""
        return self.subscribe(events, handler, receiver, once=True)

    def schedule(self, event: str, *args: Any) -> ScheduledTask:
        """
        Return a task that publishes ``event`` with ``args`` when it runs.
        Nothing is scheduled until delay(), repeat() or now() is called on it.
        """
        return ScheduledTask(self.publish, (event,) + args)

    def subscribers(self, event: str) -> List[Subscriber]:
        """Handlers subscribed to exactly ``event``."""
        return [s.handler for s in self._subscribers.get(event, [])]
