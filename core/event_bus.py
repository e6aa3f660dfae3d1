"""Synchronous bus carrying arena generation requests and notifications."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Mapping

from core.events.topics import EventTopic

__all__ = ["EventBus", "Subscriber", "Topic"]

logger = logging.getLogger(__name__)

Topic = str | EventTopic
Subscriber = Callable[..., None]


class EventBus:
    """Dispatch arena events to their subscribers, in subscription order.

    Only the topics declared in :class:`~core.events.topics.EventTopic` are
    accepted, either as members or by their string value; anything else is
    rejected with :class:`ValueError` so that a misspelt topic cannot pass
    silently.  Payloads are delivered as keyword arguments and may be given as
    a mapping, as keywords or both (keywords win).  A subscriber that raises
    aborts the dispatch and the exception reaches the publisher, which is how
    a refused ``GenerateMap`` request surfaces to the wave driver.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[EventTopic, List[Subscriber]] = defaultdict(list)

    @staticmethod
    def _topic(topic: Topic) -> EventTopic:
        return topic if isinstance(topic, EventTopic) else EventTopic(topic)

    def subscribe(self, topic: Topic, callback: Subscriber) -> None:
        key = self._topic(topic)
        if callback not in self._subscribers[key]:
            self._subscribers[key].append(callback)

    def unsubscribe(self, topic: Topic, callback: Subscriber) -> bool:
        """Drop ``callback`` from ``topic``; return whether it was subscribed."""

        callbacks = self._subscribers.get(self._topic(topic), [])
        if callback not in callbacks:
            return False
        callbacks.remove(callback)
        return True

    def publish(
        self,
        topic: Topic,
        payload: Mapping[str, Any] | None = None,
        /,
        **kwargs: Any,
    ) -> None:
        key = self._topic(topic)
        merged_payload: Dict[str, Any] = dict(payload or {})
        merged_payload.update(kwargs)

        callbacks = list(self._subscribers.get(key, ()))
        logger.debug("Publishing %s to %s subscriber(s)", key.value, len(callbacks))
        for callback in callbacks:
            callback(**merged_payload)
