"""Thread-safe per-topic capture of sent and received messages.

A single coarse lock serialises every read and write of the topic table.
The lock is held only long enough to copy or replace a topic entry; callers
match against the returned snapshot after it has been released. Topic
entries are immutable, so a snapshot handed out earlier never observes a
later append.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Tuple

from tester.models.message import PubSubMessage, PubSubTopic

logger = logging.getLogger(__name__)


class TopicStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._topics: Dict[str, PubSubTopic] = {}

    def append_sent(self, topic: str, message: PubSubMessage) -> None:
        with self._lock:
            current = self._topics.get(topic, PubSubTopic())
            self._topics[topic] = current.model_copy(update={"sent": current.sent + (message,)})
            count = len(current.sent) + 1
        logger.debug("topic_store.append_sent topic=%s count=%d", topic, count)

    def append_received(self, topic: str, message: PubSubMessage) -> None:
        with self._lock:
            current = self._topics.get(topic, PubSubTopic())
            self._topics[topic] = current.model_copy(update={"received": current.received + (message,)})
            count = len(current.received) + 1
        logger.debug("topic_store.append_received topic=%s count=%d", topic, count)

    def exists(self, topic: str) -> bool:
        with self._lock:
            return topic in self._topics

    def names(self) -> List[str]:
        """Return the registered topic names, sorted for stable diagnostics."""
        with self._lock:
            return sorted(self._topics)

    def snapshot_received(self, topic: str) -> Tuple[PubSubMessage, ...]:
        with self._lock:
            entry = self._topics.get(topic)
        return entry.received if entry is not None else ()

    def snapshot_sent(self, topic: str) -> Tuple[PubSubMessage, ...]:
        with self._lock:
            entry = self._topics.get(topic)
        return entry.sent if entry is not None else ()

    def reset(self, topic: str) -> bool:
        """Clear both sequences of a registered topic.

        Returns False (and registers nothing) when the topic is unknown.
        """
        with self._lock:
            if topic not in self._topics:
                return False
            self._topics[topic] = PubSubTopic()
        logger.info("topic_store.reset topic=%s", topic)
        return True


__all__ = ["TopicStore"]
