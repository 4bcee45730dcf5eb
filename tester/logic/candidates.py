"""Retry-across-candidates check for pub/sub topics.

A topic is a fan-in buffer: the check passes when any received message
matches the pattern, tried in arrival order and stopping at the first hit.
Only messages already present are inspected; the check never waits.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from tester.logic.failure_factory import (
    failure_no_matching_message,
    failure_no_messages_received,
    failure_unregistered_topic,
)
from tester.logic.matcher import match
from tester.logic.topic_store import TopicStore
from tester.models.failure import CheckFailure, MatchResult

logger = logging.getLogger(__name__)


def check_received(store: TopicStore, topic: str, expected: Any) -> Optional[CheckFailure]:
    """Return None when a received message on ``topic`` matches ``expected``."""
    if not store.exists(topic):
        return failure_unregistered_topic(topic, store.names())

    candidates = store.snapshot_received(topic)
    if not candidates:
        return failure_no_messages_received(topic)

    attempts: List[MatchResult] = []
    for position, message in enumerate(candidates):
        result = match(expected, message.as_candidate())
        if result.ok:
            logger.info("pubsub.check_matched topic=%s candidate=%d of=%d", topic, position, len(candidates))
            return None
        attempts.append(result)

    return failure_no_matching_message(topic, attempts)


__all__ = ["check_received"]
