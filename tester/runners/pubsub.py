"""Pub/sub runner: faked topics that tests assert against.

Producers (the system under test, or a background delivery simulator) call
``send``/``receive``/``publish`` from any thread. Test scripts call ``check``
and ``emptyTopic``; a failed check aborts the script with ``ScriptError``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from tester.logic.candidates import check_received
from tester.logic.failure_factory import failure_publish_error
from tester.logic.topic_store import TopicStore
from tester.models.message import PubSubMessage
from tester.runners.base import Argument, ArgumentType, Function, ScriptError

logger = logging.getLogger(__name__)

PubSubHook = Callable[[str, PubSubMessage], None]


class PubSub:
    def __init__(self, do_publish: Optional[PubSubHook] = None, store: Optional[TopicStore] = None) -> None:
        self._do_publish = do_publish
        self.store = store or TopicStore()

    def name(self) -> str:
        return "pubsub"

    def functions(self) -> List[Function]:
        return [
            Function(
                name="check",
                args=(
                    Argument("topic", (ArgumentType.STRING,), "The topic to check"),
                    Argument(
                        "resp",
                        (ArgumentType.TABLE,),
                        "The message to check for. Must match both data and attributes",
                    ),
                ),
                doc="Check that a message matching the pattern was received on the topic",
                func=self.check,
            ),
            Function(
                name="emptyTopic",
                args=(Argument("topic", (ArgumentType.STRING,), "The topic to empty"),),
                doc="Remove all sent and received messages from the topic",
                func=self.empty_topic,
            ),
        ]

    def helper_functions(self) -> List[Function]:
        return [
            Function(
                name="emptyPubSubTopic",
                args=(Argument("topic", (ArgumentType.STRING,), "The topic to empty"),),
                doc="Remove all sent and received messages from the topic",
                func=self.empty_topic,
            ),
        ]

    # Script-facing operations

    def check(self, topic: str, expected: Any) -> None:
        failure = check_received(self.store, topic, expected)
        if failure is not None:
            raise ScriptError(failure)

    def empty_topic(self, topic: str) -> None:
        if not self.store.reset(topic):
            logger.debug("pubsub.empty_topic unknown topic=%s", topic)

    # Producer-side operations

    def send(self, topic: str, msg: PubSubMessage) -> None:
        self.store.append_sent(topic, msg)

    def receive(self, topic: str, msg: PubSubMessage) -> None:
        self.store.append_received(topic, msg)

    def publish(self, topic: str, msg: PubSubMessage) -> None:
        """Record ``msg`` as sent, then hand it to the publish hook."""
        self.store.append_sent(topic, msg)
        if self._do_publish is None:
            return
        try:
            self._do_publish(topic, msg)
        except Exception as exc:
            logger.error("pubsub.publish_failed topic=%s", topic, exc_info=True)
            raise ScriptError(failure_publish_error(topic, str(exc))) from exc

    def sent(self, topic: str) -> Tuple[PubSubMessage, ...]:
        return self.store.snapshot_sent(topic)

    def received(self, topic: str) -> Tuple[PubSubMessage, ...]:
        return self.store.snapshot_received(topic)


def message(data: Any = None, attributes: Optional[Dict[str, str]] = None) -> PubSubMessage:
    """Convenience constructor used by producers and tests."""
    return PubSubMessage(msg=data if data is not None else {}, attributes=attributes or {})


__all__ = ["PubSub", "PubSubHook", "message"]
