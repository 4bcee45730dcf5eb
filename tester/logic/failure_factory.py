"""Centralised construction of check failures.

One helper per failure kind keeps message wording in a single place and
logs the kind for observability. Messages follow the wording test authors
see when a script aborts.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from tester.models.failure import CheckFailure, FailureKind, MatchResult

logger = logging.getLogger(__name__)


def _build(kind: FailureKind, message: str, **details: object) -> CheckFailure:
    failure = CheckFailure(kind=kind, message=message, details=details)
    logger.info("check_failure kind=%s", kind.value)
    return failure


def _truncate(text: str, limit: Optional[int]) -> str:
    if limit is None or len(text) <= limit:
        return text
    return text[:limit] + f"... ({len(text) - limit} more characters)"


def failure_unregistered_topic(topic: str, known: Iterable[str]) -> CheckFailure:
    names: List[str] = list(known)
    return _build(
        FailureKind.UNREGISTERED_TOPIC,
        f"topic {topic!r} not registered, has: {names}",
        topic=topic,
        known_topics=names,
    )


def failure_no_messages_received(topic: str) -> CheckFailure:
    return _build(
        FailureKind.NO_MESSAGES_RECEIVED,
        f"no messages received on topic {topic!r}",
        topic=topic,
    )


def failure_no_matching_message(topic: str, attempts: List[MatchResult]) -> CheckFailure:
    descriptions = [result.describe() for result in attempts]
    return _build(
        FailureKind.NO_MATCHING_MESSAGE,
        "\n".join(descriptions) or f"no matching messages received on topic {topic!r}",
        topic=topic,
        candidates=len(attempts),
        mismatches=descriptions,
    )


def failure_send_not_called() -> CheckFailure:
    return _build(FailureKind.SEND_NOT_CALLED, "send not called")


def failure_status_mismatch(expected: int, actual: int, body: str, limit: Optional[int] = None) -> CheckFailure:
    return _build(
        FailureKind.STATUS_MISMATCH,
        f"expected response code {expected}, got {actual}\n{_truncate(body, limit)}",
        expected=expected,
        actual=actual,
    )


def failure_decode_error(reason: str) -> CheckFailure:
    return _build(FailureKind.DECODE_ERROR, reason)


def failure_no_match(result: MatchResult) -> CheckFailure:
    return _build(
        FailureKind.NO_MATCH,
        result.describe(),
        mismatches=[m.model_dump() for m in result.mismatches],
    )


def failure_serialization_error(reason: str) -> CheckFailure:
    return _build(FailureKind.SERIALIZATION_ERROR, reason)


def failure_request_construction(reason: str) -> CheckFailure:
    return _build(FailureKind.REQUEST_CONSTRUCTION_ERROR, f"unable to create request: {reason}")


def failure_publish_error(topic: str, reason: str) -> CheckFailure:
    return _build(FailureKind.PUBLISH_ERROR, f"publish to topic {topic!r} failed: {reason}", topic=topic)


def failure_handler_error(exc: BaseException) -> CheckFailure:
    return _build(
        FailureKind.HANDLER_ERROR,
        f"handler raised {type(exc).__name__}: {exc}",
        exception=type(exc).__name__,
    )


def failure_usage(message: str) -> CheckFailure:
    return _build(FailureKind.USAGE_ERROR, message)


__all__ = [
    "failure_unregistered_topic",
    "failure_no_messages_received",
    "failure_no_matching_message",
    "failure_send_not_called",
    "failure_status_mismatch",
    "failure_decode_error",
    "failure_no_match",
    "failure_serialization_error",
    "failure_request_construction",
    "failure_publish_error",
    "failure_handler_error",
    "failure_usage",
]
