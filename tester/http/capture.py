"""Single-slot capture of the most recent HTTP response."""

from __future__ import annotations

import logging
from typing import Any, Optional

from tester.logic.codec import CodecError
from tester.logic.failure_factory import (
    failure_decode_error,
    failure_no_match,
    failure_send_not_called,
    failure_status_mismatch,
)
from tester.logic.matcher import match
from tester.models.failure import CheckFailure
from tester.models.response import CapturedResponse

logger = logging.getLogger(__name__)


class ResponseCapture:
    """Holds at most one response; empty until the first send.

    The slot is replaced wholesale on every store and cleared by
    ``invalidate`` before each new request, so a stale response can never
    satisfy a later check.
    """

    def __init__(self) -> None:
        self._current: Optional[CapturedResponse] = None

    @property
    def current(self) -> Optional[CapturedResponse]:
        return self._current

    def invalidate(self) -> None:
        self._current = None

    def store(self, response: CapturedResponse) -> None:
        self._current = response


def check_response(
    capture: ResponseCapture,
    expected_status: int,
    expected: Any,
    *,
    body_limit: Optional[int] = None,
) -> Optional[CheckFailure]:
    """Validate the captured response once against status and pattern."""
    response = capture.current
    if response is None:
        return failure_send_not_called()

    if response.status_code != expected_status:
        return failure_status_mismatch(expected_status, response.status_code, response.text, body_limit)

    try:
        actual = response.decode()
    except CodecError as exc:
        return failure_decode_error(str(exc))

    result = match(expected, actual)
    if not result.ok:
        return failure_no_match(result)
    logger.debug("rest.check_matched status=%d", expected_status)
    return None


__all__ = ["ResponseCapture", "check_response"]
