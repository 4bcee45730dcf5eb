"""REST runner: in-process requests against the app under test."""

from __future__ import annotations

import logging
import threading
from typing import Any, List, Optional, Tuple

from tester.config import TesterConfig
from tester.http.capture import ResponseCapture, check_response
from tester.http.executor import METHODS, Body, RequestExecutor, encode_body
from tester.logic.failure_factory import failure_handler_error
from tester.models.response import CapturedResponse
from tester.reporter import Info, InfoType, LoggingReporter, Reporter
from tester.runners.base import Argument, ArgumentType, Function, ScriptError, StringEnum

logger = logging.getLogger(__name__)


class Rest:
    def __init__(
        self,
        app: Any,
        *,
        config: Optional[TesterConfig] = None,
        reporter: Optional[Reporter] = None,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        self._config = config or TesterConfig()
        self._executor = RequestExecutor(
            app,
            base_url=self._config.base_url,
            raise_server_exceptions=self._config.raise_server_exceptions,
        )
        self._reporter = reporter or LoggingReporter()
        self._cancel = cancel
        self._headers: List[Tuple[str, str]] = []
        self.capture = ResponseCapture()

    def name(self) -> str:
        return "rest"

    def functions(self) -> List[Function]:
        return [
            Function(
                name="addHeader",
                args=(
                    Argument("key", (ArgumentType.STRING,), "The header key"),
                    Argument("value", (ArgumentType.STRING,), "The header value"),
                ),
                doc="Add a header to the request",
                func=self.add_header,
            ),
            Function(
                name="send",
                args=(
                    Argument("method", (StringEnum(METHODS),), "HTTP method"),
                    Argument("path", (ArgumentType.STRING,), "The path to query"),
                    Argument("body?", (ArgumentType.STRING, ArgumentType.TABLE), "The body to send"),
                ),
                doc="Send http request",
                func=self.send,
            ),
            Function(
                name="check",
                args=(
                    Argument("status_code", (ArgumentType.NUMBER,), "Expected status code"),
                    Argument("resp", (ArgumentType.TABLE,), "Expected response"),
                ),
                doc="Check the response done by send",
                func=self.check,
            ),
        ]

    def helper_functions(self) -> List[Function]:
        return []

    @property
    def headers(self) -> List[Tuple[str, str]]:
        return list(self._headers)

    def add_header(self, key: str, value: str) -> None:
        """Attach a header to every later request; repeated keys accumulate."""
        self._headers.append((key, value))

    def send(self, method: str, path: str, body: Body = None) -> CapturedResponse:
        self.capture.invalidate()

        content, failure = encode_body(body)
        if failure is not None:
            raise ScriptError(failure)

        request_info = f"{method} {path}"
        if content:
            request_info += "\n\n" + content.decode("utf-8", errors="replace")
        self._report(Info(type=InfoType.REQUEST, title="HTTP Request", content=request_info))

        try:
            response, failure = self._executor.execute(method, path, content, self._headers, cancel=self._cancel)
        except Exception as exc:
            handler_failure = failure_handler_error(exc)
            self._report(Info(type=InfoType.ERROR, title="HTTP handler raised", content=handler_failure.message))
            raise ScriptError(handler_failure) from exc
        if failure is not None:
            self._report(Info(type=InfoType.ERROR, title="HTTP Request failed", content=failure.message))
            raise ScriptError(failure)

        self.capture.store(response)
        self._report(
            Info(
                type=InfoType.RESPONSE,
                title=f"HTTP Response ({response.status_code})",
                content=response.text,
                language="json",
            )
        )
        logger.info("rest.send method=%s path=%s status=%d", method, path, response.status_code)
        return response

    def check(self, status_code: int, expected: Any) -> None:
        failure = check_response(
            self.capture,
            int(status_code),
            expected,
            body_limit=self._config.max_diagnostic_body,
        )
        if failure is not None:
            raise ScriptError(failure)

    def _report(self, record: Info) -> None:
        if self._config.report_requests:
            self._reporter.info(record)


__all__ = ["Rest"]
