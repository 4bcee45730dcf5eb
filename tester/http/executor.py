"""Request executor that drives an ASGI app in-process.

Requests go through ``httpx.ASGITransport``: no socket is opened and the
call blocks the script thread until the handler finishes. The call runs in
an anyio task group next to a watcher on the run's cancel event; when the
event fires mid-request the handler task is cancelled and no response is
captured.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, List, Optional, Tuple, Union

import anyio
import httpx

from tester.logic.codec import CodecError, encode_value
from tester.logic.failure_factory import failure_request_construction, failure_serialization_error
from tester.models.failure import CheckFailure
from tester.models.response import CapturedResponse

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD")

CANCEL_POLL_SECONDS = 0.01

Body = Union[None, str, bytes, dict, list]


def encode_body(body: Body) -> Tuple[Optional[bytes], Optional[CheckFailure]]:
    """Return the request payload bytes for a raw or structured body."""
    if body is None:
        return None, None
    if isinstance(body, bytes):
        return body, None
    if isinstance(body, str):
        return body.encode("utf-8"), None
    try:
        return encode_value(body), None
    except CodecError as exc:
        return None, failure_serialization_error(str(exc))


class RequestExecutor:
    def __init__(
        self,
        app: Any,
        *,
        base_url: str = "http://testserver",
        raise_server_exceptions: bool = True,
    ) -> None:
        self._app = app
        self._base_url = base_url
        self._raise_server_exceptions = raise_server_exceptions

    def execute(
        self,
        method: str,
        path: str,
        content: Optional[bytes],
        headers: List[Tuple[str, str]],
        *,
        cancel: Optional[threading.Event] = None,
    ) -> Tuple[Optional[CapturedResponse], Optional[CheckFailure]]:
        """Run one request to completion or cancellation.

        An exception raised by the app is re-raised unchanged when server
        exceptions are configured to propagate.
        """
        method_up = str(method or "").upper()
        if method_up not in METHODS:
            return None, failure_request_construction(f"unsupported method {method!r}")
        if cancel is not None and cancel.is_set():
            return None, failure_request_construction("request cancelled")
        return anyio.run(self._execute, method_up, path, content, headers, cancel)

    async def _execute(
        self,
        method: str,
        path: str,
        content: Optional[bytes],
        headers: List[Tuple[str, str]],
        cancel: Optional[threading.Event],
    ) -> Tuple[Optional[CapturedResponse], Optional[CheckFailure]]:
        transport = httpx.ASGITransport(app=self._app, raise_app_exceptions=self._raise_server_exceptions)
        async with httpx.AsyncClient(transport=transport, base_url=self._base_url, follow_redirects=True) as client:
            try:
                request = client.build_request(method, path, content=content, headers=httpx.Headers(headers))
            except (httpx.InvalidURL, ValueError, TypeError) as exc:
                return None, failure_request_construction(str(exc))

            logger.debug("rest.dispatch method=%s url=%s", method, request.url)
            responses: List[httpx.Response] = []
            errors: List[Exception] = []

            async with anyio.create_task_group() as tg:

                async def send_request() -> None:
                    try:
                        responses.append(await client.send(request))
                    except Exception as exc:
                        errors.append(exc)
                    tg.cancel_scope.cancel()

                async def watch_cancel(event: threading.Event) -> None:
                    while not event.is_set():
                        await anyio.sleep(CANCEL_POLL_SECONDS)
                    logger.info("rest.cancelled method=%s url=%s", method, request.url)
                    tg.cancel_scope.cancel()

                tg.start_soon(send_request)
                if cancel is not None:
                    tg.start_soon(watch_cancel, cancel)

        if errors:
            raise errors[0]
        if not responses:
            return None, failure_request_construction("request cancelled")

        response = responses[0]
        captured = CapturedResponse(
            status_code=response.status_code,
            body=response.content,
            headers=list(response.headers.multi_items()),
        )
        return captured, None


__all__ = ["METHODS", "Body", "RequestExecutor", "encode_body"]
