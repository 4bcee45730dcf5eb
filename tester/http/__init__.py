"""In-process HTTP execution and response capture."""

from __future__ import annotations

from tester.http.capture import ResponseCapture, check_response
from tester.http.executor import METHODS, RequestExecutor

__all__ = ["METHODS", "RequestExecutor", "ResponseCapture", "check_response"]
