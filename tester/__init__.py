"""Runtime support for scripted integration tests.

Test scripts declare expected HTTP responses and expected messages on named
topics; this package records what actually happened (in-process requests,
faked pub/sub traffic) and verifies it against partially specified patterns.
Entry point is ``TestRun``; matching lives in ``tester.logic``.
"""

from __future__ import annotations

from tester.logging_setup import configure_logging
from tester.logic.matcher import match
from tester.models import OneOf, PubSubMessage
from tester.run import TestRun
from tester.runners import ScriptError

__all__ = ["TestRun", "ScriptError", "OneOf", "PubSubMessage", "match", "configure_logging"]
