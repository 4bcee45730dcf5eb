"""Per-test-file run scope.

A ``TestRun`` owns one pub/sub topic table and one REST session. Nothing is
shared between runs; state is discarded when the run closes. Script hosts
call functions by their bound name, e.g. ``run.call("rest.send", "GET", "/")``.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

from tester.config import TesterConfig, load_config
from tester.logic.failure_factory import failure_usage
from tester.logging_setup import configure_logging
from tester.reporter import LoggingReporter, Reporter
from tester.runners.base import Function, Runner, ScriptError, check_arguments
from tester.runners.pubsub import PubSub, PubSubHook
from tester.runners.rest import Rest

logger = logging.getLogger(__name__)


class TestRun:
    def __init__(
        self,
        app: Any,
        *,
        name: str = "",
        config: Optional[TesterConfig] = None,
        reporter: Optional[Reporter] = None,
        do_publish: Optional[PubSubHook] = None,
    ) -> None:
        self.name = name
        self.config = config or load_config()
        configure_logging(self.config.log_level)
        self.cancel_event = threading.Event()
        self.pubsub = PubSub(do_publish)
        self.rest = Rest(
            app,
            config=self.config,
            reporter=reporter or LoggingReporter(),
            cancel=self.cancel_event,
        )
        self._bindings = self._bind([self.pubsub, self.rest])
        logger.info("test_run.start name=%s functions=%d", name, len(self._bindings))

    @staticmethod
    def _bind(runners: List[Runner]) -> Dict[str, Function]:
        bindings: Dict[str, Function] = {}
        for runner in runners:
            for fn in runner.functions():
                bindings[f"{runner.name()}.{fn.name}"] = fn
            for fn in runner.helper_functions():
                bindings[fn.name] = fn
        return bindings

    def function_names(self) -> List[str]:
        return sorted(self._bindings)

    def describe(self, name: str) -> Function:
        try:
            return self._bindings[name]
        except KeyError:
            raise ScriptError(failure_usage(f"unknown function {name!r}, has: {self.function_names()}")) from None

    def call(self, name: str, *args: Any) -> Any:
        """Invoke a bound function after checking its arguments."""
        fn = self.describe(name)
        check_arguments(name, fn, args)
        return fn.func(*args)

    def cancel(self) -> None:
        """Abort the request in flight and stop later ones from being sent."""
        self.cancel_event.set()

    def close(self) -> None:
        self.cancel_event.set()
        logger.info("test_run.end name=%s", self.name)

    def __enter__(self) -> "TestRun":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["TestRun"]
