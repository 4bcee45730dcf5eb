"""Script-facing runners: ``pubsub`` and ``rest``."""

from __future__ import annotations

from tester.runners.base import (
    Argument,
    ArgumentType,
    Function,
    Runner,
    ScriptError,
    StringEnum,
    check_arguments,
)
from tester.runners.pubsub import PubSub, PubSubHook, message
from tester.runners.rest import Rest

__all__ = [
    "Argument",
    "ArgumentType",
    "Function",
    "Runner",
    "ScriptError",
    "StringEnum",
    "check_arguments",
    "PubSub",
    "PubSubHook",
    "message",
    "Rest",
]
