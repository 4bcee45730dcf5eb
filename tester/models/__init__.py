"""Pydantic models and value-tree node types for the tester runtime."""

from __future__ import annotations

from tester.models.failure import CheckFailure, FailureKind, MatchResult, Mismatch
from tester.models.message import PubSubMessage, PubSubTopic
from tester.models.response import CapturedResponse
from tester.models.values import OneOf

__all__ = [
    "CapturedResponse",
    "CheckFailure",
    "FailureKind",
    "MatchResult",
    "Mismatch",
    "OneOf",
    "PubSubMessage",
    "PubSubTopic",
]
