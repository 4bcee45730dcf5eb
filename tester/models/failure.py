"""Failure and match-result models.

Core operations never raise for an ordinary mismatch; they return these
values and leave it to the runner boundary to abort the script.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class FailureKind(str, Enum):
    UNREGISTERED_TOPIC = "UnregisteredTopic"
    NO_MESSAGES_RECEIVED = "NoMessagesReceived"
    NO_MATCHING_MESSAGE = "NoMatchingMessage"
    SEND_NOT_CALLED = "SendNotCalled"
    STATUS_MISMATCH = "StatusMismatch"
    DECODE_ERROR = "DecodeError"
    SERIALIZATION_ERROR = "SerializationError"
    REQUEST_CONSTRUCTION_ERROR = "RequestConstructionError"
    NO_MATCH = "NoMatch"
    PUBLISH_ERROR = "PublishError"
    USAGE_ERROR = "UsageError"
    HANDLER_ERROR = "HandlerError"


class Mismatch(BaseModel):
    """One discrepancy between pattern and actual value."""

    model_config = ConfigDict(frozen=True)

    path: str
    expected: str
    actual: str

    def describe(self) -> str:
        return f"{self.path}: expected {self.expected}, got {self.actual}"


class MatchResult(BaseModel):
    """Outcome of a single pattern comparison.

    Success is the absence of mismatches. Mismatches keep the order in which
    the matcher walked the pattern tree.
    """

    model_config = ConfigDict(frozen=True)

    mismatches: List[Mismatch] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.mismatches

    def __bool__(self) -> bool:
        return self.ok

    def describe(self) -> str:
        return "\n".join(m.describe() for m in self.mismatches)


class CheckFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


__all__ = [
    "FailureKind",
    "Mismatch",
    "MatchResult",
    "CheckFailure",
]
