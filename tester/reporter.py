"""Diagnostic sink for request/response records.

Records are opaque to the runtime: runners emit them, a reporter decides
where they go. ``LoggingReporter`` is the default; ``ListReporter`` keeps
records in memory for inspection by tests.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Protocol

from pydantic import BaseModel, ConfigDict


class InfoType(str, Enum):
    REQUEST = "request"
    RESPONSE = "response"
    ERROR = "error"


class Info(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: InfoType
    title: str
    content: str
    language: str = "text"


class Reporter(Protocol):
    def info(self, record: Info) -> None:
        ...


class LoggingReporter:
    def __init__(self, logger_name: str = "tester.report") -> None:
        self._logger = logging.getLogger(logger_name)

    def info(self, record: Info) -> None:
        level = logging.ERROR if record.type is InfoType.ERROR else logging.INFO
        self._logger.log(level, "%s [%s]\n%s", record.title, record.type.value, record.content)


class ListReporter:
    def __init__(self) -> None:
        self.records: List[Info] = []

    def info(self, record: Info) -> None:
        self.records.append(record)


__all__ = ["InfoType", "Info", "Reporter", "LoggingReporter", "ListReporter"]
