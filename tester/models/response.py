"""Captured HTTP response model."""

from __future__ import annotations

from typing import Any, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from tester.logic.codec import decode_value


class CapturedResponse(BaseModel):
    """Status code and raw body of the most recent simulated request.

    The body is kept verbatim; decoding is deferred until a check needs it.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int
    body: bytes = b""
    headers: List[Tuple[str, str]] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def decode(self) -> Any:
        """Parse the body as JSON; raises ``CodecError`` on malformed payloads."""
        return decode_value(self.body)


__all__ = ["CapturedResponse"]
