"""Pub/sub message and topic models."""

from __future__ import annotations

import copy
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PubSubMessage(BaseModel):
    """A faked broker message: a decoded body plus string attributes.

    Frozen once constructed. The body and attributes are deep-copied on the
    way in, so a producer that keeps mutating its own dict cannot reach
    messages already stored or snapshots already handed out.
    """

    model_config = ConfigDict(frozen=True)

    msg: Any = Field(default_factory=dict)
    attributes: Dict[str, str] = Field(default_factory=dict)

    @field_validator("msg", "attributes", mode="before")
    @classmethod
    def detach_from_producer(cls, v: Any) -> Any:
        return copy.deepcopy(v)

    def as_candidate(self) -> Dict[str, Any]:
        """Return the ``{data, attributes}`` tree a check pattern is matched against.

        Dumped in JSON mode so the tree has the same shape a decoder would
        produce (tuples become lists, non-string scalars are normalised).
        """
        dumped = self.model_dump(mode="json")
        return {"data": dumped["msg"], "attributes": dumped["attributes"]}


class PubSubTopic(BaseModel):
    model_config = ConfigDict(frozen=True)

    sent: Tuple[PubSubMessage, ...] = ()
    received: Tuple[PubSubMessage, ...] = ()


__all__ = ["PubSubMessage", "PubSubTopic"]
