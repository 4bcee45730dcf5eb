"""Canonical JSON encoding and decoding for value trees."""

from __future__ import annotations

import json
from typing import Any


class CodecError(ValueError):
    """Raised when a value tree cannot be encoded or a payload decoded."""


def encode_value(value: Any) -> bytes:
    """Encode a value tree to canonical JSON bytes.

    Keys are sorted and separators compact so equal trees always encode to
    equal bytes. NaN and infinities are rejected rather than emitted as
    non-standard tokens.
    """
    try:
        text = json.dumps(value, sort_keys=True, separators=(",", ":"), allow_nan=False, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise CodecError(f"unable to marshal table: {exc}") from exc
    return text.encode("utf-8")


def decode_value(raw: bytes) -> Any:
    if not raw:
        raise CodecError("unable to unmarshal response: empty body")
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CodecError(f"unable to unmarshal response: {exc}") from exc


def render(value: Any) -> str:
    """Render a value for a human-readable diagnostic line."""
    try:
        return json.dumps(value, ensure_ascii=False, sort_keys=True, separators=(",", ":"), default=repr)
    except (TypeError, ValueError):
        return repr(value)


__all__ = ["CodecError", "encode_value", "decode_value", "render"]
