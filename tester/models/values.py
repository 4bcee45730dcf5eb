"""Pattern node types that have no JSON counterpart."""

from __future__ import annotations

from typing import Tuple


class OneOf:
    """Enumeration constraint: the actual value must be one of the literals.

    Used inside an expected pattern where a field may legitimately take any of
    several string values, e.g. ``{"status": OneOf("queued", "running")}``.
    """

    __slots__ = ("allowed",)

    def __init__(self, *allowed: str) -> None:
        if not allowed:
            raise ValueError("OneOf requires at least one allowed literal")
        for item in allowed:
            if not isinstance(item, str):
                raise TypeError(f"OneOf literals must be strings, got {type(item).__name__}")
        self.allowed: Tuple[str, ...] = tuple(allowed)

    def __contains__(self, value: object) -> bool:
        return isinstance(value, str) and value in self.allowed

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OneOf) and other.allowed == self.allowed

    def __hash__(self) -> int:
        return hash(self.allowed)

    def __repr__(self) -> str:
        return "OneOf(" + ", ".join(repr(a) for a in self.allowed) + ")"


__all__ = ["OneOf"]
