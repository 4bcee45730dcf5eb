"""Structural subset matcher for expected patterns.

Compares a partially specified pattern tree against an actual decoded value
tree. Keys absent from a pattern are wildcards; every key present must match.
All mismatches found in one pass are collected rather than stopping at the
first, so a failing check reports everything that differs.

Pure module: no shared state, safe to call from any thread.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from numbers import Number
from typing import Any, List

from tester.logic.codec import render
from tester.models.failure import MatchResult, Mismatch
from tester.models.values import OneOf

MISSING = "<missing>"


def match(expected: Any, actual: Any) -> MatchResult:
    """Match ``actual`` against ``expected`` and return every mismatch found."""
    mismatches: List[Mismatch] = []
    _match(expected, actual, "", mismatches)
    return MatchResult(mismatches=mismatches)


def _display(path: str) -> str:
    return path or "$"


def _child(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def _index(path: str, idx: int) -> str:
    return f"{_display(path)}[{idx}]"


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _fail(out: List[Mismatch], path: str, expected: str, actual: str) -> None:
    out.append(Mismatch(path=_display(path), expected=expected, actual=actual))


def _lookup(actual: Mapping, key: Any) -> tuple[bool, Any]:
    if key in actual:
        return True, actual[key]
    # Patterns built by a script host may carry non-string keys
    skey = str(key)
    if skey in actual:
        return True, actual[skey]
    return False, None


def _match(expected: Any, actual: Any, path: str, out: List[Mismatch]) -> None:
    if isinstance(expected, OneOf):
        if actual not in expected:
            _fail(out, path, "one of " + render(list(expected.allowed)), render(actual))
        return

    if isinstance(expected, Mapping):
        if not expected:
            return
        if not isinstance(actual, Mapping):
            _fail(out, path, render(_plain(expected)), render(actual))
            return
        for key, sub in expected.items():
            found, value = _lookup(actual, key)
            if not found:
                _fail(out, _child(path, key), render(_plain(sub)), MISSING)
                continue
            _match(sub, value, _child(path, key), out)
        return

    if _is_sequence(expected):
        if len(expected) == 0:
            return
        if not _is_sequence(actual):
            _fail(out, path, render(_plain(expected)), render(actual))
            return
        if len(actual) != len(expected):
            _fail(out, path, f"{len(expected)} elements", f"{len(actual)} elements")
        for idx, (sub, value) in enumerate(zip(expected, actual)):
            _match(sub, value, _index(path, idx), out)
        return

    if not _scalar_equal(expected, actual):
        _fail(out, path, render(expected), render(actual))


def _scalar_equal(expected: Any, actual: Any) -> bool:
    if expected is None:
        return actual is None
    if isinstance(expected, bool):
        return isinstance(actual, bool) and actual == expected
    if _is_number(expected):
        return _is_number(actual) and actual == expected
    if isinstance(expected, str):
        return isinstance(actual, str) and actual == expected
    return type(actual) is type(expected) and actual == expected


def _plain(pattern: Any) -> Any:
    """Strip pattern-only nodes so a pattern can be rendered as JSON."""
    if isinstance(pattern, OneOf):
        return {"oneOf": list(pattern.allowed)}
    if isinstance(pattern, Mapping):
        return {str(k): _plain(v) for k, v in pattern.items()}
    if _is_sequence(pattern):
        return [_plain(v) for v in pattern]
    return pattern


__all__ = ["match", "MISSING"]
