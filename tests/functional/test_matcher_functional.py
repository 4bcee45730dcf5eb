"""Functional tests for the structural pattern matcher.

Covers subset semantics for maps, positional comparison for sequences,
scalar kind/value equality, the one-of constraint, and mismatch
accumulation across siblings.
"""

from __future__ import annotations

from typing import Any

import pytest

from tester.logic.matcher import MISSING, match
from tester.models.values import OneOf


# -----------------------------
# Vacuous and subset matches
# -----------------------------

@pytest.mark.parametrize("pattern", [{}, []])
@pytest.mark.parametrize(
    "actual",
    [{}, {"a": 1}, [], [1, 2, 3], "text", 7, 1.5, True, None],
)
def test_empty_pattern_matches_any_shape(pattern: Any, actual: Any) -> None:
    assert match(pattern, actual).ok


def test_sub_mapping_ignores_extra_keys() -> None:
    actual = {"id": 2, "name": "Bo", "roles": ["admin", "dev"], "meta": {"v": 1}}
    result = match({"id": 2, "roles": ["admin", "dev"]}, actual)
    assert result.ok
    assert bool(result) is True
    assert result.describe() == ""


def test_nested_subset_match() -> None:
    actual = {"data": {"order": {"id": 7, "lines": [{"sku": "x", "qty": 1}]}}, "attributes": {"k": "v"}}
    assert match({"data": {"order": {"lines": [{"sku": "x"}]}}}, actual).ok


# -----------------------------
# Mismatch reporting
# -----------------------------

def test_differing_key_reports_path_expected_and_actual() -> None:
    result = match({"id": 2}, {"id": 1, "name": "Ann"})
    assert not result.ok
    assert len(result.mismatches) == 1
    mismatch = result.mismatches[0]
    assert mismatch.path == "id"
    assert mismatch.expected == "2"
    assert mismatch.actual == "1"
    assert result.describe() == "id: expected 2, got 1"


def test_missing_key_is_a_mismatch() -> None:
    result = match({"email": "a@b.c"}, {"id": 1})
    assert [m.path for m in result.mismatches] == ["email"]
    assert result.mismatches[0].actual == MISSING


def test_nested_paths_use_dots_and_indices() -> None:
    actual = {"data": {"items": [{"id": 1}, {"id": 5}]}}
    result = match({"data": {"items": [{"id": 1}, {"id": 2}]}}, actual)
    assert [m.path for m in result.mismatches] == ["data.items[1].id"]


def test_root_scalar_mismatch_uses_root_path() -> None:
    result = match("a", "b")
    assert result.describe() == '$: expected "a", got "b"'


def test_all_sibling_mismatches_are_collected() -> None:
    result = match(
        {"id": 2, "name": "Bo", "active": True, "tags": ["x"]},
        {"id": 1, "name": "Ann", "active": True, "tags": ["y"]},
    )
    assert [m.path for m in result.mismatches] == ["id", "name", "tags[0]"]
    assert result.describe().count("\n") == 2


def test_shape_mismatch_map_expected_scalar_actual() -> None:
    result = match({"user": {"id": 1}}, {"user": "ann"})
    assert [m.path for m in result.mismatches] == ["user"]
    assert result.mismatches[0].actual == '"ann"'


def test_shape_mismatch_sequence_expected_map_actual() -> None:
    result = match({"tags": ["a"]}, {"tags": {"0": "a"}})
    assert [m.path for m in result.mismatches] == ["tags"]


# -----------------------------
# Sequences
# -----------------------------

def test_sequence_requires_same_length() -> None:
    result = match([1, 2], [1, 2, 3])
    assert not result.ok
    assert result.mismatches[0].expected == "2 elements"
    assert result.mismatches[0].actual == "3 elements"


def test_sequence_length_and_element_mismatches_both_reported() -> None:
    result = match({"xs": [1, 9]}, {"xs": [1, 2, 3]})
    assert [m.path for m in result.mismatches] == ["xs", "xs[1]"]


def test_root_sequence_indices() -> None:
    result = match([{"sku": "a-1"}, {"sku": "z"}], [{"sku": "a-1"}, {"sku": "b-2"}])
    assert [m.path for m in result.mismatches] == ["$[1].sku"]


def test_tuple_pattern_matches_list_actual() -> None:
    assert match(("a", "b"), ["a", "b"]).ok


# -----------------------------
# Scalars
# -----------------------------

def test_numbers_compare_by_value() -> None:
    assert match({"n": 1}, {"n": 1.0}).ok
    assert match({"n": 2.5}, {"n": 2.5}).ok
    assert not match({"n": 1}, {"n": "1"}).ok


def test_booleans_are_not_numbers() -> None:
    assert not match({"flag": True}, {"flag": 1}).ok
    assert not match({"n": 0}, {"n": False}).ok
    assert match({"flag": False}, {"flag": False}).ok


def test_null_matches_only_null() -> None:
    assert match({"x": None}, {"x": None}).ok
    assert not match({"x": None}, {"x": 0}).ok
    assert not match({"x": 0}, {"x": None}).ok


def test_string_equality() -> None:
    assert match({"s": "hi"}, {"s": "hi"}).ok
    assert not match({"s": "hi"}, {"s": "HI"}).ok


# -----------------------------
# One-of constraint
# -----------------------------

def test_one_of_accepts_listed_literal() -> None:
    assert match({"state": OneOf("queued", "running")}, {"state": "running"}).ok


def test_one_of_rejects_other_values() -> None:
    result = match({"state": OneOf("queued", "running")}, {"state": "done"})
    assert result.mismatches[0].path == "state"
    assert result.mismatches[0].expected == 'one of ["queued","running"]'
    assert not match({"state": OneOf("1")}, {"state": 1}).ok


def test_one_of_requires_literals() -> None:
    with pytest.raises(ValueError):
        OneOf()
    with pytest.raises(TypeError):
        OneOf("a", 1)  # type: ignore[arg-type]


def test_missing_one_of_field_renders_constraint() -> None:
    result = match({"state": OneOf("a", "b")}, {})
    assert result.mismatches[0].expected == '{"oneOf":["a","b"]}'
