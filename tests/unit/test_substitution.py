# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from resttemplate.errors import MissingRequiredVariable
from resttemplate.template.substitution import (
    ParsedString,
    compile_structure,
    iter_variables,
    render_value,
    substitute,
)


def test_default_round_trip():
    compiled = compile_structure({"x": "{x=ME}", "y": 2})
    assert substitute(compiled, {"p": 1}) == {"x": "ME", "y": 2}


def test_argument_substituted():
    compiled = compile_structure({"x": "{x}"})
    assert substitute(compiled, {"x": "X"}) == {"x": "X"}


def test_whole_leaf_typed_placeholder_keeps_type():
    query = compile_structure({"x": "{x=100:number}", "y": 2})
    body = compile_structure({"a": "{a=1:number}", "b": "{b=true:boolean}"})
    arguments = {"p": 1, "a": 100, "b": False}

    resolved_query = substitute(query, arguments)
    resolved_body = substitute(body, arguments)

    assert resolved_query == {"x": 100, "y": 2}
    assert isinstance(resolved_query["x"], int)
    assert resolved_body == {"a": 100, "b": False}
    assert resolved_body["b"] is False


def test_numeric_string_becomes_numeric_leaf():
    compiled = compile_structure({"n": "{n:number}"})
    assert substitute(compiled, {"n": "12.5"}) == {"n": 12.5}


def test_interpolated_placeholders_render_to_text():
    compiled = compile_structure("/users/{id:number}/flags/{on:boolean}{missing}")
    assert substitute(compiled, {"id": "5", "on": "TRUE"}) == "/users/5/flags/true"


def test_nested_sequences_and_mappings():
    compiled = compile_structure(
        {"filter": {"where": [{"name": "{name}"}, {"age": "{age=30:number}"}]}, "limit": None, "flag": True}
    )
    resolved = substitute(compiled, {"name": "ann"})
    assert resolved == {"filter": {"where": [{"name": "ann"}, {"age": 30}]}, "limit": None, "flag": True}


def test_substitution_returns_fresh_containers():
    compiled = compile_structure({"items": ["{a}"]})
    first = substitute(compiled, {"a": 1})
    second = substitute(compiled, {"a": 2})
    assert first == {"items": [1]}
    assert second == {"items": [2]}
    assert compiled["items"][0] == ParsedString.from_text("{a}")


def test_arguments_are_not_mutated():
    arguments = {"a": "1"}
    substitute(compile_structure({"x": "{a:number}", "y": "{b=2}"}), arguments)
    assert arguments == {"a": "1"}


def test_escaped_literal_without_variables():
    assert substitute(compile_structure(r"\{raw\}"), {}) == "{raw}"


def test_missing_required_surfaces_from_nested_leaf():
    compiled = compile_structure({"outer": [{"inner": "{!token}"}]})
    with pytest.raises(MissingRequiredVariable):
        substitute(compiled, {})


def test_iter_variables_in_declaration_order():
    compiled = compile_structure({"a": "{first}", "b": ["{second}-{third=3}"]})
    assert [variable.name for variable in iter_variables(compiled)] == ["first", "second", "third"]


@pytest.mark.parametrize(("value", "expected"), [(None, ""), (True, "true"), (False, "false"), (1, "1"), ("s", "s")])
def test_render_value(value, expected):
    assert render_value(value) == expected
