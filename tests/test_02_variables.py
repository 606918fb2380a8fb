#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for variable parsing, merging and placeholder substitution."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from wicketmock.services.errors import MalformedVariableDeclaration, UndefinedVariable
from wicketmock.services.variables import (
    extract_extend_variables,
    extract_inline_variables,
    merge_first_wins,
    merge_override_wins,
    render,
)


# ── Inline attributes ─────────────────────────────────────────────────────────

def test_inline_pairs():
    assert extract_inline_variables(' title="Hi" who="World"') == {"title": "Hi", "who": "World"}


def test_inline_keeps_spaces_inside_values():
    assert extract_inline_variables('label="First name"') == {"label": "First name"}


def test_inline_empty_value():
    assert extract_inline_variables(' hint=""') == {"hint": ""}


@pytest.mark.parametrize("raw", [None, "", "   ", "no pairs here", "title=Hi", "x='single'"])
def test_inline_malformed_or_absent_is_empty(raw):
    assert extract_inline_variables(raw) == {}


def test_inline_requires_whitespace_before_name():
    assert extract_inline_variables('a="1"b="2"') == {"a": "1"}


# ── Extend declarations ───────────────────────────────────────────────────────

def test_extend_pairs_are_trimmed_and_ordered():
    pairs = extract_extend_variables('with="  title : Home ,who:Everyone"')
    assert pairs == [("title", "Home"), ("who", "Everyone")]


def test_extend_accepts_bare_clause():
    assert extract_extend_variables("a: 1, b: 2") == [("a", "1"), ("b", "2")]


@pytest.mark.parametrize("raw", [None, "", 'with=""', 'with="   "'])
def test_extend_blank_clause_is_empty(raw):
    assert extract_extend_variables(raw) == []


@pytest.mark.parametrize("raw", [
    'with="title Home"',
    'with="url: http://example.com"',
    'with="a: 1,"',
])
def test_extend_malformed_pair_raises(raw):
    with pytest.raises(MalformedVariableDeclaration) as info:
        extract_extend_variables(raw)
    assert raw in info.value.message


# ── Merging ───────────────────────────────────────────────────────────────────

def test_first_wins_never_overwrites():
    base = {"name": "Alice"}
    result = merge_first_wins(base, [("name", "Bob"), ("role", "admin")])
    assert result is base
    assert base == {"name": "Alice", "role": "admin"}


def test_first_wins_accepts_mapping():
    base = {}
    merge_first_wins(base, {"a": "1"})
    assert base == {"a": "1"}


def test_override_wins_returns_new_mapping():
    inherited = {"who": "Everyone", "title": "Home"}
    local = {"who": "World"}
    merged = merge_override_wins(inherited, local)
    assert merged == {"who": "World", "title": "Home"}
    assert inherited == {"who": "Everyone", "title": "Home"}
    assert merged is not inherited


# ── Substitution ──────────────────────────────────────────────────────────────

def test_render_bare_placeholder():
    assert render("<b>[name]</b>", {"name": "Alice"}) == "<b>Alice</b>"


def test_render_undefined_is_empty_by_default():
    assert render("<b>[missing]</b>", {}) == "<b></b>"


def test_render_keep_policy_leaves_placeholder():
    assert render("<b>[missing]</b>", {}, undefined="keep") == "<b>[missing]</b>"


def test_render_inline_script_and_style_brackets():
    markup = "<script>var v = items[index];</script><style>input[disabled]{}</style>"
    assert render(markup, {}) == "<script>var v = items;</script><style>input{}</style>"
    assert render(markup, {}, undefined="keep") == markup


def test_render_strict_policy_raises():
    with pytest.raises(UndefinedVariable):
        render("[missing]", {}, undefined="strict")


def test_render_escaped_and_raw_tags():
    variables = {"v": "<i>x</i>"}
    assert render("[%= v %]", variables) == "&lt;i&gt;x&lt;/i&gt;"
    assert render("[%- v %]", variables) == "<i>x</i>"
    assert render("[v]", variables) == "<i>x</i>"


def test_render_ignores_non_identifier_brackets():
    markup = "items[0] = [1, 2]; <input data-x=\"[data-y]\">"
    assert render(markup, {}) == markup


def test_render_dotted_names():
    assert render("[user.name]", {"user.name": "Ann"}) == "Ann"


def test_render_does_not_touch_wicket_markup():
    markup = '<wicket:panel><!-- include-panel="A.html" --></wicket:panel>'
    assert render(markup, {"panel": "x"}) == markup
