"""Static evaluation of initializers."""

import pytest

from kindgraph.type_server.resolver.literals import (
    UNRESOLVED,
    LiteralEvaluator,
    get_binding_pattern_defaults,
    get_initializer_value,
    parse_number,
)


@pytest.mark.parametrize(
    "text, expected",
    [("42", 42), ("1_000", 1000), ("0x1F", 31), ("0b11", 3), ("1.5", 1.5), ("1e3", 1000.0), ("10n", "10n")],
)
def test_parse_number(text, expected):
    assert parse_number(text) == expected


@pytest.mark.parametrize(
    "expression, expected",
    [
        ('"hello"', "hello"),
        ("'it\\'s'", "it's"),
        ('"line\\nbreak"', "line\nbreak"),
        ("true", True),
        ("null", None),
        ("-5", -5),
        ("!false", True),
        ("2 * 3 + 1", 7),
        ("(1 + 2) as number", 3),
        ('"a" + 1', "a1"),
        ("[1, 2, [3]]", [1, 2, [3]]),
        ('{ a: 1, "b": "two" }', {"a": 1, "b": "two"}),
        ("`plain`", "plain"),
        ("null ?? 4", 4),
        ("true ? 1 : 2", 1),
    ],
)
def test_literal_expressions(initializer, expression, expected):
    checker, node = initializer(expression)

    assert LiteralEvaluator(checker).evaluate(node) == expected


def test_const_references_are_followed(initializer):
    checker, node = initializer("`${BASE}/api`", prelude='const BASE = "https://example.com";')

    assert get_initializer_value(node, checker) == "https://example.com/api"


def test_spreads_of_const_values(initializer):
    checker, node = initializer("{ ...DEFAULTS, size: 2 }", prelude="const DEFAULTS = { size: 1, color: 'red' };")

    assert get_initializer_value(node, checker) == {"size": 2, "color": "red"}


def test_let_references_are_not_followed(initializer):
    checker, node = initializer("count + 1", prelude="let count = 1;")

    assert LiteralEvaluator(checker).evaluate(node) is UNRESOLVED


def test_unresolved_initializer_falls_back_to_source_text(initializer):
    checker, node = initializer("Math.max(1, 2)")

    assert get_initializer_value(node, checker) == "Math.max(1, 2)"


def test_missing_initializer():
    assert get_initializer_value(None) is None


def test_without_checker_identifiers_stay_unresolved(initializer):
    _, node = initializer("LIMIT", prelude="const LIMIT = 3;")

    assert get_initializer_value(node) == "LIMIT"


def test_binding_pattern_defaults(syntax_node):
    checker, pattern = syntax_node('function Button({ size = "md", count: total = 2, label }) {}', "object_pattern")

    assert get_binding_pattern_defaults(pattern, checker) == {"size": "md", "count": 2}


def test_binding_pattern_without_defaults(syntax_node):
    _, pattern = syntax_node("function Button({ label }) {}", "object_pattern")

    assert get_binding_pattern_defaults(pattern) is None
