"""
Tests for binding extraction and evaluation.
"""

import math

import pytest

from casgraph.expr import (
    BinaryOp,
    BinOp,
    ExprEvaluationError,
    Literal,
    Variable,
    evaluate,
    extend_bindings,
    extract_bindings,
    format_float,
    parse_expr,
)


class TestExtractBindings:
    def test_first_occurrence_order(self):
        assert extract_bindings(parse_expr("b + a * b")) == ["b", "a"]

    def test_literal_has_no_bindings(self):
        assert extract_bindings(parse_expr("1 + 2 * 3")) == []

    def test_walks_left_before_right(self):
        assert extract_bindings(parse_expr("(z - y) / (x + z)")) == ["z", "y", "x"]

    def test_walks_into_unary(self):
        assert extract_bindings(parse_expr("-q + p")) == ["q", "p"]

    def test_is_deterministic(self):
        text = "c * (b + a) - c / b"
        assert extract_bindings(parse_expr(text)) == extract_bindings(parse_expr(text))

    def test_extend_keeps_existing_entries(self):
        bindings = ["x"]
        extend_bindings(parse_expr("y + x"), bindings)
        assert bindings == ["x", "y"]

    def test_long_flat_chain(self):
        expr = parse_expr(" + ".join(["a", "b"] * 700))
        assert extract_bindings(expr) == ["a", "b"]

    def test_unicode_names(self):
        assert extract_bindings(parse_expr("α * b + α")) == ["α", "b"]


class TestEvaluate:
    def test_variables_use_aligned_values(self):
        expr = parse_expr("a * 2 + b")
        assert evaluate(expr, ["a", "b"], [3.0, 4.0]) == 10.0

    def test_binding_order_does_not_matter(self):
        expr = parse_expr("a - b")
        assert evaluate(expr, ["b", "a"], [1.0, 5.0]) == 4.0

    def test_negate(self):
        assert evaluate(parse_expr("-a"), ["a"], [2.5]) == -2.5

    def test_division_by_zero_is_infinite(self):
        assert evaluate(parse_expr("1/0"), [], []) == math.inf

    def test_negative_division_by_zero(self):
        assert evaluate(parse_expr("-1/0"), [], []) == -math.inf

    def test_zero_over_zero_is_nan(self):
        assert math.isnan(evaluate(parse_expr("0/0"), [], []))

    def test_nan_propagates(self):
        result = evaluate(parse_expr("a + 1"), ["a"], [math.nan])
        assert math.isnan(result)

    def test_division_by_negative_zero(self):
        expr = BinaryOp(Literal(1.0), BinOp.DIV, Literal(-0.0))
        assert evaluate(expr, [], []) == -math.inf

    def test_unbound_variable_is_fatal(self):
        with pytest.raises(ExprEvaluationError):
            evaluate(Variable("missing"), [], [])

    def test_length_mismatch_is_fatal(self):
        with pytest.raises(ExprEvaluationError):
            evaluate(parse_expr("a"), ["a"], [])

    def test_long_chain_of_terms(self):
        expr = parse_expr("-".join(["x"] * 1500))
        assert evaluate(expr, ["x"], [2.0]) == 2.0 - 2.0 * 1499

    def test_long_chain_of_factors(self):
        expr = parse_expr("*".join(["x"] * 1500))
        assert evaluate(expr, ["x"], [1.0]) == 1.0


class TestFormatFloat:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (7.0, "7.0"),
            (1.23456, "1.235"),
            (-0.0001, "0.0"),
            (math.inf, "inf"),
            (-math.inf, "-inf"),
            (math.nan, "nan"),
            (1e300, "1e+300"),
        ],
    )
    def test_display(self, value, expected):
        assert format_float(value) == expected

    def test_precision(self):
        assert format_float(2.0 / 3.0, precision=1) == "0.7"
