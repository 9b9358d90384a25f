"""Tests for plural rule compilation and evaluation.

Python 3.13+.
"""

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from lexiconengine.diagnostics import RuleCompilationError
from lexiconengine.runtime import CompiledRule, compile_rule
from lexiconengine.runtime.compiler import compile_expression, max_index
from lexiconengine.syntax import parse_rule
from tests.strategies.rules import rule_expressions

RU_RULE = "(n%10==1 && n%100!=11 ? 0 : n%10>=2 && n%10<=4 && (n%100<10||n%100>=20) ? 1 : 2)"


def _ru_reference(n: int) -> int:
    if n % 10 == 1 and n % 100 != 11:
        return 0
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return 1
    return 2


class TestEvaluation:
    """Test C-style integer semantics of compiled rules."""

    @pytest.mark.parametrize(
        ("expression", "n", "expected"),
        [
            ("0", 5, 0),
            ("n", 7, 7),
            ("n%10", 23, 3),
            ("n != 1", 1, 0),
            ("n != 1", 2, 1),
            ("n > 1", 0, 0),
            ("n >= 2", 2, 1),
            ("n < 2", 2, 0),
            ("n <= 2", 2, 1),
            ("n == 3", 3, 1),
            ("!n", 0, 1),
            ("!n", 4, 0),
            ("!!n", 4, 1),
            ("n && 5", 3, 1),
            ("n || 0", 0, 0),
            ("n>1 ? 7 : 3", 2, 7),
            ("n>1 ? 7 : 3", 1, 3),
            ("n ? 1 : 2", 0, 2),
        ],
    )
    def test_operators(self, expression: str, n: int, expected: int) -> None:
        """Each operator follows C integer semantics."""
        assert compile_rule(expression).index(n) == expected

    def test_logical_and_short_circuits(self) -> None:
        """&& stops at the first zero operand."""
        rule = compile_rule("n != 0 && 10 % n == 0")
        assert rule.index(0) == 0
        assert rule.index(5) == 1

    def test_logical_or_short_circuits(self) -> None:
        """|| stops at the first non-zero operand."""
        rule = compile_rule("n == 0 || 10 % n == 1")
        assert rule.index(0) == 1
        assert rule.index(3) == 1
        assert rule.index(4) == 0

    def test_runtime_modulo_by_zero_is_none(self) -> None:
        """x % n with n == 0 yields None rather than raising."""
        rule = compile_rule("10 % n")
        assert rule.index(0) is None
        assert rule.index(3) == 1

    def test_conditional_evaluates_only_selected_branch(self) -> None:
        """The untaken branch is never evaluated."""
        rule = compile_rule("n == 0 ? 0 : 10 % n")
        assert rule.index(0) == 0

    @given(n=st.integers(min_value=0, max_value=100_000))
    def test_russian_rule_matches_reference(self, n: int) -> None:
        """PROPERTY: compiled Russian rule agrees with a direct implementation."""
        index = compile_rule(RU_RULE).index(n)
        event(f"form={index}")
        assert index == _ru_reference(n)


class TestFormSelection:
    """Test CompiledRule.__call__ form selection."""

    def test_selects_form(self) -> None:
        """The computed index picks from the form array."""
        rule = compile_rule(RU_RULE)
        forms = ("яблоко", "яблока", "яблок")
        assert [rule(n, forms) for n in (1, 2, 5, 11, 21, 22)] == [
            "яблоко", "яблока", "яблок", "яблок", "яблоко", "яблока",
        ]

    def test_index_out_of_range_is_none(self) -> None:
        """An index past the array is the missing-form sentinel."""
        rule = compile_rule(RU_RULE)
        assert rule(5, ("яблоко", "яблока")) is None

    def test_unbounded_rule_out_of_range(self) -> None:
        """A rule returning n selects nothing for large n."""
        rule = compile_rule("n")
        assert rule(1, ("a", "b")) == "b"
        assert rule(9, ("a", "b")) is None

    def test_empty_forms(self) -> None:
        """No forms means no selection."""
        assert compile_rule("0")(1, ()) is None


class TestMaxIndex:
    """Test static bounding of rule results."""

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("0", 0),
            ("3", 3),
            ("(n != 1)", 1),
            ("!n", 1),
            ("n==1 || n==2", 1),
            (RU_RULE, 2),
            ("(n==1 ? 0 : n==2 ? 1 : n<7 ? 2 : n<11 ? 3 : 4)", 4),
            ("n", None),
            ("n%10", None),
            ("n==1 ? 0 : n%3", None),
        ],
    )
    def test_bounds(self, expression: str, expected: int | None) -> None:
        """Literal and boolean leaves are bounded; n and % are not."""
        assert max_index(parse_rule(expression)) == expected
        rule = compile_rule(expression)
        assert rule.max_index == expected
        assert rule.form_count == (None if expected is None else expected + 1)

    @given(expression=rule_expressions(), n=st.integers(min_value=0, max_value=10_000))
    def test_index_within_bound(self, expression: str, n: int) -> None:
        """PROPERTY: evaluated index never exceeds the static bound."""
        rule = compile_rule(expression)
        index = rule.index(n)
        event(f"max_index={rule.max_index}")
        assert rule.max_index is not None
        assert index is not None
        assert 0 <= index <= rule.max_index


class TestCompileRule:
    """Test compile_rule entry point."""

    def test_returns_compiled_rule(self) -> None:
        """compile_rule keeps the source expression."""
        rule = compile_rule("(n > 1)")
        assert isinstance(rule, CompiledRule)
        assert rule.expression == "(n > 1)"

    def test_compile_expression_from_ast(self) -> None:
        """An AST compiles directly to an evaluator."""
        evaluator = compile_expression(parse_rule("n%100"))
        assert evaluator(1234) == 34

    def test_malformed_raises(self) -> None:
        """Syntax errors propagate from the parser."""
        with pytest.raises(RuleCompilationError):
            compile_rule("n ==")
