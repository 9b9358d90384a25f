"""Tests for the plural rule parser.

Covers precedence, associativity, flat logical chains, error reporting
with positions and nesting depth limits.

Python 3.13+.
"""

import pytest
from hypothesis import event, given, settings
from hypothesis import strategies as st

from lexiconengine.constants import MAX_DEPTH, MAX_RULE_LITERAL_DIGITS
from lexiconengine.diagnostics import DiagnosticCode, RuleCompilationError
from lexiconengine.runtime.plural_rules import PLURAL_RULES
from lexiconengine.syntax import (
    BinaryOp,
    Conditional,
    Count,
    Integer,
    Logical,
    Not,
    RuleParser,
    parse_rule,
)
from tests.strategies.rules import nested_rule_expressions, rule_expressions


def _error_code(expression: str, **kwargs: int) -> DiagnosticCode:
    with pytest.raises(RuleCompilationError) as exc_info:
        parse_rule(expression, **kwargs)
    assert exc_info.value.diagnostic is not None
    return exc_info.value.diagnostic.code


class TestParsePrimary:
    """Test literals, the count variable and parentheses."""

    def test_integer(self) -> None:
        """A bare integer is an Integer node."""
        assert parse_rule("0") == Integer(0, 0)

    def test_count(self) -> None:
        """The identifier n is the Count node."""
        assert parse_rule("n") == Count(0)

    def test_parentheses_are_transparent(self) -> None:
        """Parentheses produce no node of their own."""
        assert parse_rule("((n))") == Count(2)

    def test_parser_class_matches_function(self) -> None:
        """RuleParser.parse and parse_rule agree."""
        assert RuleParser("n != 1").parse() == parse_rule("n != 1")


class TestPrecedence:
    """Test C operator precedence and associativity."""

    def test_modulo_binds_tighter_than_comparison(self) -> None:
        """n%10==1 parses as (n%10)==1."""
        node = parse_rule("n%10==1")
        assert isinstance(node, BinaryOp)
        assert node.operator == "=="
        assert node.left == BinaryOp("%", Count(0), Integer(10, 2), 0)
        assert node.right == Integer(1, 6)

    def test_relational_binds_tighter_than_equality(self) -> None:
        """n<2==1 parses as (n<2)==1."""
        node = parse_rule("n<2==1")
        assert isinstance(node, BinaryOp)
        assert node.operator == "=="
        assert isinstance(node.left, BinaryOp)
        assert node.left.operator == "<"

    def test_and_binds_tighter_than_or(self) -> None:
        """a || b && c parses as a || (b && c)."""
        node = parse_rule("n==0 || n==1 && n==2")
        assert isinstance(node, Logical)
        assert node.operator == "||"
        assert len(node.operands) == 2
        assert isinstance(node.operands[1], Logical)
        assert node.operands[1].operator == "&&"

    def test_logical_chain_is_flat(self) -> None:
        """a || b || c is a single Logical node with three operands."""
        node = parse_rule("n==0 || n==1 || n==2")
        assert isinstance(node, Logical)
        assert len(node.operands) == 3

    def test_binary_operators_left_associative(self) -> None:
        """n%100%10 parses as (n%100)%10."""
        node = parse_rule("n%100%10")
        assert node == BinaryOp(
            "%", BinaryOp("%", Count(0), Integer(100, 2), 0), Integer(10, 6), 0
        )

    def test_conditional_right_associative(self) -> None:
        """a ? 0 : b ? 1 : 2 nests in the alternate branch."""
        node = parse_rule("n==1 ? 0 : n==2 ? 1 : 2")
        assert isinstance(node, Conditional)
        assert node.consequent == Integer(0, 7)
        assert isinstance(node.alternate, Conditional)
        assert node.alternate.alternate == Integer(2, 22)

    def test_negation(self) -> None:
        """! applies to the following unary expression."""
        assert parse_rule("!n") == Not(Count(1), 0)
        assert parse_rule("!!n") == Not(Not(Count(2), 1), 0)

    @pytest.mark.parametrize("expression", sorted(PLURAL_RULES))
    def test_builtin_rules_parse(self, expression: str) -> None:
        """Every rule in the built-in table parses."""
        parse_rule(expression)


class TestParseErrors:
    """Test error codes and positions for malformed rules."""

    @pytest.mark.parametrize("expression", ["", "   "])
    def test_empty(self, expression: str) -> None:
        """Empty and blank expressions are rejected."""
        assert _error_code(expression) is DiagnosticCode.RULE_EMPTY

    def test_unknown_identifier(self) -> None:
        """Identifiers other than n are rejected at their position."""
        with pytest.raises(RuleCompilationError) as exc_info:
            parse_rule("n % 10 == x")
        assert exc_info.value.position == 10
        assert "Unknown identifier 'x'" in str(exc_info.value)

    @pytest.mark.parametrize("expression", ["n != 1)", "n 1", "(n) (n)"])
    def test_trailing_tokens(self, expression: str) -> None:
        """Input after a complete expression is an unexpected token."""
        assert _error_code(expression) is DiagnosticCode.RULE_UNEXPECTED_TOKEN

    @pytest.mark.parametrize("expression", ["n !=", "(n != 1", "n ? 0", "n ? 0 :", "!"])
    def test_unexpected_eof(self, expression: str) -> None:
        """Truncated expressions report end of input."""
        assert _error_code(expression) is DiagnosticCode.RULE_UNEXPECTED_EOF

    def test_missing_colon(self) -> None:
        """A ternary without ':' reports the offending token."""
        with pytest.raises(RuleCompilationError) as exc_info:
            parse_rule("n ? 0 ) 1")
        assert exc_info.value.position == 6

    def test_literal_modulo_by_zero(self) -> None:
        """Modulo by the literal 0 is rejected at compile time."""
        with pytest.raises(RuleCompilationError) as exc_info:
            parse_rule("n % 0")
        assert exc_info.value.position == 4
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.RULE_DIVISION_BY_ZERO

    def test_overlong_literal_rejected(self) -> None:
        """Literals past the interpreter's int conversion limit are rule errors."""
        expression = "n > " + "1" * 5000 + " ? 1 : 0"
        with pytest.raises(RuleCompilationError) as exc_info:
            parse_rule(expression)
        assert exc_info.value.position == 4
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.RULE_LITERAL_TOO_LONG

    def test_literal_digit_limit_boundary(self) -> None:
        """Literals up to MAX_RULE_LITERAL_DIGITS digits parse."""
        longest = "9" * MAX_RULE_LITERAL_DIGITS
        assert parse_rule(longest) == Integer(int(longest), 0)
        assert _error_code(longest + "9") is DiagnosticCode.RULE_LITERAL_TOO_LONG

    def test_format_error_has_caret(self) -> None:
        """format_error renders the expression with a caret under the position."""
        with pytest.raises(RuleCompilationError) as exc_info:
            parse_rule("n == x")
        rendered = exc_info.value.format_error()
        assert "error[RULE_UNKNOWN_IDENTIFIER]" in rendered
        assert "  --> n == x" in rendered
        assert "      " + " " * 5 + "^" in rendered


class TestNestingDepth:
    """Test DepthGuard integration in the parser."""

    def test_deep_parentheses_rejected(self) -> None:
        """Nesting beyond the limit is a compilation error, not RecursionError."""
        expression = "(" * 500 + "n" + ")" * 500
        assert _error_code(expression) is DiagnosticCode.RULE_NESTING_DEPTH_EXCEEDED

    def test_deep_negation_rejected(self) -> None:
        """Long ! chains are bounded."""
        assert _error_code("!" * 500 + "n") is DiagnosticCode.RULE_NESTING_DEPTH_EXCEEDED

    def test_long_modulo_chain_rejected(self) -> None:
        """Chained binary operators deepen the tree and are bounded."""
        expression = "n" + "%7" * 500
        assert _error_code(expression) is DiagnosticCode.RULE_NESTING_DEPTH_EXCEEDED

    def test_long_ternary_chain_rejected(self) -> None:
        """Right-nested conditionals are bounded."""
        expression = "".join(f"n=={i} ? {i} : " for i in range(500)) + "0"
        assert _error_code(expression) is DiagnosticCode.RULE_NESTING_DEPTH_EXCEEDED

    def test_long_flat_disjunction_accepted(self) -> None:
        """Flat || chains do not deepen the tree."""
        expression = " || ".join(f"n=={i}" for i in range(200))
        node = parse_rule(expression)
        assert isinstance(node, Logical)
        assert len(node.operands) == 200

    def test_custom_limit(self) -> None:
        """max_depth is honored per call."""
        parse_rule("((n))", max_depth=MAX_DEPTH)
        assert (
            _error_code("((n))", max_depth=2) is DiagnosticCode.RULE_NESTING_DEPTH_EXCEEDED
        )

    @given(case=nested_rule_expressions())
    def test_moderate_nesting_accepted(self, case: tuple[str, int]) -> None:
        """PROPERTY: nesting well under the limit always parses."""
        expression, depth = case
        event(f"depth={depth}")
        node = parse_rule(expression)
        assert isinstance(node, BinaryOp)
        assert node.position == depth


class TestGeneratedRules:
    """Property tests over generated ternary chains."""

    @given(expression=rule_expressions())
    def test_parses(self, expression: str) -> None:
        """PROPERTY: generated chains always parse."""
        node = parse_rule(expression)
        event(f"root={type(node).__name__}")
        assert node.position == 0


@pytest.mark.fuzz
class TestParserFuzz:
    """Arbitrary input: the parser either succeeds or reports a rule error."""

    @given(
        expression=st.text(alphabet="n0123456789%=!<>&|?:() x\t", max_size=40)
        | st.text(max_size=40)
    )
    @settings(max_examples=5000)
    def test_never_crashes(self, expression: str) -> None:
        """PROPERTY: no exception other than RuleCompilationError escapes."""
        try:
            parse_rule(expression)
        except RuleCompilationError as error:
            code = error.diagnostic.code.name if error.diagnostic is not None else "none"
            event(f"code={code}")
        else:
            event("parsed")
