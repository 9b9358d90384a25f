"""Recursive-descent parser for plural rule expressions.

Grammar (C precedence, lowest first)::

    rule        := conditional EOF
    conditional := logical_or ( "?" conditional ":" conditional )?
    logical_or  := logical_and ( "||" logical_and )*
    logical_and := equality ( "&&" equality )*
    equality    := relational ( ( "==" | "!=" ) relational )*
    relational  := modulo ( ( "<" | "<=" | ">" | ">=" ) modulo )*
    modulo      := unary ( "%" unary )*
    unary       := "!" unary | primary
    primary     := NUMBER | "n" | "(" conditional ")"

The grammar is fixed: there are no function calls, no assignment and no
names other than the count variable. Nesting depth (parentheses, ternary
branches, negations and chained binary operators) is bounded by DepthGuard,
which also bounds the depth of the compiled closures.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from contextlib import ExitStack
from typing import TYPE_CHECKING, NoReturn, cast

from lexiconengine.constants import MAX_DEPTH, MAX_RULE_LITERAL_DIGITS, RULE_VARIABLE
from lexiconengine.core.depth_guard import DepthGuard, DepthLimitExceededError
from lexiconengine.diagnostics import ErrorTemplate, RuleCompilationError
from lexiconengine.enums import TokenKind

from .ast import (
    BinaryOp,
    BinaryOperator,
    Conditional,
    Count,
    Expression,
    Integer,
    Logical,
    LogicalOperator,
    Not,
)
from .lexer import Token, tokenize

if TYPE_CHECKING:
    from collections.abc import Callable

    from lexiconengine.diagnostics import Diagnostic

__all__ = ["RuleParser", "parse_rule"]

_EQUALITY: frozenset[str] = frozenset({"==", "!="})
_RELATIONAL: frozenset[str] = frozenset({"<", "<=", ">", ">="})
_MODULO: frozenset[str] = frozenset({"%"})
_TERNARY: frozenset[str] = frozenset({"?"})
_NEGATION: frozenset[str] = frozenset({"!"})


class RuleParser:
    """Single-use parser over one rule expression.

    Example:
        >>> RuleParser("n != 1").parse()
        BinaryOp(operator='!=', left=Count(position=0), right=Integer(value=1, position=5), position=0)
    """

    __slots__ = ("_expression", "_guard", "_index", "_tokens")

    def __init__(self, expression: str, *, max_depth: int = MAX_DEPTH) -> None:
        self._expression = expression
        self._tokens = tokenize(expression)
        self._index = 0
        self._guard = DepthGuard(max_depth=max_depth)

    def parse(self) -> Expression:
        """Parse the whole expression.

        Raises:
            RuleCompilationError: On any syntax error, unknown identifier,
                literal modulo by zero, over-long integer literal or
                excessive nesting
        """
        if self._peek().kind is TokenKind.EOF:
            self._fail(ErrorTemplate.rule_empty(self._expression), 0)

        node = self._parse_conditional()
        token = self._peek()
        if token.kind is not TokenKind.EOF:
            self._unexpected(token)
        return node

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.kind is not TokenKind.EOF:
            self._index += 1
        return token

    def _at_operator(self, operators: frozenset[str]) -> bool:
        token = self._peek()
        return token.kind is TokenKind.OPERATOR and token.text in operators

    def _expect(self, operator: str) -> Token:
        token = self._peek()
        if token.kind is TokenKind.OPERATOR and token.text == operator:
            return self._advance()
        if token.kind is TokenKind.EOF:
            self._fail(
                ErrorTemplate.rule_unexpected_eof(self._expression, f"'{operator}'"),
                token.position,
            )
        self._unexpected(token)

    def _unexpected(self, token: Token) -> NoReturn:
        if token.kind is TokenKind.EOF:
            self._fail(
                ErrorTemplate.rule_unexpected_eof(self._expression, "an operand"),
                token.position,
            )
        self._fail(
            ErrorTemplate.rule_unexpected_token(self._expression, token.text, token.position),
            token.position,
        )

    def _fail(self, diagnostic: Diagnostic, position: int) -> NoReturn:
        raise RuleCompilationError(diagnostic, expression=self._expression, position=position)

    def _enter(self, stack: ExitStack, position: int) -> None:
        """Descend one nesting level, translating depth overflow."""
        try:
            stack.enter_context(self._guard)
        except DepthLimitExceededError:
            self._fail(
                ErrorTemplate.rule_nesting_depth_exceeded(
                    self._expression, self._guard.max_depth, position
                ),
                position,
            )

    # ------------------------------------------------------------------
    # Grammar productions
    # ------------------------------------------------------------------

    def _parse_conditional(self) -> Expression:
        with ExitStack() as stack:
            self._enter(stack, self._peek().position)
            test = self._parse_logical("||", self._parse_logical_and)
            if not self._at_operator(_TERNARY):
                return test
            self._advance()
            consequent = self._parse_conditional()
            self._expect(":")
            alternate = self._parse_conditional()
            return Conditional(test, consequent, alternate, _position(test))

    def _parse_logical_and(self) -> Expression:
        return self._parse_logical("&&", self._parse_equality)

    def _parse_logical(
        self, operator: LogicalOperator, parse_operand: Callable[[], Expression]
    ) -> Expression:
        first = parse_operand()
        operands = [first]
        while self._at_operator(frozenset({operator})):
            self._advance()
            operands.append(parse_operand())
        if len(operands) == 1:
            return first
        return Logical(operator, tuple(operands), _position(first))

    def _parse_equality(self) -> Expression:
        return self._parse_binary_chain(_EQUALITY, self._parse_relational)

    def _parse_relational(self) -> Expression:
        return self._parse_binary_chain(_RELATIONAL, self._parse_modulo)

    def _parse_modulo(self) -> Expression:
        return self._parse_binary_chain(_MODULO, self._parse_unary)

    def _parse_binary_chain(
        self, operators: frozenset[str], parse_operand: Callable[[], Expression]
    ) -> Expression:
        left = parse_operand()
        with ExitStack() as stack:
            while self._at_operator(operators):
                token = self._advance()
                # Each link deepens the left-leaning tree by one level.
                self._enter(stack, token.position)
                right = parse_operand()
                if token.text == "%" and isinstance(right, Integer) and right.value == 0:
                    self._fail(
                        ErrorTemplate.rule_division_by_zero(self._expression, right.position),
                        right.position,
                    )
                left = BinaryOp(
                    cast("BinaryOperator", token.text), left, right, _position(left)
                )
        return left

    def _parse_unary(self) -> Expression:
        if not self._at_operator(_NEGATION):
            return self._parse_primary()
        token = self._advance()
        with ExitStack() as stack:
            self._enter(stack, token.position)
            return Not(self._parse_unary(), token.position)

    def _parse_primary(self) -> Expression:
        token = self._peek()
        match token.kind:
            case TokenKind.NUMBER:
                if len(token.text) > MAX_RULE_LITERAL_DIGITS:
                    self._fail(
                        ErrorTemplate.rule_literal_too_long(
                            self._expression, MAX_RULE_LITERAL_DIGITS, token.position
                        ),
                        token.position,
                    )
                self._advance()
                return Integer(int(token.text), token.position)
            case TokenKind.IDENTIFIER:
                if token.text != RULE_VARIABLE:
                    self._fail(
                        ErrorTemplate.rule_unknown_identifier(
                            self._expression, token.text, token.position
                        ),
                        token.position,
                    )
                self._advance()
                return Count(token.position)
            case TokenKind.OPERATOR if token.text == "(":
                self._advance()
                inner = self._parse_conditional()
                self._expect(")")
                return inner
            case _:
                self._unexpected(token)


def _position(node: Expression) -> int:
    return node.position


def parse_rule(expression: str, *, max_depth: int = MAX_DEPTH) -> Expression:
    """Parse a plural rule expression into an AST.

    Args:
        expression: Rule text over the count variable ``n``
        max_depth: Maximum nesting depth

    Returns:
        Root expression node

    Raises:
        RuleCompilationError: If the expression is malformed

    Example:
        >>> parse_rule("(n > 1)")
        BinaryOp(operator='>', left=Count(position=1), right=Integer(value=1, position=5), position=1)
    """
    return RuleParser(expression, max_depth=max_depth).parse()
