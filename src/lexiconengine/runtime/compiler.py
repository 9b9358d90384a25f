"""Compile plural rule ASTs into nested closures.

Each AST node becomes a small function ``(n) -> int``; evaluation never
touches the parser again and never uses eval/exec. The closures are pure,
so a CompiledRule is safe to share across threads and locales.

Semantics follow C, which is what the gettext ``plural=`` idiom assumes:
comparisons and logical operators yield 0 or 1, ``&&``/``||`` short-circuit,
and a conditional is true when its test is non-zero.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from lexiconengine.constants import MAX_DEPTH
from lexiconengine.syntax import (
    BinaryOp,
    Conditional,
    Count,
    Expression,
    Integer,
    Logical,
    Not,
    parse_rule,
)

__all__ = ["CompiledRule", "Evaluator", "compile_expression", "compile_rule", "max_index"]

type Evaluator = Callable[[int], int]
"""Compiled rule body: count in, form index out."""


@dataclass(frozen=True, slots=True)
class CompiledRule:
    """A compiled plural rule.

    Calling the rule with a count and a form array returns the selected form,
    or None when the computed index falls outside the array (the "missing
    form" sentinel). Callers decide what a missing form renders as.

    Attributes:
        expression: Source text the rule was compiled from
        evaluator: Compiled body mapping a normalized count to an index
        max_index: Largest index the rule can produce, or None if unbounded
    """

    expression: str
    evaluator: Evaluator
    max_index: int | None

    def index(self, n: int) -> int | None:
        """Evaluate the rule for a normalized (non-negative) count.

        Returns:
            Form index, or None when the expression divides by zero at
            runtime (``x % n`` with ``n == 0``)
        """
        try:
            return self.evaluator(n)
        except ZeroDivisionError:
            return None

    @property
    def form_count(self) -> int | None:
        """Number of forms the rule expects, or None if it cannot be bounded."""
        return None if self.max_index is None else self.max_index + 1

    def __call__(self, n: int, forms: Sequence[str]) -> str | None:
        """Select the form for count n.

        Example:
            >>> rule = compile_rule("(n != 1)")
            >>> rule(1, ("apple", "apples")), rule(3, ("apple", "apples"))
            ('apple', 'apples')
            >>> rule(3, ("apple",)) is None
            True
        """
        selected = self.index(n)
        if selected is None or not 0 <= selected < len(forms):
            return None
        return forms[selected]


def compile_expression(node: Expression) -> Evaluator:
    """Compile an AST node into an evaluator closure.

    Recursion depth equals AST depth, which the parser bounds by MAX_DEPTH.
    """
    match node:
        case Count():
            return _count
        case Integer(value=value):
            return lambda _n: value
        case Not(operand=operand):
            inner = compile_expression(operand)
            return lambda n: int(not inner(n))
        case BinaryOp(operator=operator, left=left, right=right):
            return _compile_binary(operator, compile_expression(left), compile_expression(right))
        case Logical(operator="&&", operands=operands):
            conjuncts = tuple(compile_expression(op) for op in operands)
            return lambda n: int(all(term(n) for term in conjuncts))
        case Logical(operator="||", operands=operands):
            disjuncts = tuple(compile_expression(op) for op in operands)
            return lambda n: int(any(term(n) for term in disjuncts))
        case Conditional(test=test, consequent=consequent, alternate=alternate):
            test_fn = compile_expression(test)
            then_fn = compile_expression(consequent)
            else_fn = compile_expression(alternate)
            return lambda n: then_fn(n) if test_fn(n) else else_fn(n)
        case _:  # pragma: no cover
            msg = f"Unknown plural rule node: {type(node).__name__}"
            raise TypeError(msg)


def _count(n: int) -> int:
    return n


def _compile_binary(operator: str, left: Evaluator, right: Evaluator) -> Evaluator:
    match operator:
        case "%":
            return lambda n: left(n) % right(n)
        case "==":
            return lambda n: int(left(n) == right(n))
        case "!=":
            return lambda n: int(left(n) != right(n))
        case "<":
            return lambda n: int(left(n) < right(n))
        case "<=":
            return lambda n: int(left(n) <= right(n))
        case ">":
            return lambda n: int(left(n) > right(n))
        case ">=":
            return lambda n: int(left(n) >= right(n))
        case _:  # pragma: no cover
            msg = f"Unknown plural rule operator: {operator}"
            raise TypeError(msg)


def max_index(node: Expression) -> int | None:
    """Statically bound the largest index an expression can select.

    Only the shapes plural rules actually use are bounded: integer literals,
    boolean-valued nodes and conditionals over them. A bare ``n`` or a
    modulo result is unbounded (None).

    Example:
        >>> max_index(parse_rule("n==1 ? 0 : n==2 ? 1 : 2"))
        2
    """
    match node:
        case Integer(value=value):
            return value
        case Not() | Logical():
            return 1
        case BinaryOp(operator="%"):
            return None
        case BinaryOp():
            return 1
        case Conditional(consequent=consequent, alternate=alternate):
            then_max = max_index(consequent)
            else_max = max_index(alternate)
            if then_max is None or else_max is None:
                return None
            return max(then_max, else_max)
        case _:
            return None


def compile_rule(expression: str, *, max_depth: int = MAX_DEPTH) -> CompiledRule:
    """Parse and compile a plural rule expression.

    Args:
        expression: Rule text over the count variable ``n``
        max_depth: Maximum nesting depth accepted by the parser

    Returns:
        Compiled rule

    Raises:
        RuleCompilationError: If the expression is malformed
    """
    tree = parse_rule(expression, max_depth=max_depth)
    return CompiledRule(expression, compile_expression(tree), max_index(tree))
