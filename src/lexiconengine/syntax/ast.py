"""AST node types for plural rule expressions.

A plural rule is a single C-style integer expression over the count ``n``
(the gettext "plural=" idiom), e.g.::

    n%10==1 && n%100!=11 ? 0 : n%10>=2 && n%10<=4 && (n%100<10||n%100>=20) ? 1 : 2

All nodes are frozen, slotted dataclasses. Every node carries the zero-based
character offset where it starts so compilation errors can point at it.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

__all__ = [
    "BinaryOperator",
    "BinaryOp",
    "Conditional",
    "Count",
    "Expression",
    "Integer",
    "Logical",
    "LogicalOperator",
    "Not",
]

type BinaryOperator = Literal["%", "==", "!=", "<", "<=", ">", ">="]
"""Left-associative binary operators (modulo and comparisons)."""

type LogicalOperator = Literal["&&", "||"]
"""Short-circuit logical operators."""


@dataclass(frozen=True, slots=True)
class Count:
    """Reference to the count variable ``n``."""

    position: int


@dataclass(frozen=True, slots=True)
class Integer:
    """Non-negative integer literal."""

    value: int
    position: int


@dataclass(frozen=True, slots=True)
class Not:
    """Logical negation: ``!operand`` evaluates to 1 when operand is 0."""

    operand: Expression
    position: int


@dataclass(frozen=True, slots=True)
class BinaryOp:
    """Modulo or comparison. Comparisons evaluate to 0 or 1."""

    operator: BinaryOperator
    left: Expression
    right: Expression
    position: int


@dataclass(frozen=True, slots=True)
class Logical:
    """Chain of ``&&`` or ``||`` operands, evaluated left to right.

    Chains are flat (``a || b || c`` is one node with three operands) so long
    disjunctions do not deepen the tree. Evaluates to 0 or 1.
    """

    operator: LogicalOperator
    operands: tuple[Expression, ...]
    position: int


@dataclass(frozen=True, slots=True)
class Conditional:
    """Ternary ``test ? consequent : alternate``; test is true when non-zero."""

    test: Expression
    consequent: Expression
    alternate: Expression
    position: int


type Expression = Count | Integer | Not | BinaryOp | Logical | Conditional
"""Any plural rule expression node."""
