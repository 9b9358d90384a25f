"""Plural rule syntax package.

Provides the tokenizer, AST node types and recursive-descent parser for
C-style plural rule expressions. Separate from runtime so tooling (rule
linters, CLDR audits) can parse rules without compiling them.

Python 3.13+.
"""

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
from .lexer import OPERATORS, Token, tokenize
from .parser import RuleParser, parse_rule

__all__ = [
    "OPERATORS",
    "BinaryOp",
    "BinaryOperator",
    "Conditional",
    "Count",
    "Expression",
    "Integer",
    "Logical",
    "LogicalOperator",
    "Not",
    "RuleParser",
    "Token",
    "parse_rule",
    "tokenize",
]
