"""Tokenizer for plural rule expressions.

Splits rule text into a tuple of immutable tokens. Operators use longest
match ("<=" before "<"); whitespace is insignificant. Characters outside the
grammar raise RuleCompilationError with their position.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from lexiconengine.diagnostics import ErrorTemplate, RuleCompilationError
from lexiconengine.enums import TokenKind

__all__ = ["OPERATORS", "Token", "tokenize"]

# Ordered longest-first so two-character operators win over their prefixes.
OPERATORS: tuple[str, ...] = (
    "&&", "||", "==", "!=", "<=", ">=",
    "<", ">", "!", "%", "?", ":", "(", ")",
)


@dataclass(frozen=True, slots=True)
class Token:
    """Lexical token.

    Attributes:
        kind: Token category
        text: Exact source text of the token ("" for EOF)
        position: Zero-based offset of the first character
    """

    kind: TokenKind
    text: str
    position: int


def tokenize(expression: str) -> tuple[Token, ...]:
    """Tokenize a plural rule expression.

    Args:
        expression: Rule text (e.g., "n != 1")

    Returns:
        Tokens in source order, always terminated by an EOF token

    Raises:
        RuleCompilationError: On a character that starts no token

    Example:
        >>> [t.text for t in tokenize("n%10==1")]
        ['n', '%', '10', '==', '1', '']
    """
    tokens: list[Token] = []
    pos = 0
    length = len(expression)

    while pos < length:
        char = expression[pos]

        if char.isspace():
            pos += 1
            continue

        # ASCII only: str.isdigit() accepts superscripts and other scripts
        if "0" <= char <= "9":
            start = pos
            while pos < length and "0" <= expression[pos] <= "9":
                pos += 1
            tokens.append(Token(TokenKind.NUMBER, expression[start:pos], start))
            continue

        if char.isascii() and (char.isalpha() or char == "_"):
            start = pos
            while pos < length and expression[pos].isascii() and (
                expression[pos].isalnum() or expression[pos] == "_"
            ):
                pos += 1
            tokens.append(Token(TokenKind.IDENTIFIER, expression[start:pos], start))
            continue

        for operator in OPERATORS:
            if expression.startswith(operator, pos):
                tokens.append(Token(TokenKind.OPERATOR, operator, pos))
                pos += len(operator)
                break
        else:
            diagnostic = ErrorTemplate.rule_unexpected_character(expression, char, pos)
            raise RuleCompilationError(diagnostic, expression=expression, position=pos)

    tokens.append(Token(TokenKind.EOF, "", length))
    return tuple(tokens)
