"""Enumerations for LexiconEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class TokenKind(StrEnum):
    """Kind of lexical token in a plural rule expression.

    StrEnum provides automatic string conversion: str(TokenKind.NUMBER) == "number"
    """

    NUMBER = "number"
    """Non-negative integer literal: 10"""

    IDENTIFIER = "identifier"
    """Name reference. Only the count variable `n` compiles."""

    OPERATOR = "operator"
    """Operator or punctuation: % == != < <= > >= && || ! ? : ( )"""

    EOF = "eof"
    """End of expression."""


class RebuildStatus(StrEnum):
    """Outcome of a LocalizationStore rebuild.

    StrEnum provides automatic string conversion: str(RebuildStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """New dictionaries were merged and committed."""

    FAILED = "failed"
    """Rebuild aborted; the previously committed state is still served."""


class ChangeKind(StrEnum):
    """Kind of dictionary source change reported by a source collaborator.

    StrEnum provides automatic string conversion: str(ChangeKind.ADDED) == "added"
    """

    ADDED = "added"
    """A new source (component or file) appeared."""

    CHANGED = "changed"
    """An existing source was modified."""

    REMOVED = "removed"
    """A source was removed."""


__all__ = [
    "ChangeKind",
    "RebuildStatus",
    "TokenKind",
]
