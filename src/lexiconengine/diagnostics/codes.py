"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Locale errors (identifier grammar, store readiness)
        2000-2999: Merge errors and warnings (dictionary combination)
        3000-3999: Plural rule syntax errors (rule compilation)
        4000-4999: Configuration errors
        5000-5999: Source collaborator errors
    """

    # Locale errors (1000-1999)
    INVALID_LOCALE_NAME = 1001
    NOT_INITIALIZED = 1002

    # Merge errors and warnings (2000-2999)
    MISSING_DEFAULT_LOCALE = 2001
    DUPLICATE_KEY = 2002
    INVALID_SOURCE_LOCALE = 2003
    INVALID_ENTRY_VALUE = 2004
    INVALID_PLURALIZATION_DESCRIPTOR = 2005
    PLURAL_FORM_COUNT_MISMATCH = 2006
    INVALID_DICTIONARY = 2007

    # Plural rule syntax errors (3000-3999)
    RULE_EMPTY = 3001
    RULE_UNEXPECTED_CHARACTER = 3002
    RULE_UNEXPECTED_TOKEN = 3003
    RULE_UNEXPECTED_EOF = 3004
    RULE_UNKNOWN_IDENTIFIER = 3005
    RULE_DIVISION_BY_ZERO = 3006
    RULE_NESTING_DEPTH_EXCEEDED = 3007
    RULE_LITERAL_TOO_LONG = 3008

    # Configuration errors (4000-4999)
    CONFIG_SECTION_MISSING = 4001
    CONFIG_INVALID_VALUE = 4002

    # Source collaborator errors (5000-5999)
    SOURCE_COLLECTION_FAILED = 5001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context for both
    log lines and tooling output.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        locale: Locale the diagnostic relates to (if any)
        key: Localization key the diagnostic relates to (if any)
        source: Dictionary source identity (if any)
        expression: Plural rule expression text (rule errors)
        position: Zero-based character offset inside expression (rule errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    locale: str | None = None
    key: str | None = None
    source: str | None = None
    expression: str | None = None
    position: int | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[RULE_UNKNOWN_IDENTIFIER]: Unknown identifier 'x' in plural rule
              --> n % 10 == x
                            ^
              = help: Plural rules may only reference the count variable 'n'

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
