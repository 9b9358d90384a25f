"""LexiconEngine exception hierarchy with structured diagnostics.

All exceptions accept either a message string or a Diagnostic object; when a
Diagnostic is given it is kept on the exception for tooling and log output.

Propagation policy:
    - InvalidLocaleNameError is the only error the query path raises for
      caller input.
    - NotInitializedError signals a lookup before the first committed rebuild.
    - MissingDefaultLocaleError and RuleCompilationError never reach query
      callers: the store reports the former through its failure event, the
      provider degrades the latter to the missing-value policy.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from .codes import Diagnostic

__all__ = [
    "ConfigurationError",
    "DuplicateKeyWarning",
    "InvalidLocaleNameError",
    "LexiconError",
    "MissingDefaultLocaleError",
    "NotInitializedError",
    "RuleCompilationError",
]


class LexiconError(Exception):
    """Base exception for all LexiconEngine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LexiconError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidLocaleNameError(LexiconError, ValueError):
    """Locale identifier does not match ``language`` or ``language-region``.

    Raised synchronously by every lookup API for malformed caller input.
    Subclasses ValueError so generic input validation handlers catch it.

    Attributes:
        locale: The rejected input
    """

    def __init__(self, message: str | Diagnostic, *, locale: object = None) -> None:
        super().__init__(message)
        self.locale = locale


class ConfigurationError(LexiconError):
    """Required configuration is missing or has an invalid value."""


class NotInitializedError(LexiconError):
    """Lookup attempted before any rebuild has been committed."""


class MissingDefaultLocaleError(LexiconError):
    """Default locale dictionary could not be established by a rebuild.

    Fatal for that rebuild only: nothing is committed and the previously
    committed dictionaries (if any) continue to be served.

    Attributes:
        locale: The configured default locale
    """

    def __init__(self, message: str | Diagnostic, *, locale: str = "") -> None:
        super().__init__(message)
        self.locale = locale


class RuleCompilationError(LexiconError):
    """Plural rule expression is malformed.

    Scoped to the offending expression: pluralization for locales using it
    degrades to the missing-form behavior, plain lookups are unaffected.

    Attributes:
        expression: The rule text that failed to compile
        position: Zero-based character offset of the error, if known
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        expression: str = "",
        position: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expression = expression
        self.position = position

    def format_error(self) -> str:
        """Render the error with a caret under the failing position."""
        if self.diagnostic is not None:
            return self.diagnostic.format_error()
        return str(self)


@dataclass(frozen=True, slots=True)
class DuplicateKeyWarning:
    """Record of a key redefined by a later-discovered source.

    Non-fatal: the later value wins and the merge continues. Collected in
    MergeResult.duplicates and logged at WARNING level.

    Attributes:
        key: Localization key that was redefined
        locale: Locale in which the collision happened
        source: Source whose value won
        previous_source: Source whose value was overridden
    """

    key: str
    locale: str
    source: str
    previous_source: str
