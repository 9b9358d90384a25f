"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from lexiconengine.constants import LOCALE_PATTERN, PLURALIZATION_KEY, RULE_VARIABLE

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and consistent, and documents every error case.
    """

    # ------------------------------------------------------------------
    # Locale errors
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_locale_name(locale: object) -> Diagnostic:
        """Locale identifier does not match the locale grammar.

        Args:
            locale: The rejected input (any type; rendered with repr for non-strings)

        Returns:
            Diagnostic for INVALID_LOCALE_NAME
        """
        shown = locale if isinstance(locale, str) else repr(locale)
        return Diagnostic(
            code=DiagnosticCode.INVALID_LOCALE_NAME,
            message=f"Wrong locale name '{shown}' ({LOCALE_PATTERN})",
            hint="Use 'language' or 'language-region', e.g. 'en' or 'en-us'",
        )

    @staticmethod
    def not_initialized() -> Diagnostic:
        """Lookup attempted before the first successful rebuild."""
        return Diagnostic(
            code=DiagnosticCode.NOT_INITIALIZED,
            message="Localization store is not initialized yet",
            hint="Wait for the loaded event or call wait_until_ready() before serving lookups",
        )

    # ------------------------------------------------------------------
    # Merge errors and warnings
    # ------------------------------------------------------------------

    @staticmethod
    def missing_default_locale(locale: str) -> Diagnostic:
        """Default locale has no (or an empty) combined dictionary.

        Args:
            locale: The configured default locale

        Returns:
            Diagnostic for MISSING_DEFAULT_LOCALE
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_DEFAULT_LOCALE,
            message=f"Can not load default locale '{locale}'",
            hint="Provide a non-empty dictionary for the default locale in the application sources",
            locale=locale,
        )

    @staticmethod
    def duplicate_key(key: str, locale: str, source: str, previous_source: str) -> Diagnostic:
        """Key redefined by a later source (non-fatal)."""
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_KEY,
            message=(
                f"Localization key '{key}' was defined again and overridden "
                f"in locale '{locale}'"
            ),
            hint=f"Previously defined by '{previous_source}'",
            locale=locale,
            key=key,
            source=source,
            severity="warning",
        )

    @staticmethod
    def invalid_source_locale(locale: object, source: str) -> Diagnostic:
        """Raw dictionary declared under an invalid locale name (skipped)."""
        shown = locale if isinstance(locale, str) else repr(locale)
        return Diagnostic(
            code=DiagnosticCode.INVALID_SOURCE_LOCALE,
            message=f"Wrong localization locale '{shown}', skipped ({LOCALE_PATTERN})",
            source=source,
            severity="warning",
        )

    @staticmethod
    def invalid_entry_value(key: str, locale: str, source: str, value: object) -> Diagnostic:
        """Entry value is neither a string nor a sequence of strings (skipped)."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_ENTRY_VALUE,
            message=(
                f"Localization key '{key}' has unsupported value type "
                f"{type(value).__name__}, skipped"
            ),
            hint="Values must be strings or arrays of plural form strings",
            locale=locale,
            key=key,
            source=source,
            severity="warning",
        )

    @staticmethod
    def invalid_dictionary(locale: str, source: str, value: object) -> Diagnostic:
        """Raw dictionary is not a key/value mapping (skipped)."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_DICTIONARY,
            message=(
                f"Localization dictionary for locale '{locale}' is a "
                f"{type(value).__name__}, not an object; skipped"
            ),
            locale=locale,
            source=source,
            severity="warning",
        )

    @staticmethod
    def invalid_pluralization_descriptor(locale: str, source: str) -> Diagnostic:
        """Reserved pluralization key holds something other than {"rule": str}."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURALIZATION_DESCRIPTOR,
            message=f"Ignoring malformed '{PLURALIZATION_KEY}' data in locale '{locale}'",
            hint=f'Expected an object of the form {{"rule": "<expression over {RULE_VARIABLE}>"}}',
            locale=locale,
            source=source,
            severity="warning",
        )

    @staticmethod
    def plural_form_count_mismatch(
        key: str, locale: str, expression: str, available: int, required: int
    ) -> Diagnostic:
        """Plural form array is shorter than the indices its rule can select."""
        return Diagnostic(
            code=DiagnosticCode.PLURAL_FORM_COUNT_MISMATCH,
            message=(
                f"Key '{key}' in locale '{locale}' has {available} plural form(s) "
                f"but its rule selects up to {required}"
            ),
            hint="Counts selecting a missing form resolve to the missing-value placeholder",
            locale=locale,
            key=key,
            expression=expression,
            severity="warning",
        )

    # ------------------------------------------------------------------
    # Plural rule syntax errors
    # ------------------------------------------------------------------

    @staticmethod
    def rule_empty(expression: str) -> Diagnostic:
        """Plural rule expression contains no tokens."""
        return Diagnostic(
            code=DiagnosticCode.RULE_EMPTY,
            message="Plural rule expression is empty",
            hint="Use '0' for languages with a single form",
            expression=expression,
            position=0,
        )

    @staticmethod
    def rule_unexpected_character(expression: str, char: str, position: int) -> Diagnostic:
        """Character that starts no token of the rule grammar."""
        return Diagnostic(
            code=DiagnosticCode.RULE_UNEXPECTED_CHARACTER,
            message=f"Unexpected character {char!r} in plural rule",
            hint="Rules support integers, n, %, comparisons, &&, ||, !, ?: and parentheses",
            expression=expression,
            position=position,
        )

    @staticmethod
    def rule_unexpected_token(expression: str, token: str, position: int) -> Diagnostic:
        """Token in a position the grammar does not allow."""
        return Diagnostic(
            code=DiagnosticCode.RULE_UNEXPECTED_TOKEN,
            message=f"Unexpected '{token}' in plural rule",
            hint="Check operator placement and parentheses",
            expression=expression,
            position=position,
        )

    @staticmethod
    def rule_unexpected_eof(expression: str, expected: str) -> Diagnostic:
        """Expression ended while more input was required."""
        return Diagnostic(
            code=DiagnosticCode.RULE_UNEXPECTED_EOF,
            message=f"Unexpected end of plural rule, expected {expected}",
            expression=expression,
            position=len(expression),
        )

    @staticmethod
    def rule_unknown_identifier(expression: str, name: str, position: int) -> Diagnostic:
        """Identifier other than the count variable."""
        return Diagnostic(
            code=DiagnosticCode.RULE_UNKNOWN_IDENTIFIER,
            message=f"Unknown identifier '{name}' in plural rule",
            hint=f"Plural rules may only reference the count variable '{RULE_VARIABLE}'",
            expression=expression,
            position=position,
        )

    @staticmethod
    def rule_division_by_zero(expression: str, position: int) -> Diagnostic:
        """Literal modulo by zero."""
        return Diagnostic(
            code=DiagnosticCode.RULE_DIVISION_BY_ZERO,
            message="Modulo by zero in plural rule",
            expression=expression,
            position=position,
        )

    @staticmethod
    def rule_nesting_depth_exceeded(expression: str, max_depth: int, position: int) -> Diagnostic:
        """Expression nests deeper than the parser allows."""
        return Diagnostic(
            code=DiagnosticCode.RULE_NESTING_DEPTH_EXCEEDED,
            message=f"Plural rule nesting exceeds maximum depth ({max_depth})",
            hint="Flatten the expression; real plural rules nest only a few levels",
            expression=expression,
            position=position,
        )

    @staticmethod
    def rule_literal_too_long(expression: str, max_digits: int, position: int) -> Diagnostic:
        """Integer literal has more digits than the parser accepts."""
        return Diagnostic(
            code=DiagnosticCode.RULE_LITERAL_TOO_LONG,
            message=f"Integer literal in plural rule exceeds {max_digits} digits",
            expression=expression,
            position=position,
        )

    # ------------------------------------------------------------------
    # Configuration and source errors
    # ------------------------------------------------------------------

    @staticmethod
    def config_section_missing(section: str) -> Diagnostic:
        """Required configuration section or value is absent."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_SECTION_MISSING,
            message=f"'{section}' config section is required",
        )

    @staticmethod
    def config_invalid_value(name: str, value: object, expected: str) -> Diagnostic:
        """Configuration value has the wrong type or range."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID_VALUE,
            message=f"Invalid configuration value for '{name}': {value!r} (expected {expected})",
        )

    @staticmethod
    def source_collection_failed(error: BaseException) -> Diagnostic:
        """Dictionary source raised while collecting raw dictionaries."""
        return Diagnostic(
            code=DiagnosticCode.SOURCE_COLLECTION_FAILED,
            message=f"Collecting localization sources failed: {type(error).__name__}: {error}",
        )
