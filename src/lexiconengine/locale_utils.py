"""Locale identifier utilities.

Centralizes locale normalization and fallback-chain construction used
throughout the codebase. All locale handling normalizes at the system
boundary (entry point) with normalize_locale(), then uses the normalized
form for dictionary keys and lookups.

Locale identifiers are ``language`` or ``language-region`` (two ASCII
letters each), case-insensitive, always stored lowercase: ``en``, ``en-us``.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from lexiconengine.constants import LOCALE_REGEXP, MAX_LOCALE_CACHE_SIZE
from lexiconengine.diagnostics import ErrorTemplate, InvalidLocaleNameError

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "LocaleId",
    "fallback_chain",
    "get_babel_locale",
    "is_valid_locale",
    "normalize_locale",
    "primary_subtag",
]

type LocaleId = str
"""Normalized locale identifier (e.g., 'en', 'en-us')."""


def normalize_locale(locale_code: object) -> LocaleId:
    """Normalize a locale identifier to its canonical lowercase form.

    Args:
        locale_code: Candidate identifier (e.g., "EN-us", "ru")

    Returns:
        Lowercase identifier (e.g., "en-us", "ru")

    Raises:
        InvalidLocaleNameError: If input is not a string or does not match
            ``language`` / ``language-region`` after lowercasing. Input is
            never silently coerced: "en_US" and " en" are rejected.

    Example:
        >>> normalize_locale("EN-US")
        'en-us'
        >>> normalize_locale("en_US")
        Traceback (most recent call last):
        ...
        lexiconengine.diagnostics.errors.InvalidLocaleNameError: Wrong locale name 'en_US' ...
    """
    if not isinstance(locale_code, str):
        raise InvalidLocaleNameError(
            ErrorTemplate.invalid_locale_name(locale_code), locale=locale_code
        )
    normalized = locale_code.lower()
    # isascii: lower() folds some non-ASCII letters into ASCII (KELVIN SIGN -> "k").
    # fullmatch: "$" alone would accept a trailing newline
    if not locale_code.isascii() or LOCALE_REGEXP.fullmatch(normalized) is None:
        raise InvalidLocaleNameError(
            ErrorTemplate.invalid_locale_name(locale_code), locale=locale_code
        )
    return normalized


def is_valid_locale(locale_code: object) -> bool:
    """Check whether input normalizes to a valid locale identifier."""
    return (
        isinstance(locale_code, str)
        and locale_code.isascii()
        and LOCALE_REGEXP.fullmatch(locale_code.lower()) is not None
    )


def primary_subtag(locale: LocaleId) -> str:
    """Return the language portion of a normalized locale identifier.

    Example:
        >>> primary_subtag("en-gb")
        'en'
        >>> primary_subtag("ru")
        'ru'
    """
    return locale.split("-", 1)[0]


def fallback_chain(locale: LocaleId) -> tuple[LocaleId, ...]:
    """Return the lookup order for a normalized locale identifier.

    Consumers try each element in order, then the configured default locale.

    Example:
        >>> fallback_chain("en-gb")
        ('en-gb', 'en')
        >>> fallback_chain("en")
        ('en',)
    """
    primary = primary_subtag(locale)
    if primary == locale:
        return (locale,)
    return (locale, primary)


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale: LocaleId) -> Locale | None:
    """Get the Babel Locale for a normalized identifier, cached.

    Used by the CLDR plural rule audit only. Unknown locales are cached as
    None as well.

    Returns:
        Babel Locale, or None when CLDR has no data for the locale

    Raises:
        BabelImportError: If Babel is not installed
    """
    from lexiconengine.core.babel_compat import load_cldr_locale  # noqa: PLC0415

    return load_cldr_locale(locale)
