"""Tests for locale_utils: normalization, validation and fallback chains.

Includes property-based tests with Hypothesis for locale normalization.

Python 3.13+.
"""

import pytest
from hypothesis import event, given

from lexiconengine.diagnostics import DiagnosticCode, InvalidLocaleNameError
from lexiconengine.locale_utils import (
    fallback_chain,
    get_babel_locale,
    is_valid_locale,
    normalize_locale,
    primary_subtag,
)
from tests.strategies import invalid_locale_ids, locale_ids, mixed_case_locale_ids


class TestNormalizeLocale:
    """Test normalize_locale function.

    Locale identifiers are case-insensitive and stored lowercase.
    """

    def test_language_only(self) -> None:
        """Plain language code is returned unchanged."""
        assert normalize_locale("ru") == "ru"

    def test_uppercase_input_lowercased(self) -> None:
        """Uppercase input is lowercased."""
        assert normalize_locale("EN-US") == "en-us"

    def test_mixed_case_region(self) -> None:
        """Mixed-case language-region is lowercased."""
        assert normalize_locale("pt-PT") == "pt-pt"

    @pytest.mark.parametrize(
        "value",
        ["", "e", "eng", "en_US", "en-", "-us", " en", "en ", "en-usa", "en\n", "12", "en-u1"],
    )
    def test_malformed_rejected(self, value: str) -> None:
        """Malformed identifiers raise InvalidLocaleNameError, never coerced."""
        with pytest.raises(InvalidLocaleNameError) as exc_info:
            normalize_locale(value)
        assert exc_info.value.locale == value
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.INVALID_LOCALE_NAME

    @pytest.mark.parametrize("value", [None, 42, b"en", ["en"]])
    def test_non_string_rejected(self, value: object) -> None:
        """Non-string input raises InvalidLocaleNameError."""
        with pytest.raises(InvalidLocaleNameError):
            normalize_locale(value)

    @pytest.mark.parametrize("value", ["\u212aa", "e\u212a", "\u0130t", "en-\u212ar"])
    def test_non_ascii_case_folding_rejected(self, value: str) -> None:
        """Letters that lowercase into ASCII (KELVIN SIGN) are not locale letters."""
        with pytest.raises(InvalidLocaleNameError) as exc_info:
            normalize_locale(value)
        assert exc_info.value.locale == value
        assert not is_valid_locale(value)

    def test_error_is_value_error(self) -> None:
        """InvalidLocaleNameError is catchable as ValueError."""
        with pytest.raises(ValueError, match="Wrong locale name 'en_US'"):
            normalize_locale("en_US")

    @given(locale=mixed_case_locale_ids())
    def test_normalization_is_lowercase_and_idempotent(self, locale: str) -> None:
        """PROPERTY: normalize(normalize(x)) == normalize(x) == x.lower()."""
        normalized = normalize_locale(locale)
        event(f"has_region={'-' in normalized}")
        assert normalized == locale.lower()
        assert normalize_locale(normalized) == normalized

    @given(value=invalid_locale_ids())
    def test_invalid_always_raises(self, value: str) -> None:
        """PROPERTY: every string outside the grammar is rejected."""
        with pytest.raises(InvalidLocaleNameError):
            normalize_locale(value)


class TestIsValidLocale:
    """Test is_valid_locale predicate."""

    def test_valid(self) -> None:
        """Well-formed identifiers are valid regardless of case."""
        assert is_valid_locale("en")
        assert is_valid_locale("EN-gb")

    def test_invalid(self) -> None:
        """Malformed and non-string input is invalid."""
        assert not is_valid_locale("en_GB")
        assert not is_valid_locale(None)
        assert not is_valid_locale("\u212aa")

    @given(locale=locale_ids())
    def test_agrees_with_normalize(self, locale: str) -> None:
        """PROPERTY: valid identifiers normalize without raising."""
        assert is_valid_locale(locale)
        assert normalize_locale(locale) == locale


class TestFallbackChain:
    """Test primary_subtag and fallback_chain."""

    def test_primary_subtag(self) -> None:
        """Language portion is everything before the hyphen."""
        assert primary_subtag("en-gb") == "en"
        assert primary_subtag("ru") == "ru"

    def test_region_falls_back_to_language(self) -> None:
        """Regional locale tries itself, then the bare language."""
        assert fallback_chain("en-gb") == ("en-gb", "en")

    def test_language_only_chain(self) -> None:
        """Bare language has a single-element chain."""
        assert fallback_chain("de") == ("de",)

    @given(locale=locale_ids())
    def test_chain_starts_with_locale(self, locale: str) -> None:
        """PROPERTY: chain begins with the locale and ends with its language."""
        chain = fallback_chain(locale)
        event(f"chain_length={len(chain)}")
        assert chain[0] == locale
        assert chain[-1] == primary_subtag(locale)


class TestGetBabelLocale:
    """Test get_babel_locale (requires Babel)."""

    def test_returns_babel_locale(self) -> None:
        """Hyphenated lowercase identifier parses into a Babel Locale."""
        pytest.importorskip("babel")
        locale = get_babel_locale("en-us")
        assert locale.language == "en"
        assert locale.territory == "US"

    def test_cached(self) -> None:
        """Repeated calls return the same cached object."""
        pytest.importorskip("babel")
        assert get_babel_locale("ru") is get_babel_locale("ru")

    def test_unknown_locale(self) -> None:
        """Locales without CLDR data return None."""
        pytest.importorskip("babel")
        assert get_babel_locale("xx-yy") is None
