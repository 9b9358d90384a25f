"""Tests for LocalizationProvider: get, pluralize and current_locale.

Python 3.13+.
"""

from decimal import Decimal

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from lexiconengine.constants import APPLICATION_SOURCE
from lexiconengine.diagnostics import InvalidLocaleNameError, NotInitializedError
from lexiconengine.localization import (
    LocalizationProvider,
    LocalizationStore,
    MappingDictionarySource,
    RawDictionary,
)
from lexiconengine.runtime import PluralRuleEngine, compile_rule, rule_for
from tests.strategies import RU_APPLE_FORMS, counts, locale_ids, localization_keys

EN_APPLE_FORMS = ("apple", "apples")


def _provider(
    raws: list[RawDictionary], *, placeholder: bool = False, default_locale: str = "ru"
) -> LocalizationProvider:
    engine = PluralRuleEngine()
    store = LocalizationStore(default_locale, engine)
    assert store.rebuild(raws).is_success
    return LocalizationProvider(store, engine, placeholder=placeholder)


@pytest.fixture
def provider(scenario_source: MappingDictionarySource) -> LocalizationProvider:
    """Provider over the scenario sources, placeholder off."""
    return _provider(list(scenario_source.collect()))


class TestGet:
    """Test plain lookups."""

    def test_locale_value(self, provider: LocalizationProvider) -> None:
        """Keys defined for a locale return its value."""
        assert provider.get("en", "FIRST") == "en first B"

    def test_inherited_value(self, provider: LocalizationProvider) -> None:
        """Keys absent from a locale come from the default locale."""
        assert provider.get("en", "THIRD") == "ru third"

    def test_regional_fallback(self, provider: LocalizationProvider) -> None:
        """Regional locales fall back to their language."""
        assert provider.get("en-gb", "SECOND") == "en second"

    def test_unmerged_locale_uses_default(self, provider: LocalizationProvider) -> None:
        """Unknown locales read the default dictionary."""
        assert provider.get("de", "THIRD") == "ru third"
        assert provider.get("de", "FIRST") == ""

    def test_array_returns_first_form(self, provider: LocalizationProvider) -> None:
        """Plural arrays yield their first form for plain lookups."""
        assert provider.get("ru", "APPLE") == "яблоко"

    def test_missing_key_empty(self, provider: LocalizationProvider) -> None:
        """Missing keys render as "" with the placeholder flag off."""
        assert provider.get("en-us", "MISSING_KEY") == ""

    def test_missing_key_placeholder(self, scenario_source: MappingDictionarySource) -> None:
        """Missing keys render as the key with the placeholder flag on."""
        provider = _provider(list(scenario_source.collect()), placeholder=True)
        assert provider.placeholder
        assert provider.get("en-us", "MISSING_KEY") == "MISSING_KEY"

    def test_empty_values_are_missing(self) -> None:
        """Empty strings and empty arrays count as missing."""
        provider = _provider(
            [RawDictionary("ru", APPLICATION_SOURCE, {"A": "", "B": [], "C": "c"})],
            placeholder=True,
        )
        assert provider.get("ru", "A") == "A"
        assert provider.get("ru", "B") == "B"

    def test_invalid_locale_raises(self, provider: LocalizationProvider) -> None:
        """Malformed locales are the only caller error."""
        with pytest.raises(InvalidLocaleNameError):
            provider.get("en_GB", "FIRST")

    def test_not_initialized(self) -> None:
        """Lookups before the first commit raise NotInitializedError."""
        engine = PluralRuleEngine()
        provider = LocalizationProvider(LocalizationStore("ru", engine), engine)
        with pytest.raises(NotInitializedError):
            provider.get("ru", "A")


class TestPluralize:
    """Test plural form selection."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(1, "яблоко"), (2, "яблока"), (5, "яблок"), (21, "яблоко"), (12, "яблок")],
    )
    def test_russian(self, provider: LocalizationProvider, count: int, expected: str) -> None:
        """Russian forms follow the Russian rule."""
        assert provider.pluralize("ru", "APPLE", count) == expected

    def test_own_array_uses_own_rule(self) -> None:
        """A locale's own array selects with its own rule."""
        provider = _provider(
            [
                RawDictionary("ru", APPLICATION_SOURCE, {"APPLE": list(RU_APPLE_FORMS)}),
                RawDictionary("en", APPLICATION_SOURCE, {"APPLE": list(EN_APPLE_FORMS)}),
            ]
        )
        assert provider.pluralize("en", "APPLE", 1) == "apple"
        assert provider.pluralize("en", "APPLE", 5) == "apples"
        assert provider.pluralize("en-au", "APPLE", 0) == "apples"

    def test_inherited_array_uses_default_rule(self, provider: LocalizationProvider) -> None:
        """Forms inherited from ru select with the Russian rule in en."""
        assert provider.pluralize("en", "APPLE", 2) == "яблока"
        assert provider.pluralize("en", "APPLE", 5) == "яблок"

    def test_plain_value_ignores_count(self, provider: LocalizationProvider) -> None:
        """Non-array values behave as get()."""
        assert provider.pluralize("en", "FIRST", 5) == "en first B"

    def test_missing_key(self, provider: LocalizationProvider) -> None:
        """Missing keys follow the missing-value policy."""
        assert provider.pluralize("en", "MISSING_KEY", 2) == ""

    def test_out_of_range_is_missing(self) -> None:
        """An index beyond the array follows the missing-value policy."""
        raws = [RawDictionary("ru", APPLICATION_SOURCE, {"APPLE": ["яблоко", "яблока"]})]
        assert _provider(raws).pluralize("ru", "APPLE", 5) == ""
        assert _provider(raws, placeholder=True).pluralize("ru", "APPLE", 5) == "APPLE"
        assert _provider(raws).pluralize("ru", "APPLE", 2) == "яблока"

    def test_empty_form_is_missing(self) -> None:
        """An empty selected form follows the missing-value policy."""
        raws = [RawDictionary("ru", APPLICATION_SOURCE, {"APPLE": ["яблоко", "", "яблок"]})]
        assert _provider(raws, placeholder=True).pluralize("ru", "APPLE", 2) == "APPLE"

    def test_fractional_count_is_missing(self, provider: LocalizationProvider) -> None:
        """Counts that are not whole numbers select no form."""
        assert provider.pluralize("ru", "APPLE", 1.5) == ""

    def test_negative_count(self, provider: LocalizationProvider) -> None:
        """Negative counts select like their absolute value."""
        assert provider.pluralize("ru", "APPLE", -2) == "яблока"

    def test_broken_data_rule_degrades(self) -> None:
        """A malformed default-locale rule makes pluralization missing, not fatal."""
        provider = _provider(
            [
                RawDictionary(
                    "ru",
                    APPLICATION_SOURCE,
                    {"APPLE": list(RU_APPLE_FORMS), "A": "a", "$pluralization": {"rule": "n ="}},
                )
            ],
            placeholder=True,
        )
        assert provider.pluralize("ru", "APPLE", 1) == "APPLE"
        assert provider.get("ru", "A") == "a"

    def test_overlong_literal_rule_degrades(self) -> None:
        """A rule literal too long for int() degrades like any other rule error."""
        rule = "n > " + "1" * 5000 + " ? 1 : 0"
        assert PluralRuleEngine().select(rule, 2, RU_APPLE_FORMS) is None
        provider = _provider(
            [
                RawDictionary(
                    "ru",
                    APPLICATION_SOURCE,
                    {"APPLE": list(RU_APPLE_FORMS), "$pluralization": {"rule": rule}},
                )
            ]
        )
        assert provider.pluralize("ru", "APPLE", 2) == ""

    def test_invalid_locale_raises(self, provider: LocalizationProvider) -> None:
        """Malformed locales raise."""
        with pytest.raises(InvalidLocaleNameError):
            provider.pluralize("RUS", "APPLE", 1)


class TestCurrentLocale:
    """Test current_locale selection."""

    @pytest.mark.parametrize("preferred", [None, ""])
    def test_default(self, provider: LocalizationProvider, preferred: str | None) -> None:
        """No preference selects the default locale."""
        assert provider.current_locale(preferred) == "ru"

    def test_preferred_normalized(self, provider: LocalizationProvider) -> None:
        """A preference is normalized, not resolved."""
        assert provider.current_locale("EN-GB") == "en-gb"

    def test_preferred_malformed(self, provider: LocalizationProvider) -> None:
        """A malformed preference raises."""
        with pytest.raises(InvalidLocaleNameError):
            provider.current_locale("en_GB")


class TestProviderProperties:
    """Property-based lookup invariants."""

    @given(locale=locale_ids(), key=localization_keys())
    def test_default_keys_visible_everywhere(self, locale: str, key: str) -> None:
        """PROPERTY: a key only in the default locale reads the same in any locale."""
        provider = _provider(
            [
                RawDictionary("ru", APPLICATION_SOURCE, {key: "default value"}),
                RawDictionary("en", APPLICATION_SOURCE, {f"{key}_EN": "en value"}),
            ]
        )
        event(f"locale_merged={locale in ('ru', 'en')}")
        assert provider.get(locale, key) == provider.get("ru", key) == "default value"

    @given(locale=locale_ids(), count=counts())
    def test_inherited_forms_use_default_rule(
        self, locale: str, count: int | float | Decimal
    ) -> None:
        """PROPERTY: inherited arrays select with the default locale's rule."""
        provider = _provider(
            [
                RawDictionary("ru", APPLICATION_SOURCE, {"APPLE": list(RU_APPLE_FORMS)}),
                RawDictionary(locale, "component", {"OTHER": "x"}),
            ]
        )
        expected = compile_rule(rule_for("ru"))(abs(int(count)), RU_APPLE_FORMS)
        event(f"form={expected}")
        assert provider.pluralize(locale, "APPLE", count) == expected

    @given(key=localization_keys(), placeholder=st.booleans())
    def test_missing_policy(self, key: str, placeholder: bool) -> None:
        """PROPERTY: missing keys render as "" or the key, per the flag."""
        provider = _provider(
            [RawDictionary("ru", APPLICATION_SOURCE, {"PRESENT": "p"})], placeholder=placeholder
        )
        expected = key if placeholder else ""
        if key == "PRESENT":
            expected = "p"
        assert provider.get("xx", key) == expected
        assert provider.pluralize("xx", key, 3) == expected
