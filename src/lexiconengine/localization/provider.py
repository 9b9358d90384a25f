"""Query surface: plain and pluralized lookup.

LocalizationProvider answers get() and pluralize() from the store's current
snapshot and the plural rule engine. Both are pure reads: they never trigger
a rebuild and never take a lock.

Missing values:
    A missing key, an empty string value, an empty form array, a malformed
    rule and a rule selecting an index outside the form array all resolve
    to the same missing-value policy: "" by default, or the key itself when
    the placeholder flag is set.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lexiconengine.locale_utils import LocaleId, normalize_locale

if TYPE_CHECKING:
    from lexiconengine.runtime.plural_engine import PluralRuleEngine

    from .merger import MergedDictionary
    from .store import LocalizationStore

__all__ = ["LocalizationProvider"]

logger = logging.getLogger(__name__)


class LocalizationProvider:
    """Plain and pluralized lookup over a LocalizationStore.

    Example:
        >>> provider = LocalizationProvider(store, engine)
        >>> provider.pluralize("ru", "APPLE", 5)
        'яблок'
    """

    __slots__ = ("_engine", "_placeholder", "_store")

    def __init__(
        self,
        store: LocalizationStore,
        engine: PluralRuleEngine,
        *,
        placeholder: bool = False,
    ) -> None:
        """Initialize provider.

        Args:
            store: Source of merged dictionaries
            engine: Plural rule engine (compiled rule cache owner)
            placeholder: Return the key instead of "" for missing values
        """
        self._store = store
        self._engine = engine
        self._placeholder = placeholder

    @property
    def placeholder(self) -> bool:
        """Whether missing values render as their key."""
        return self._placeholder

    def _missing(self, key: str) -> str:
        return key if self._placeholder else ""

    def get(self, locale: str | None, key: str) -> str:
        """Look up a localized string.

        Plural form arrays yield their first form.

        Raises:
            InvalidLocaleNameError: If the locale identifier is malformed
            NotInitializedError: If no rebuild has been committed yet

        Example:
            >>> provider.get("en-us", "MISSING_KEY")
            ''
        """
        return self._plain(self._store.resolve(locale), key)

    def _plain(self, dictionary: MergedDictionary, key: str) -> str:
        value = dictionary.get(key)
        if isinstance(value, tuple):
            value = value[0] if value else None
        if not value:
            logger.debug("Key %s missing in locale %s", key, dictionary.locale)
            return self._missing(key)
        return value

    def pluralize(self, locale: str | None, key: str, count: object) -> str:
        """Look up the plural form of a key for a count.

        Non-array values behave as get() and ignore the count. Inherited
        keys (forms copied from the default locale) select with the default
        locale's rule; all other keys use the locale's own rule.

        Raises:
            InvalidLocaleNameError: If the locale identifier is malformed
            NotInitializedError: If no rebuild has been committed yet
        """
        dictionary = self._store.resolve(locale)
        forms = dictionary.get(key)
        if not isinstance(forms, tuple):
            return self._plain(dictionary, key)

        expression = dictionary.pluralization.rule_for_key(key)
        form = self._engine.select(expression, count, forms)
        if not form:
            logger.debug(
                "No plural form of %s for count %r in locale %s", key, count, dictionary.locale
            )
            return self._missing(key)
        return form

    def current_locale(self, preferred: str | None = None) -> LocaleId:
        """Pick the locale to serve: the preferred one if given, else the default.

        Raises:
            InvalidLocaleNameError: If preferred is given but malformed
        """
        if not preferred:
            return self._store.default_locale
        return normalize_locale(preferred)
