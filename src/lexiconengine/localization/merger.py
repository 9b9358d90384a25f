"""Multi-source dictionary merge.

Turns the ordered raw dictionaries collected from the application root and
its components into one fallback-complete dictionary per locale.

Algorithm:
    1. Combine each locale's raw dictionaries in discovery order. Later
       sources overwrite earlier ones; every overwrite is recorded as a
       DuplicateKeyWarning.
    2. Let D be the default locale's combined dictionary. Every other
       locale's merged dictionary is D overlaid by that locale's combined
       dictionary C. Array-valued keys of D absent from C are inherited:
       they keep the default locale's forms and therefore its plural rule.
    3. Attach a pluralization descriptor: the default locale gets its rule
       only; other locales get their rule, the default rule and the
       inherited keys.

merge() is pure: inputs are never mutated and provenance is returned as a
value on each MergedDictionary. Same input, same output.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from lexiconengine.constants import PLURALIZATION_KEY
from lexiconengine.diagnostics import (
    Diagnostic,
    DuplicateKeyWarning,
    ErrorTemplate,
    MissingDefaultLocaleError,
)
from lexiconengine.locale_utils import LocaleId, is_valid_locale, normalize_locale
from lexiconengine.runtime.plural_rules import rule_for

from .types import LocalizationKey, LocalizedValue, SourceId

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lexiconengine.runtime.plural_engine import PluralRuleEngine

    from .loading import RawDictionary

__all__ = ["MergeResult", "MergedDictionary", "PluralizationInfo", "freeze_value", "merge"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PluralizationInfo:
    """Pluralization descriptor of a merged dictionary.

    Attributes:
        rule: This locale's plural rule expression
        default_rule: The default locale's rule (None for the default locale)
        inherited_keys: Keys whose plural forms came from the default locale
    """

    rule: str
    default_rule: str | None = None
    inherited_keys: frozenset[LocalizationKey] = frozenset()

    def rule_for_key(self, key: LocalizationKey) -> str:
        """Rule that selects forms for a key: inherited keys use the default rule."""
        if self.default_rule is not None and key in self.inherited_keys:
            return self.default_rule
        return self.rule

    def to_dict(self) -> dict[str, object]:
        """Serializable form with stable ordering (inheritedKeys sorted)."""
        if self.default_rule is None:
            return {"rule": self.rule}
        return {
            "rule": self.rule,
            "defaultRule": self.default_rule,
            "inheritedKeys": sorted(self.inherited_keys),
        }


class MergedDictionary(Mapping[LocalizationKey, LocalizedValue]):
    """Immutable, fallback-complete dictionary for one locale.

    Behaves as a read-only mapping of key -> value and carries the locale
    and its pluralization descriptor.

    Example:
        >>> d = MergedDictionary("en", {"APPLE": ("apple", "apples")}, PluralizationInfo("(n != 1)"))
        >>> d["APPLE"], d.pluralization.rule
        (('apple', 'apples'), '(n != 1)')
    """

    __slots__ = ("_entries", "_locale", "_pluralization")

    def __init__(
        self,
        locale: LocaleId,
        entries: Mapping[LocalizationKey, LocalizedValue],
        pluralization: PluralizationInfo,
    ) -> None:
        self._locale = locale
        self._entries: Mapping[LocalizationKey, LocalizedValue] = MappingProxyType(dict(entries))
        self._pluralization = pluralization

    @property
    def locale(self) -> LocaleId:
        """Locale this dictionary was merged for."""
        return self._locale

    @property
    def pluralization(self) -> PluralizationInfo:
        """Pluralization descriptor."""
        return self._pluralization

    @property
    def inherited_keys(self) -> frozenset[LocalizationKey]:
        """Keys whose plural forms were taken from the default locale."""
        return self._pluralization.inherited_keys

    def __getitem__(self, key: LocalizationKey) -> LocalizedValue:
        return self._entries[key]

    def __iter__(self) -> Iterator[LocalizationKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MergedDictionary):
            return (
                self._locale == other._locale
                and self._pluralization == other._pluralization
                and dict(self._entries) == dict(other._entries)
            )
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"MergedDictionary(locale={self._locale!r}, keys={len(self._entries)}, "
            f"rule={self._pluralization.rule!r})"
        )


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Outcome of a successful merge.

    Attributes:
        default_locale: Normalized default locale
        dictionaries: Locale -> merged dictionary (default locale first)
        duplicates: Every key overwrite, in discovery order
        diagnostics: Non-fatal problems (duplicates, skipped input)
    """

    default_locale: LocaleId
    dictionaries: Mapping[LocaleId, MergedDictionary]
    duplicates: tuple[DuplicateKeyWarning, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def default(self) -> MergedDictionary:
        """The default locale's merged dictionary."""
        return self.dictionaries[self.default_locale]

    @property
    def locales(self) -> tuple[LocaleId, ...]:
        """Merged locales in merge order."""
        return tuple(self.dictionaries)


def freeze_value(value: object) -> LocalizedValue | None:
    """Validate and freeze a raw value.

    Returns:
        The string, a tuple of plural forms, or None if the value is neither
        a string nor a sequence of strings

    Example:
        >>> freeze_value(["one", "many"])
        ('one', 'many')
        >>> freeze_value(3) is None
        True
    """
    if isinstance(value, str):
        return value
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        if all(isinstance(form, str) for form in value):
            return tuple(value)
    return None


class _Combiner:
    """Per-merge accumulator for step 1 (combine by locale)."""

    __slots__ = ("combined", "data_rule", "default_locale", "diagnostics", "duplicates", "origins")

    def __init__(self, default_locale: LocaleId) -> None:
        self.default_locale = default_locale
        self.combined: dict[LocaleId, dict[LocalizationKey, LocalizedValue]] = {}
        self.origins: dict[LocaleId, dict[LocalizationKey, SourceId]] = {}
        self.duplicates: list[DuplicateKeyWarning] = []
        self.diagnostics: list[Diagnostic] = []
        self.data_rule: str | None = None

    def _report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        logger.warning("%s", diagnostic.message)

    def add(self, raw: RawDictionary) -> None:
        if not is_valid_locale(raw.locale):
            self._report(ErrorTemplate.invalid_source_locale(raw.locale, raw.source))
            return
        locale = normalize_locale(raw.locale)
        if not isinstance(raw.entries, Mapping):
            self._report(ErrorTemplate.invalid_dictionary(locale, raw.source, raw.entries))
            return

        target = self.combined.setdefault(locale, {})
        origins = self.origins.setdefault(locale, {})
        for key, value in raw.entries.items():
            if key == PLURALIZATION_KEY:
                self._take_descriptor(locale, raw.source, value)
                continue
            frozen = freeze_value(value)
            if not isinstance(key, str) or frozen is None:
                self._report(ErrorTemplate.invalid_entry_value(str(key), locale, raw.source, value))
                continue
            if key in target:
                self._record_duplicate(key, locale, raw.source, origins[key])
            target[key] = frozen
            origins[key] = raw.source

    def _record_duplicate(
        self, key: LocalizationKey, locale: LocaleId, source: SourceId, previous: SourceId
    ) -> None:
        self.duplicates.append(DuplicateKeyWarning(key, locale, source, previous))
        diagnostic = ErrorTemplate.duplicate_key(key, locale, source, previous)
        self.diagnostics.append(diagnostic)
        logger.warning(
            'Localization key "%s" was defined again and overridden in locale "%s" (%s over %s)',
            key,
            locale,
            source,
            previous,
        )

    def _take_descriptor(self, locale: LocaleId, source: SourceId, value: object) -> None:
        if locale != self.default_locale:
            logger.debug("Ignoring %s data in non-default locale %s", PLURALIZATION_KEY, locale)
            return
        rule = value.get("rule") if isinstance(value, Mapping) else None
        if not isinstance(rule, str):
            self._report(ErrorTemplate.invalid_pluralization_descriptor(locale, source))
            return
        self.data_rule = rule


def merge(
    default_locale: str,
    raw_dictionaries: Iterable[RawDictionary],
    engine: PluralRuleEngine | None = None,
) -> MergeResult:
    """Merge raw dictionaries into one fallback-complete dictionary per locale.

    Args:
        default_locale: Configured default locale (any case)
        raw_dictionaries: Raw dictionaries in discovery order
        engine: Rule lookup to use (defaults to the built-in table)

    Returns:
        MergeResult with the merged dictionaries and non-fatal findings

    Raises:
        InvalidLocaleNameError: If default_locale is malformed
        MissingDefaultLocaleError: If the default locale has no entries

    Example:
        >>> from lexiconengine.localization.loading import RawDictionary
        >>> result = merge("ru", [
        ...     RawDictionary("ru", "<application>", {"THIRD": "ru third"}),
        ...     RawDictionary("en", "a", {"FIRST": "en first"}),
        ... ])
        >>> dict(result.dictionaries["en"])
        {'THIRD': 'ru third', 'FIRST': 'en first'}
    """
    default = normalize_locale(default_locale)
    combiner = _Combiner(default)
    for raw in raw_dictionaries:
        combiner.add(raw)

    base = combiner.combined.get(default)
    if not base:
        logger.error("Can not load default locale %s", default)
        raise MissingDefaultLocaleError(ErrorTemplate.missing_default_locale(default), locale=default)

    lookup = engine.rule_for if engine is not None else rule_for
    default_rule = combiner.data_rule if combiner.data_rule is not None else lookup(default)
    plural_keys = [key for key, value in base.items() if isinstance(value, tuple)]

    dictionaries: dict[LocaleId, MergedDictionary] = {
        default: MergedDictionary(default, base, PluralizationInfo(default_rule)),
    }
    for locale, own in combiner.combined.items():
        if locale == default:
            continue
        inherited = frozenset(key for key in plural_keys if key not in own)
        descriptor = PluralizationInfo(lookup(locale), default_rule, inherited)
        dictionaries[locale] = MergedDictionary(locale, {**base, **own}, descriptor)

    return MergeResult(
        default_locale=default,
        dictionaries=MappingProxyType(dictionaries),
        duplicates=tuple(combiner.duplicates),
        diagnostics=tuple(combiner.diagnostics),
    )
