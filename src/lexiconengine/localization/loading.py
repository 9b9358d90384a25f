"""Dictionary source infrastructure.

Provides the protocol the engine pulls raw dictionaries through, an
in-memory implementation, and the immutable raw dictionary record.

Components:
    RawDictionary - One source's entries for one locale, pre-merge
    DictionarySource - Protocol for collecting raw dictionaries (structural typing)
    MappingDictionarySource - In-memory, mutable source list

Reading files and discovering component directories is left to the
embedding application: it implements DictionarySource (or fills a
MappingDictionarySource) and calls LocalizationEngine.notify_changed().

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from lexiconengine.constants import APPLICATION_SOURCE

from .types import RawEntries, SourceId

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Record
    "RawDictionary",
    # Protocol
    "DictionarySource",
    # Concrete source
    "MappingDictionarySource",
]


@dataclass(frozen=True, slots=True)
class RawDictionary:
    """One source's key/value mapping for one locale.

    The locale is kept as supplied; the merger validates and normalizes it
    (malformed locales are skipped with a diagnostic, not raised).

    Attributes:
        locale: Locale identifier as supplied by the source
        source: Source identity (APPLICATION_SOURCE for the application root)
        entries: Key -> string or sequence of plural forms
    """

    locale: str
    source: SourceId
    entries: RawEntries


class DictionarySource(Protocol):
    """Protocol for collecting raw dictionaries.

    collect() returns every raw dictionary in discovery order: the
    application root first, then components. Later dictionaries override
    earlier ones for the same locale and key.

    Example:
        >>> class StaticSource:
        ...     def collect(self) -> list[RawDictionary]:
        ...         return [RawDictionary("en", "<application>", {"HELLO": "Hello"})]
        ...
        >>> engine = LocalizationEngine(LocalizationConfig("en"), StaticSource())
    """

    def collect(self) -> Iterable[RawDictionary]:
        """Collect all raw dictionaries in discovery order.

        Raises:
            Exception: Any failure; the engine reports it as a failed rebuild
        """
        ...


class MappingDictionarySource:
    """In-memory DictionarySource over an ordered list of sources.

    Each source maps locale -> entries. The application source always
    comes first; components keep their discovery position when replaced
    and new components are appended.

    Thread Safety:
        Mutations and collect() are serialized on an internal lock;
        collect() works on a snapshot of the source list.

    Example:
        >>> source = MappingDictionarySource({"ru": {"THIRD": "ru third"}})
        >>> source.set_source("component-a", {"en": {"FIRST": "en first"}})
        >>> [(d.source, d.locale) for d in source.collect()]
        [('<application>', 'ru'), ('component-a', 'en')]
    """

    __slots__ = ("_lock", "_sources")

    def __init__(
        self,
        application: Mapping[str, RawEntries] | None = None,
        components: Iterable[tuple[SourceId, Mapping[str, RawEntries]]] = (),
    ) -> None:
        """Initialize source list.

        Args:
            application: Application root dictionaries (locale -> entries)
            components: Component dictionaries in discovery order
        """
        self._lock = threading.Lock()
        self._sources: dict[SourceId, Mapping[str, RawEntries]] = {}
        if application is not None:
            self._sources[APPLICATION_SOURCE] = MappingProxyType(dict(application))
        for source, dictionaries in components:
            self._sources[source] = MappingProxyType(dict(dictionaries))

    def set_source(self, source: SourceId, dictionaries: Mapping[str, RawEntries]) -> None:
        """Add a source, or replace one keeping its discovery position."""
        with self._lock:
            self._sources[source] = MappingProxyType(dict(dictionaries))

    def remove_source(self, source: SourceId) -> bool:
        """Remove a source.

        Returns:
            True if the source existed
        """
        with self._lock:
            return self._sources.pop(source, None) is not None

    @property
    def sources(self) -> tuple[SourceId, ...]:
        """Source identities in discovery order."""
        with self._lock:
            return tuple(self._ordered())

    def collect(self) -> tuple[RawDictionary, ...]:
        """Snapshot every raw dictionary in discovery order."""
        with self._lock:
            snapshot = tuple((source, self._sources[source]) for source in self._ordered())
        return tuple(self._iter_dictionaries(snapshot))

    def _ordered(self) -> list[SourceId]:
        # Caller holds the lock.
        order = [source for source in self._sources if source != APPLICATION_SOURCE]
        if APPLICATION_SOURCE in self._sources:
            order.insert(0, APPLICATION_SOURCE)
        return order

    @staticmethod
    def _iter_dictionaries(
        snapshot: tuple[tuple[SourceId, Mapping[str, RawEntries]], ...],
    ) -> Iterator[RawDictionary]:
        for source, dictionaries in snapshot:
            for locale, entries in dictionaries.items():
                yield RawDictionary(locale, source, entries)
