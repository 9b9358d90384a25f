"""Engine wiring and rebuild scheduling.

LocalizationEngine connects a DictionarySource to a LocalizationStore, a
PluralRuleEngine and a LocalizationProvider built from one
LocalizationConfig. It is what an application creates at startup.

Rebuild scheduling:
    load() performs the initial rebuild. notify_changed() is called by the
    embedding application whenever a source is added, changed or removed.
    Notifications arriving while a rebuild runs do not start a second
    merge: they set a pending flag, and the running rebuild loops once more
    with freshly collected input. At most one rebuild runs at a time and
    every notification is eventually reflected.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lexiconengine.diagnostics import ErrorTemplate, LexiconError
from lexiconengine.enums import ChangeKind, RebuildStatus
from lexiconengine.runtime.plural_engine import PluralRuleEngine

from .provider import LocalizationProvider
from .store import LocalizationStore, RebuildSummary

if TYPE_CHECKING:
    from collections.abc import Callable

    from lexiconengine.locale_utils import LocaleId

    from .config import LocalizationConfig
    from .loading import DictionarySource
    from .merger import MergedDictionary
    from .store import RebuildListener
    from .types import SourceId

__all__ = ["LocalizationEngine", "SourceChange"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceChange:
    """A source change reported by the embedding application.

    Attributes:
        kind: Whether the source was added, changed or removed
        source: Identity of the affected source
    """

    kind: ChangeKind
    source: SourceId


class LocalizationEngine:
    """Localization facade: sources in, lookups out.

    Example:
        >>> source = MappingDictionarySource({
        ...     "ru": {"APPLE": ["яблоко", "яблока", "яблок"]},
        ...     "en": {"APPLE": ["apple", "apples"]},
        ... })
        >>> engine = LocalizationEngine(LocalizationConfig("ru"), source)
        >>> engine.load().is_success
        True
        >>> engine.pluralize("ru", "APPLE", 2), engine.pluralize("en", "APPLE", 2)
        ('яблока', 'apples')
    """

    __slots__ = (
        "_config",
        "_pending",
        "_plural_engine",
        "_provider",
        "_running",
        "_schedule_lock",
        "_source",
        "_store",
    )

    def __init__(self, config: LocalizationConfig, source: DictionarySource) -> None:
        """Wire the engine's components from configuration.

        Args:
            config: Validated localization settings
            source: Collaborator supplying raw dictionaries
        """
        self._config = config
        self._source = source
        self._plural_engine = PluralRuleEngine(cache_size=config.rule_cache_size)
        self._store = LocalizationStore(config.default_locale, self._plural_engine)
        self._provider = LocalizationProvider(
            self._store, self._plural_engine, placeholder=config.placeholder
        )
        self._schedule_lock = threading.Lock()
        self._running = False
        self._pending = False

    # ------------------------------------------------------------------
    # Rebuild scheduling
    # ------------------------------------------------------------------

    def load(self) -> RebuildSummary:
        """Perform the initial rebuild (or a full reload).

        Returns:
            Summary of the last rebuild this call ran; if another thread
            is rebuilding, the notification is queued and the store's
            latest summary is returned
        """
        return self._request_rebuild()

    def notify_changed(self, change: SourceChange | None = None) -> RebuildSummary:
        """Rebuild after a source was added, changed or removed.

        Overlapping calls coalesce into the running rebuild.
        """
        if change is not None:
            logger.info("Localization source %s: %s", change.kind, change.source)
        return self._request_rebuild()

    def _request_rebuild(self) -> RebuildSummary:
        with self._schedule_lock:
            if self._running:
                self._pending = True
                logger.debug("Rebuild in progress; change queued")
                summary = self._store.last_summary
                return summary if summary is not None else self._empty_summary()
            self._running = True

        try:
            while True:
                with self._schedule_lock:
                    self._pending = False
                summary = self._rebuild_once()
                with self._schedule_lock:
                    if not self._pending:
                        self._running = False
                        return summary
        except BaseException:
            with self._schedule_lock:
                self._running = False
            raise

    def _rebuild_once(self) -> RebuildSummary:
        try:
            raw_dictionaries = tuple(self._source.collect())
        except Exception as error:  # noqa: BLE001 - any collaborator failure becomes a failed rebuild
            failure = LexiconError(ErrorTemplate.source_collection_failed(error))
            failure.__cause__ = error
            return self._store.fail(failure)
        return self._store.rebuild(raw_dictionaries)

    def _empty_summary(self) -> RebuildSummary:
        return RebuildSummary(status=RebuildStatus.FAILED, generation=self._store.generation)

    # ------------------------------------------------------------------
    # Queries (delegated)
    # ------------------------------------------------------------------

    def resolve(self, locale: str | None = None) -> MergedDictionary:
        """See LocalizationStore.resolve()."""
        return self._store.resolve(locale)

    def serialized(self, locale: str | None = None) -> str:
        """See LocalizationStore.serialized()."""
        return self._store.serialized(locale)

    def script(self, locale: str | None = None) -> str:
        """See LocalizationStore.script()."""
        return self._store.script(locale)

    def get(self, locale: str | None, key: str) -> str:
        """See LocalizationProvider.get()."""
        return self._provider.get(locale, key)

    def pluralize(self, locale: str | None, key: str, count: object) -> str:
        """See LocalizationProvider.pluralize()."""
        return self._provider.pluralize(locale, key, count)

    def current_locale(self, preferred: str | None = None) -> LocaleId:
        """See LocalizationProvider.current_locale()."""
        return self._provider.current_locale(preferred)

    # ------------------------------------------------------------------
    # Events and state
    # ------------------------------------------------------------------

    def on_loaded(self, callback: RebuildListener) -> Callable[[], None]:
        """Register a callback for committed rebuilds."""
        return self._store.on_loaded(callback)

    def on_error(self, callback: RebuildListener) -> Callable[[], None]:
        """Register a callback for failed rebuilds."""
        return self._store.on_error(callback)

    def wait_until_ready(self, timeout: float | None = None) -> bool:
        """Block until the first rebuild commits."""
        return self._store.wait_until_ready(timeout)

    @property
    def config(self) -> LocalizationConfig:
        """Settings the engine was built from."""
        return self._config

    @property
    def store(self) -> LocalizationStore:
        """The owned store."""
        return self._store

    @property
    def provider(self) -> LocalizationProvider:
        """The owned provider."""
        return self._provider

    @property
    def plural_engine(self) -> PluralRuleEngine:
        """The owned plural rule engine."""
        return self._plural_engine

    @property
    def is_ready(self) -> bool:
        """True once a rebuild has been committed."""
        return self._store.is_ready
