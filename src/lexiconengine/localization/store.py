"""Canonical per-locale dictionaries with atomic rebuild.

LocalizationStore holds the latest successfully merged dictionaries and
their serialized text in one immutable StoreSnapshot. A rebuild merges,
validates and serializes into fresh local state, then commits with a single
reference assignment. Readers load the reference once per call and never
take a lock, so every lookup sees either the old or the new snapshot in
full, never a mix.

Rebuild failures (missing default locale) never reach the query path: the
previous snapshot stays in place, the failure is logged and reported to
on_error listeners, and rebuild() returns a failed RebuildSummary.

Thread Safety:
    Reads: lock-free (single attribute load of an immutable snapshot).
    Rebuilds: serialized on an internal lock.
    Listener registration: copy-on-write tuples under a separate lock.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from lexiconengine.diagnostics import (
    Diagnostic,
    DuplicateKeyWarning,
    ErrorTemplate,
    LexiconError,
    NotInitializedError,
)
from lexiconengine.enums import RebuildStatus
from lexiconengine.locale_utils import LocaleId, fallback_chain, normalize_locale
from lexiconengine.runtime.plural_engine import PluralRuleEngine

from .merger import MergedDictionary, merge
from .serializer import serialize_dictionary, to_script
from .validation import validate_plural_forms

if TYPE_CHECKING:
    from .loading import RawDictionary

__all__ = ["LocalizationStore", "RebuildListener", "RebuildSummary", "StoreSnapshot"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoreSnapshot:
    """One committed generation of merged state.

    Attributes:
        generation: Commit counter (1 for the first successful rebuild)
        default_locale: Normalized default locale
        dictionaries: Locale -> merged dictionary
        serialized: Locale -> JSON object text of the merged dictionary
    """

    generation: int
    default_locale: LocaleId
    dictionaries: Mapping[LocaleId, MergedDictionary]
    serialized: Mapping[LocaleId, str]

    def locale_for(self, locale: LocaleId) -> LocaleId:
        """Walk the fallback chain of a normalized locale; default if no hit."""
        for candidate in fallback_chain(locale):
            if candidate in self.dictionaries:
                return candidate
        return self.default_locale


@dataclass(frozen=True, slots=True)
class RebuildSummary:
    """Immutable outcome of one rebuild attempt.

    Attributes:
        status: SUCCESS (committed) or FAILED (previous state kept)
        generation: Generation being served after the attempt (0 if none)
        locales: Locales committed by this rebuild (empty on failure)
        duplicates: Key overwrites found while merging
        diagnostics: Non-fatal findings (skipped input, form-count warnings)
        error: The failure, when status is FAILED
        elapsed: Wall-clock seconds spent in the rebuild
    """

    status: RebuildStatus
    generation: int
    locales: tuple[LocaleId, ...] = ()
    duplicates: tuple[DuplicateKeyWarning, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    error: Exception | None = None
    elapsed: float = 0.0

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"RebuildSummary(status={self.status}, "
            f"generation={self.generation}, "
            f"locales={len(self.locales)}, "
            f"duplicates={len(self.duplicates)}, "
            f"diagnostics={len(self.diagnostics)})"
        )

    @property
    def is_success(self) -> bool:
        """Check if the rebuild was committed."""
        return self.status == RebuildStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the rebuild was aborted."""
        return self.status == RebuildStatus.FAILED


type RebuildListener = Callable[[RebuildSummary], None]
"""Callback receiving the summary of a committed or failed rebuild."""


class LocalizationStore:
    """Owner of the committed merged dictionaries.

    Example:
        >>> from lexiconengine.localization.loading import RawDictionary
        >>> store = LocalizationStore("en")
        >>> store.rebuild([RawDictionary("en", "<application>", {"HELLO": "Hello"})]).is_success
        True
        >>> store.resolve("en-gb")["HELLO"]
        'Hello'
    """

    __slots__ = (
        "_default_locale",
        "_engine",
        "_error_listeners",
        "_last_summary",
        "_listeners_lock",
        "_loaded_listeners",
        "_ready",
        "_rebuild_lock",
        "_snapshot",
    )

    def __init__(self, default_locale: str, engine: PluralRuleEngine | None = None) -> None:
        """Initialize an empty (not yet ready) store.

        Args:
            default_locale: Default locale identifier
            engine: Plural engine used for rule lookup and form validation

        Raises:
            InvalidLocaleNameError: If default_locale is malformed
        """
        self._default_locale = normalize_locale(default_locale)
        self._engine = engine if engine is not None else PluralRuleEngine()
        self._snapshot: StoreSnapshot | None = None
        self._last_summary: RebuildSummary | None = None
        self._rebuild_lock = threading.Lock()
        self._ready = threading.Event()
        self._listeners_lock = threading.Lock()
        self._loaded_listeners: tuple[RebuildListener, ...] = ()
        self._error_listeners: tuple[RebuildListener, ...] = ()

    # ------------------------------------------------------------------
    # Queries (lock-free)
    # ------------------------------------------------------------------

    def _snapshot_for(self, locale: str | None) -> tuple[StoreSnapshot, LocaleId]:
        # Validate input before readiness: malformed locales fail the same
        # way whether or not a rebuild has completed.
        requested = self._default_locale if not locale else normalize_locale(locale)
        snapshot = self._snapshot
        if snapshot is None:
            raise NotInitializedError(ErrorTemplate.not_initialized())
        resolved = snapshot.locale_for(requested)
        if resolved != requested:
            logger.debug("Locale %s resolved to %s", requested, resolved)
        return snapshot, resolved

    def resolve(self, locale: str | None = None) -> MergedDictionary:
        """Get the merged dictionary for a locale.

        Empty or None means the default locale. Otherwise the locale is
        normalized and its fallback chain walked; the default locale's
        dictionary answers when nothing in the chain was merged.

        Raises:
            InvalidLocaleNameError: If the locale identifier is malformed
            NotInitializedError: If no rebuild has been committed yet
        """
        snapshot, resolved = self._snapshot_for(locale)
        return snapshot.dictionaries[resolved]

    def serialized(self, locale: str | None = None) -> str:
        """Get the JSON object text for a locale (same resolution as resolve()).

        Raises:
            InvalidLocaleNameError: If the locale identifier is malformed
            NotInitializedError: If no rebuild has been committed yet
        """
        snapshot, resolved = self._snapshot_for(locale)
        return snapshot.serialized[resolved]

    def script(self, locale: str | None = None) -> str:
        """Get the serialized dictionary wrapped as ``window.localization = ...;``."""
        return to_script(self.serialized(locale))

    # ------------------------------------------------------------------
    # Rebuild
    # ------------------------------------------------------------------

    def rebuild(self, raw_dictionaries: Iterable[RawDictionary]) -> RebuildSummary:
        """Merge, validate and serialize, then commit atomically.

        Never raises for merge failures: a MissingDefaultLocaleError (or any
        other LexiconError from the merge) yields a FAILED summary, keeps the
        previous snapshot and is reported to on_error listeners.

        Returns:
            Summary of this attempt (also available as last_summary)
        """
        with self._rebuild_lock:
            summary = self._rebuild_locked(raw_dictionaries)
            self._last_summary = summary

        listeners = self._loaded_listeners if summary.is_success else self._error_listeners
        for listener in listeners:
            listener(summary)
        return summary

    def _rebuild_locked(self, raw_dictionaries: Iterable[RawDictionary]) -> RebuildSummary:
        started = time.perf_counter()
        previous = self._snapshot
        previous_generation = previous.generation if previous is not None else 0

        try:
            result = merge(self._default_locale, raw_dictionaries, self._engine)
        except LexiconError as error:
            logger.error("Localization rebuild failed: %s", error)
            return RebuildSummary(
                status=RebuildStatus.FAILED,
                generation=previous_generation,
                diagnostics=(error.diagnostic,) if error.diagnostic is not None else (),
                error=error,
                elapsed=time.perf_counter() - started,
            )

        form_diagnostics = validate_plural_forms(result, self._engine)
        serialized = {
            locale: serialize_dictionary(dictionary)
            for locale, dictionary in result.dictionaries.items()
        }
        snapshot = StoreSnapshot(
            generation=previous_generation + 1,
            default_locale=result.default_locale,
            dictionaries=result.dictionaries,
            serialized=MappingProxyType(serialized),
        )

        # Commit: single reference assignment
        self._snapshot = snapshot
        self._ready.set()

        logger.info(
            "Localization rebuilt: generation %d, %d locale(s), %d duplicate key(s)",
            snapshot.generation,
            len(result.dictionaries),
            len(result.duplicates),
        )
        return RebuildSummary(
            status=RebuildStatus.SUCCESS,
            generation=snapshot.generation,
            locales=result.locales,
            duplicates=result.duplicates,
            diagnostics=result.diagnostics + form_diagnostics,
            elapsed=time.perf_counter() - started,
        )

    def fail(self, error: LexiconError) -> RebuildSummary:
        """Record a rebuild that failed before merging (e.g. source collection).

        State is untouched; on_error listeners are notified.
        """
        with self._rebuild_lock:
            snapshot = self._snapshot
            summary = RebuildSummary(
                status=RebuildStatus.FAILED,
                generation=snapshot.generation if snapshot is not None else 0,
                diagnostics=(error.diagnostic,) if error.diagnostic is not None else (),
                error=error,
            )
            self._last_summary = summary
        logger.error("Localization rebuild failed: %s", error)
        for listener in self._error_listeners:
            listener(summary)
        return summary

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_loaded(self, callback: RebuildListener) -> Callable[[], None]:
        """Register a callback for committed rebuilds.

        Returns:
            Callable that unregisters the callback
        """
        with self._listeners_lock:
            self._loaded_listeners = (*self._loaded_listeners, callback)
        return lambda: self._unsubscribe(callback, loaded=True)

    def on_error(self, callback: RebuildListener) -> Callable[[], None]:
        """Register a callback for failed rebuilds.

        Returns:
            Callable that unregisters the callback
        """
        with self._listeners_lock:
            self._error_listeners = (*self._error_listeners, callback)
        return lambda: self._unsubscribe(callback, loaded=False)

    def _unsubscribe(self, callback: RebuildListener, *, loaded: bool) -> None:
        with self._listeners_lock:
            if loaded:
                self._loaded_listeners = tuple(
                    cb for cb in self._loaded_listeners if cb is not callback
                )
            else:
                self._error_listeners = tuple(
                    cb for cb in self._error_listeners if cb is not callback
                )

    def wait_until_ready(self, timeout: float | None = None) -> bool:
        """Block until the first rebuild commits.

        Returns:
            True if ready, False if the timeout expired first
        """
        return self._ready.wait(timeout)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def default_locale(self) -> LocaleId:
        """Normalized default locale."""
        return self._default_locale

    @property
    def engine(self) -> PluralRuleEngine:
        """Plural engine used by rebuilds."""
        return self._engine

    @property
    def snapshot(self) -> StoreSnapshot | None:
        """Currently committed snapshot (None before the first commit)."""
        return self._snapshot

    @property
    def generation(self) -> int:
        """Committed generation (0 before the first commit)."""
        snapshot = self._snapshot
        return snapshot.generation if snapshot is not None else 0

    @property
    def is_ready(self) -> bool:
        """True once a rebuild has been committed."""
        return self._snapshot is not None

    @property
    def locales(self) -> tuple[LocaleId, ...]:
        """Locales in the committed snapshot (empty before the first commit)."""
        snapshot = self._snapshot
        return tuple(snapshot.dictionaries) if snapshot is not None else ()

    @property
    def last_summary(self) -> RebuildSummary | None:
        """Summary of the most recent rebuild attempt."""
        return self._last_summary
