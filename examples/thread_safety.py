"""Thread Safety Example - Serving lookups while dictionaries are rebuilt.

This example shows the recommended patterns for using LocalizationEngine in
multi-threaded applications.

Thread Safety:
    Lookups never take a lock. Each rebuild merges into a fresh, immutable
    snapshot and publishes it with a single reference swap, so a reader
    sees either the whole old state or the whole new state. Rebuilds are
    serialized; change notifications that arrive during a rebuild are
    coalesced into one more pass.

Demonstrates:
1. Load once at startup, then share the engine for reads
2. Concurrent reads with ThreadPoolExecutor
3. Readers running while a component is added
4. Coalesced change notifications
5. Rebuild listeners

Python 3.13+.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from lexiconengine import LocalizationConfig, LocalizationEngine, MappingDictionarySource
from lexiconengine.constants import APPLICATION_SOURCE
from lexiconengine.localization import ChangeKind, RebuildSummary, SourceChange


def _build_engine() -> tuple[LocalizationEngine, MappingDictionarySource]:
    source = MappingDictionarySource({
        "ru": {"GREETING": "Привет", "FILES": ["файл", "файла", "файлов"]},
        "en": {"GREETING": "Hello", "FILES": ["file", "files"]},
    })
    return LocalizationEngine(LocalizationConfig("ru"), source), source


# Example 1: Single-threaded load (RECOMMENDED)
def example_1_recommended_pattern() -> None:
    """Example 1: Load during startup, then share the engine for reads."""
    print("=" * 60)
    print("Example 1: Recommended Pattern - Load at Startup")
    print("=" * 60)

    engine, _ = _build_engine()
    engine.load()
    print("[STARTUP] Dictionaries loaded (single-threaded)")

    def worker(thread_id: int) -> None:
        for count in range(1, 4):
            text = engine.pluralize("en", "FILES", count)
            print(f"  [Thread-{thread_id}] {count} {text}")

    threads = [threading.Thread(target=worker, args=(tid,)) for tid in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    print("\n[SUCCESS] All threads completed safely")


# Example 2: ThreadPoolExecutor with shared engine
def example_2_threadpool_pattern() -> None:
    """Example 2: Many short lookups on a pool."""
    print("\n" + "=" * 60)
    print("Example 2: ThreadPoolExecutor Pattern")
    print("=" * 60)

    engine, _ = _build_engine()
    engine.load()

    def lookup(count: int) -> tuple[int, str]:
        return count, engine.pluralize("ru", "FILES", count)

    with ThreadPoolExecutor(max_workers=4) as executor:
        futures = [executor.submit(lookup, n) for n in (1, 2, 5, 21, 22, 25)]
        results = sorted(future.result() for future in as_completed(futures))

    for count, text in results:
        print(f"  {count:>2} {text}")


# Example 3: Readers during a rebuild
def example_3_reads_during_rebuild() -> None:
    """Example 3: Readers keep running while a component is added."""
    print("\n" + "=" * 60)
    print("Example 3: Reads During Rebuild")
    print("=" * 60)

    engine, source = _build_engine()
    engine.load()
    stop = threading.Event()
    seen: set[str] = set()
    seen_lock = threading.Lock()

    def reader() -> None:
        while not stop.is_set():
            value = engine.get("en", "UPLOAD")
            with seen_lock:
                seen.add(value)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for t in readers:
        t.start()

    source.set_source("uploader", {"en": {"UPLOAD": "Upload"}})
    summary = engine.notify_changed(SourceChange(ChangeKind.ADDED, "uploader"))
    stop.set()
    for t in readers:
        t.join()

    print(f"  Rebuild: {summary}")
    # Only the two complete states are ever observed: missing ("") or present
    print(f"  Values observed by readers: {sorted(seen)}")


# Example 4: Coalesced notifications
def example_4_coalesced_notifications() -> None:
    """Example 4: Notifications from many threads collapse into few rebuilds."""
    print("\n" + "=" * 60)
    print("Example 4: Coalesced Notifications")
    print("=" * 60)

    engine, source = _build_engine()
    engine.load()

    def publish(index: int) -> RebuildSummary:
        component = f"component-{index}"
        source.set_source(component, {"en": {f"KEY_{index}": f"value {index}"}})
        return engine.notify_changed(SourceChange(ChangeKind.ADDED, component))

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(publish, range(8)))

    missing = [i for i in range(8) if not engine.get("en", f"KEY_{i}")]
    print(f"  Generation after 8 notifications: {engine.store.generation}")
    print(f"  Keys missing after all notifications returned: {missing}")


# Example 5: Listeners
def example_5_listeners() -> None:
    """Example 5: React to committed and failed rebuilds."""
    print("\n" + "=" * 60)
    print("Example 5: Rebuild Listeners")
    print("=" * 60)

    engine, source = _build_engine()
    unsubscribe = engine.on_loaded(lambda s: print(f"  [loaded] generation {s.generation}"))
    engine.on_error(lambda s: print(f"  [error] {s.error}"))

    engine.load()
    # Removing the application root removes the default locale: rebuild fails
    source.remove_source(APPLICATION_SOURCE)
    engine.notify_changed(SourceChange(ChangeKind.REMOVED, APPLICATION_SOURCE))
    print(f"  Still serving generation {engine.store.generation}: {engine.get('en', 'GREETING')}")
    unsubscribe()


if __name__ == "__main__":
    example_1_recommended_pattern()
    example_2_threadpool_pattern()
    example_3_reads_during_rebuild()
    example_4_coalesced_notifications()
    example_5_listeners()

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
