"""Thread-safe LRU cache for compiled plural rules.

Compiled rules are a pure function of the expression text, so the cache key
is the expression alone; the same rule is shared by every locale using it.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - LRU eviction via OrderedDict
    - Compilation failures are cached as well, so a malformed rule is parsed
      once and the same RuleCompilationError is re-raised on every lookup

Thread Safety:
    All operations protected by RLock. Safe for concurrent reads and writes.
    Compilation itself runs outside the lock; two threads racing on the same
    uncached expression may both compile it, and the first stored result wins.

Python 3.13+.
"""

from collections import OrderedDict
from threading import RLock

from lexiconengine.constants import DEFAULT_RULE_CACHE_SIZE
from lexiconengine.diagnostics import RuleCompilationError

from .compiler import CompiledRule

__all__ = ["RuleCache"]

type _CacheValue = CompiledRule | RuleCompilationError


class RuleCache:
    """Thread-safe LRU cache of compiled plural rules keyed by expression.

    Attributes:
        maxsize: Maximum number of cache entries
        hits: Lookups answered from the cache
        misses: Lookups that found nothing
    """

    __slots__ = ("_cache", "_hits", "_lock", "_maxsize", "_misses")

    def __init__(self, maxsize: int = DEFAULT_RULE_CACHE_SIZE) -> None:
        """Create an empty cache holding at most ``maxsize`` expressions."""
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[str, _CacheValue] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0

    def get(self, expression: str) -> _CacheValue | None:
        """Look up an expression, refreshing its LRU position on a hit.

        Returns:
            CompiledRule, the cached RuleCompilationError, or None on a miss
        """
        with self._lock:
            value = self._cache.get(expression)
            if value is None:
                self._misses += 1
                return None
            self._cache.move_to_end(expression)
            self._hits += 1
            return value

    def put(self, expression: str, result: _CacheValue) -> _CacheValue:
        """Store a compilation result unless one is already cached.

        Thread-safe. Evicts the LRU entry if the cache is full.

        Returns:
            The cached value for the expression (the existing one if another
            thread stored it first)
        """
        with self._lock:
            existing = self._cache.get(expression)
            if existing is not None:
                self._cache.move_to_end(expression)
                return existing
            if len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)
            self._cache[expression] = result
            return result

    def clear(self) -> None:
        """Drop every entry and zero the hit/miss counters."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> dict[str, int | float]:
        """Snapshot of cache metrics.

        Keys: size, maxsize, hits, misses, hit_rate (percent, two decimals)
        and failures (entries holding a RuleCompilationError).
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            failures = sum(
                1 for value in self._cache.values() if isinstance(value, RuleCompilationError)
            )

            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "failures": failures,
            }

    def __len__(self) -> int:
        """Number of cached expressions."""
        with self._lock:
            return len(self._cache)

    def __contains__(self, expression: object) -> bool:
        """Check membership without touching LRU order or metrics."""
        with self._lock:
            return expression in self._cache

    @property
    def maxsize(self) -> int:
        """Maximum cache size."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Lookups answered from the cache."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Lookups that found nothing."""
        with self._lock:
            return self._misses
