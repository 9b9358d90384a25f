"""Plural form selection.

PluralRuleEngine ties the rule table to the compiler: it looks up the rule
for a locale, compiles it once per expression (owned RuleCache) and selects
a form for a count. It is the only object the provider talks to for
pluralization.

Failure policy:
    compile() raises RuleCompilationError. select() never raises for rule
    problems: a malformed rule, an out-of-range index, a runtime modulo by
    zero or a count that is not a whole number all yield None, which the
    provider renders with its missing-value policy.

Python 3.13+.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import TYPE_CHECKING

from lexiconengine.constants import DEFAULT_RULE_CACHE_SIZE, MAX_DEPTH
from lexiconengine.diagnostics import RuleCompilationError

from .cache import RuleCache
from .compiler import CompiledRule, compile_rule
from .plural_rules import rule_for

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["PluralRuleEngine", "normalize_count"]

logger = logging.getLogger(__name__)


def normalize_count(count: object) -> int | None:
    """Normalize a count to the non-negative integer rules evaluate.

    Negative counts use their absolute value (CLDR convention). Floats and
    Decimals are accepted when they hold a whole number.

    Returns:
        Normalized count, or None if the value is not a finite whole number

    Examples:
        >>> normalize_count(-3), normalize_count(2.0), normalize_count(Decimal("5"))
        (3, 2, 5)
        >>> normalize_count(1.5) is None
        True
    """
    match count:
        case bool():
            return int(count)
        case int():
            return abs(count)
        case float():
            if not math.isfinite(count) or not count.is_integer():
                return None
            return abs(int(count))
        case Decimal():
            if not count.is_finite() or count != count.to_integral_value():
                return None
            return abs(int(count))
        case _:
            return None


class PluralRuleEngine:
    """Rule lookup, cached compilation and form selection.

    Owns its RuleCache; create one engine per application (the
    LocalizationEngine does) rather than sharing module-level state.

    Thread Safety:
        Safe for concurrent use. Compiled rules are immutable; the cache is
        internally locked.

    Example:
        >>> engine = PluralRuleEngine()
        >>> engine.select(engine.rule_for("en"), 2, ("apple", "apples"))
        'apples'
    """

    __slots__ = ("_cache", "_max_depth")

    def __init__(
        self, *, cache_size: int = DEFAULT_RULE_CACHE_SIZE, max_depth: int = MAX_DEPTH
    ) -> None:
        self._cache = RuleCache(cache_size)
        self._max_depth = max_depth

    @staticmethod
    def rule_for(locale: str) -> str:
        """Get the rule expression for a locale (exact, primary, then "0").

        Raises:
            InvalidLocaleNameError: If the locale identifier is malformed
        """
        return rule_for(locale)

    def compile(self, expression: str) -> CompiledRule:
        """Compile an expression, reusing the cached result.

        Raises:
            RuleCompilationError: If the expression is malformed (the error
                is cached and re-raised on later calls)
        """
        cached = self._cache.get(expression)
        if cached is None:
            try:
                result: CompiledRule | RuleCompilationError = compile_rule(
                    expression, max_depth=self._max_depth
                )
                logger.debug("Compiled plural rule %r", expression)
            except RuleCompilationError as error:
                logger.warning("Plural rule %r failed to compile: %s", expression, error)
                result = error.with_traceback(None)
            cached = self._cache.put(expression, result)

        if isinstance(cached, RuleCompilationError):
            # Cached errors are templates; each caller gets its own instance
            raise RuleCompilationError(
                cached.diagnostic or str(cached),
                expression=cached.expression,
                position=cached.position,
            )
        return cached

    def select(self, expression: str, count: object, forms: Sequence[str]) -> str | None:
        """Select the form for a count under a rule expression.

        Returns:
            The selected form, or None when no form applies (see module
            failure policy)
        """
        try:
            rule = self.compile(expression)
        except RuleCompilationError:
            return None

        n = normalize_count(count)
        if n is None:
            logger.debug("Count %r is not a whole number; no plural form", count)
            return None

        form = rule(n, forms)
        if form is None:
            logger.debug(
                "Rule %r selected no form for n=%d among %d forms", expression, n, len(forms)
            )
        return form

    @property
    def cache(self) -> RuleCache:
        """The engine's compiled rule cache."""
        return self._cache
