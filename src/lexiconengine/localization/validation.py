"""Plural form-count validation for merged dictionaries.

Checks every plural form array against the rule that will select from it.
A rule whose largest reachable index exceeds the array length means some
counts resolve to the missing-value placeholder; this is reported, never
fatal. Rules that fail to compile are reported once per expression.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lexiconengine.diagnostics import ErrorTemplate, RuleCompilationError

if TYPE_CHECKING:
    from lexiconengine.diagnostics import Diagnostic
    from lexiconengine.runtime.plural_engine import PluralRuleEngine

    from .merger import MergeResult

__all__ = ["validate_plural_forms"]

logger = logging.getLogger(__name__)


def validate_plural_forms(result: MergeResult, engine: PluralRuleEngine) -> tuple[Diagnostic, ...]:
    """Validate form arrays of every merged dictionary against their rules.

    Args:
        result: Merge output to check
        engine: Engine used to compile (and cache) the rules

    Returns:
        Warning diagnostics, in locale then key order
    """
    diagnostics: list[Diagnostic] = []
    failed: set[str] = set()

    for locale, dictionary in result.dictionaries.items():
        descriptor = dictionary.pluralization
        for key, value in dictionary.items():
            # Inherited arrays are checked once, in the default locale
            if not isinstance(value, tuple) or key in dictionary.inherited_keys:
                continue
            expression = descriptor.rule
            if expression in failed:
                continue
            try:
                rule = engine.compile(expression)
            except RuleCompilationError as error:
                failed.add(expression)
                if error.diagnostic is not None:
                    diagnostics.append(error.diagnostic)
                continue

            required = rule.form_count
            if required is None or len(value) >= required:
                continue
            diagnostic = ErrorTemplate.plural_form_count_mismatch(
                key, locale, expression, len(value), required
            )
            diagnostics.append(diagnostic)
            logger.warning("%s", diagnostic.message)

    return tuple(diagnostics)
