"""Hypothesis strategies for LexiconEngine property-based testing.

This package provides reusable strategies for generating test data
across multiple test modules. Strategies are organized by domain:

- localization: locale identifiers, keys, values, raw dictionary sets, counts
- rules: plural rule expressions (ternary chains over ``n``)

Usage:
    from tests.strategies import locale_ids, raw_dictionary_sets
    from tests.strategies.rules import rule_expressions

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - locale_ids, localized_values, raw_dictionary_sets
    - rule_expressions, nested_rule_expressions
"""

from .localization import (
    DEFAULT_LOCALE,
    LOCALE_POOL,
    RU_APPLE_FORMS,
    counts,
    invalid_locale_ids,
    locale_ids,
    localization_keys,
    localized_values,
    mixed_case_locale_ids,
    raw_dictionary_sets,
)
from .rules import (
    nested_rule_expressions,
    rule_conditions,
    rule_expressions,
)

__all__ = [
    "DEFAULT_LOCALE",
    "LOCALE_POOL",
    "RU_APPLE_FORMS",
    "counts",
    "invalid_locale_ids",
    "locale_ids",
    "localization_keys",
    "localized_values",
    "mixed_case_locale_ids",
    "nested_rule_expressions",
    "raw_dictionary_sets",
    "rule_conditions",
    "rule_expressions",
]
