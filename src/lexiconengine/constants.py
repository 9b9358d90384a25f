"""Shared constants for LexiconEngine.

This module provides centralized configuration constants used across the
syntax, runtime and localization packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Locale identifiers: Grammar accepted for locale names
- Depth limits: Recursion protection for plural rule parsing
- Cache limits: Memory bounds for the compiled rule cache
- Data keys: Reserved keys inside localization dictionaries
- Serialization: Text formats handed to response-embedding collaborators

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale identifiers
    "LOCALE_PATTERN",
    "LOCALE_REGEXP",
    # Depth limits
    "MAX_DEPTH",
    "MAX_RULE_LITERAL_DIGITS",
    # Cache limits
    "DEFAULT_RULE_CACHE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
    # Plural rules
    "IDENTITY_RULE",
    "RULE_VARIABLE",
    # Data keys
    "PLURALIZATION_KEY",
    "APPLICATION_SOURCE",
    # Serialization
    "LOCALIZATION_SCRIPT_FORMAT",
]

# ============================================================================
# LOCALE IDENTIFIERS
# ============================================================================

# Locale identifiers are "language" or "language-region", two ASCII letters
# each, compared after lowercasing. Anything else is InvalidLocaleNameError.
LOCALE_PATTERN: str = r"^[a-z]{2}(-[a-z]{2})?$"
LOCALE_REGEXP: re.Pattern[str] = re.compile(LOCALE_PATTERN)

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth of a plural rule expression (parentheses, ternaries,
# unary operators). Real CLDR-derived rules nest fewer than 10 levels; the
# limit keeps the recursive-descent parser (about eight frames per
# parenthesized level) well inside Python's default recursion limit.
MAX_DEPTH: int = 50

# Longest integer literal accepted in a plural rule. Real rules compare
# against numbers below 1000; the cap also keeps int() below the
# interpreter's integer string conversion limit.
MAX_RULE_LITERAL_DIGITS: int = 18

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Default maximum number of compiled plural rules kept in a RuleCache.
# The built-in table has fewer than 20 distinct expressions.
DEFAULT_RULE_CACHE_SIZE: int = 256

# Maximum cached Babel Locale instances (CLDR audit only).
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# PLURAL RULES
# ============================================================================

# Rule used for locales absent from the rule table: always the first form.
IDENTITY_RULE: str = "0"

# The only free variable a plural rule expression may reference.
RULE_VARIABLE: str = "n"

# ============================================================================
# DATA KEYS
# ============================================================================

# Reserved dictionary key holding the pluralization descriptor. A default
# locale dictionary may define {"rule": "..."} under this key to override
# the built-in rule; the key is never exposed as a localization entry.
PLURALIZATION_KEY: str = "$pluralization"

# Source identity of the application-wide (root) dictionaries.
APPLICATION_SOURCE: str = "<application>"

# ============================================================================
# SERIALIZATION
# ============================================================================

# Script body served to browsers that embed a locale's dictionary.
LOCALIZATION_SCRIPT_FORMAT: str = "window.localization = {payload};"
