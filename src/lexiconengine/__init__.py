"""LexiconEngine - multi-source localization with plural rule selection.

Merges per-locale dictionaries from an application and its components into
one fallback-complete dictionary per locale, and selects plural forms with
small gettext-style rule expressions compiled to safe closures.

Public API:
    LocalizationEngine - Sources in, lookups out (get, pluralize, resolve)
    LocalizationConfig - Default locale, placeholder flag, rule cache size
    MappingDictionarySource - In-memory dictionary source
    RawDictionary - One source's entries for one locale
    PluralRuleEngine - Rule lookup, compilation and form selection
    merge - Pure multi-source merge
    normalize_locale - Locale identifier validation and normalization

Exceptions:
    LexiconError - Base exception class
    InvalidLocaleNameError - Malformed locale identifier
    MissingDefaultLocaleError - Default locale dictionary missing or empty
    RuleCompilationError - Malformed plural rule expression
    NotInitializedError - Lookup before the first committed rebuild
    ConfigurationError - Missing or invalid configuration

Submodules:
    lexiconengine.syntax - Plural rule lexer, parser and AST
    lexiconengine.runtime - Rule table, compiler, cache and engine
    lexiconengine.runtime.cldr_audit - Babel cross-check of the rule table
    lexiconengine.localization - Merge, store, provider, engine wiring
    lexiconengine.diagnostics - Error types, codes and formatting
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    ConfigurationError,
    InvalidLocaleNameError,
    LexiconError,
    MissingDefaultLocaleError,
    NotInitializedError,
    RuleCompilationError,
)
from .locale_utils import normalize_locale
from .localization import (
    LocalizationConfig,
    LocalizationEngine,
    MappingDictionarySource,
    RawDictionary,
    merge,
)
from .runtime import PluralRuleEngine

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("lexiconengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "InvalidLocaleNameError",
    "LexiconError",
    "LocalizationConfig",
    "LocalizationEngine",
    "MappingDictionarySource",
    "MissingDefaultLocaleError",
    "NotInitializedError",
    "PluralRuleEngine",
    "RawDictionary",
    "RuleCompilationError",
    "__version__",
    "merge",
    "normalize_locale",
]
