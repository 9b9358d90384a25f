"""Plural rule runtime package.

Provides the built-in rule table, the closure compiler, the compiled rule
cache and the PluralRuleEngine facade. Depends on the syntax package for
parsing. The Babel-backed CLDR audit lives in ``runtime.cldr_audit`` and is
not imported here.

Python 3.13+.
"""

from .cache import RuleCache
from .compiler import CompiledRule, compile_rule
from .plural_engine import PluralRuleEngine, normalize_count
from .plural_rules import PLURAL_RULES, RULES_BY_LOCALE, locales_for_rule, rule_for

__all__ = [
    "PLURAL_RULES",
    "RULES_BY_LOCALE",
    "CompiledRule",
    "PluralRuleEngine",
    "RuleCache",
    "compile_rule",
    "locales_for_rule",
    "normalize_count",
    "rule_for",
]
