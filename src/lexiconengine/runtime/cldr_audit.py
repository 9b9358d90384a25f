"""Cross-check the built-in plural rule table against Babel's CLDR data.

The table holds gettext-style index rules while CLDR names categories
("one", "few", ...). Two rules agree when they partition the sampled counts
identically: every index maps to exactly one category and vice versa. The
numbering itself is not compared.

Only integer counts are sampled; CLDR operands for fractions and compact
exponents have no counterpart in index rules.

Python 3.13+. Requires Babel (``pip install lexiconengine[babel]``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from lexiconengine.core.babel_compat import require_babel
from lexiconengine.locale_utils import LocaleId, get_babel_locale, normalize_locale

from .compiler import compile_rule
from .plural_rules import RULES_BY_LOCALE, rule_for

__all__ = ["AUDIT_SAMPLE", "RuleAuditResult", "audit_locale", "audit_plural_rules"]

logger = logging.getLogger(__name__)

# Counts 0..200 cover every tens/hundreds pattern the table's rules test.
AUDIT_SAMPLE: range = range(0, 201)


@dataclass(frozen=True, slots=True)
class RuleAuditResult:
    """Outcome of comparing one locale's rule with CLDR.

    Attributes:
        locale: Audited locale identifier
        expression: Built-in rule expression used for the locale
        categories: Index -> CLDR category observed on the sample
        mismatches: Counts where the partitions disagree, in sample order
        supported: False when Babel has no CLDR data for the locale
    """

    locale: LocaleId
    expression: str
    categories: Mapping[int, str] = field(default_factory=lambda: MappingProxyType({}))
    mismatches: tuple[int, ...] = ()
    supported: bool = True

    @property
    def consistent(self) -> bool:
        """True when the locale is supported and no count disagrees."""
        return self.supported and not self.mismatches


def audit_locale(locale: str, sample: Iterable[int] = AUDIT_SAMPLE) -> RuleAuditResult:
    """Compare one locale's built-in rule against CLDR.

    Raises:
        BabelImportError: If Babel is not installed
        InvalidLocaleNameError: If the locale identifier is malformed
        RuleCompilationError: If the table rule does not compile
    """
    require_babel("audit_locale")
    normalized = normalize_locale(locale)
    expression = rule_for(normalized)
    rule = compile_rule(expression)

    babel_locale = get_babel_locale(normalized)
    if babel_locale is None:
        logger.info("Babel has no CLDR data for %s; skipping", normalized)
        return RuleAuditResult(normalized, expression, supported=False)
    plural_form = babel_locale.plural_form

    index_to_category: dict[int, str] = {}
    category_to_index: dict[str, int] = {}
    mismatches: list[int] = []

    for n in sample:
        index = rule.index(n)
        category = plural_form(n)
        if index is None:
            mismatches.append(n)
            continue
        known_category = index_to_category.setdefault(index, category)
        known_index = category_to_index.setdefault(category, index)
        if known_category != category or known_index != index:
            mismatches.append(n)

    if mismatches:
        logger.warning(
            "Plural rule for %s disagrees with CLDR at %d count(s), first n=%d",
            normalized,
            len(mismatches),
            mismatches[0],
        )
    return RuleAuditResult(
        normalized,
        expression,
        MappingProxyType(dict(sorted(index_to_category.items()))),
        tuple(mismatches),
    )


def audit_plural_rules(
    locales: Iterable[str] | None = None,
    sample: Iterable[int] = AUDIT_SAMPLE,
) -> tuple[RuleAuditResult, ...]:
    """Audit several locales (default: every locale in the rule table).

    Args:
        locales: Locale identifiers to audit
        sample: Counts to evaluate (materialized once)

    Returns:
        One result per locale, sorted by locale

    Example:
        >>> [r.consistent for r in audit_plural_rules(["en", "ru"])]
        [True, True]
    """
    require_babel("audit_plural_rules")
    targets = sorted({normalize_locale(loc) for loc in (locales or RULES_BY_LOCALE)})
    counts = tuple(sample)
    return tuple(audit_locale(locale, counts) for locale in targets)
