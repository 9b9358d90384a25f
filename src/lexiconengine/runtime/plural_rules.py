"""Built-in plural rule table.

Maps rule expressions to the locales that use them, in the gettext
``plural=`` dialect (single integer-valued C expression over ``n``). The
table is written rule-first so each expression appears once; it is inverted
into a locale -> rule lookup at import.

Entries may be primary subtags ("pt") or full identifiers ("pt-pt"); lookup
tries the exact identifier first, so a regional entry overrides its language.
Locales absent from the table select form 0 for every count.

Rules follow the integer part of the CLDR plural categories, ordered as the
categories appear in CLDR (one, few, many, other; or zero, one, other for
Latvian). ``scripts/verify_plural_rules.py`` cross-checks them against
Babel's CLDR data.

Python 3.13+. Zero external dependencies.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from collections.abc import Mapping
from types import MappingProxyType

from lexiconengine.constants import IDENTITY_RULE
from lexiconengine.locale_utils import LocaleId, normalize_locale, primary_subtag

__all__ = ["PLURAL_RULES", "RULES_BY_LOCALE", "locales_for_rule", "rule_for"]

# ruff: noqa: E501 - rule expressions are kept on one line for readability
PLURAL_RULES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    # One form: no grammatical number.
    IDENTITY_RULE: ("ja", "ko", "zh", "th", "vi", "id", "ms", "lo", "my"),
    # one, other
    "(n != 1)": (
        "af", "bg", "ca", "da", "de", "el", "en", "eo", "es", "et", "eu",
        "fi", "fy", "gl", "he", "hu", "it", "nb", "nl", "nn", "no", "pt-pt",
        "sq", "sv", "sw", "tr", "ur",
    ),
    # one (0 and 1), other
    "(n > 1)": ("fr", "pt", "hy", "ln", "ti", "wa"),
    # one, other (Icelandic: 21, 31, ... are singular)
    "(n%10!=1 || n%100==11)": ("is",),
    # one, few, many
    "(n%10==1 && n%100!=11 ? 0 : n%10>=2 && n%10<=4 && (n%100<10||n%100>=20) ? 1 : 2)": (
        "ru", "uk", "be", "sr", "hr", "bs",
    ),
    # one, few, many
    "(n==1 ? 0 : n%10>=2 && n%10<=4 && (n%100<10||n%100>=20) ? 1 : 2)": ("pl",),
    # one, few, other
    "(n==1 ? 0 : n>=2 && n<=4 ? 1 : 2)": ("cs", "sk"),
    # one, few, other
    "(n%10==1 && n%100!=11 ? 0 : n%10>=2 && (n%100<10||n%100>=20) ? 1 : 2)": ("lt",),
    # zero, one, other
    "(n%10==0 || n%100>=11 && n%100<=19 ? 0 : n%10==1 && n%100!=11 ? 1 : 2)": ("lv",),
    # one, few, other
    "(n==1 ? 0 : n==0 || n%100>0 && n%100<20 ? 1 : 2)": ("ro", "mo"),
    # other, one, two, few
    "(n%100==1 ? 1 : n%100==2 ? 2 : n%100==3 || n%100==4 ? 3 : 0)": ("sl",),
    # one, two, few, many, other
    "(n==1 ? 0 : n==2 ? 1 : n<7 ? 2 : n<11 ? 3 : 4)": ("ga",),
    # zero, one, two, few, many, other
    "(n==0 ? 0 : n==1 ? 1 : n==2 ? 2 : n%100>=3 && n%100<=10 ? 3 : n%100>=11 ? 4 : 5)": ("ar",),
})


def _invert(table: Mapping[str, tuple[str, ...]]) -> Mapping[LocaleId, str]:
    by_locale: dict[LocaleId, str] = {}
    for rule, locales in table.items():
        for locale in locales:
            normalized = normalize_locale(locale)
            if normalized in by_locale:
                msg = f"Locale {normalized!r} appears under more than one plural rule"
                raise ValueError(msg)
            by_locale[normalized] = rule
    return MappingProxyType(by_locale)


RULES_BY_LOCALE: Mapping[LocaleId, str] = _invert(PLURAL_RULES)


def rule_for(locale: str) -> str:
    """Get the plural rule expression for a locale.

    Tries the exact identifier, then its primary subtag, then falls back to
    the identity rule ("0": always the first form).

    Args:
        locale: Locale identifier (any case)

    Returns:
        Rule expression text

    Raises:
        InvalidLocaleNameError: If the locale identifier is malformed

    Examples:
        >>> rule_for("en-us")
        '(n != 1)'
        >>> rule_for("pt-pt"), rule_for("pt-br")
        ('(n != 1)', '(n > 1)')
        >>> rule_for("xx")
        '0'
    """
    normalized = normalize_locale(locale)
    rule = RULES_BY_LOCALE.get(normalized)
    if rule is None:
        rule = RULES_BY_LOCALE.get(primary_subtag(normalized), IDENTITY_RULE)
    return rule


def locales_for_rule(expression: str) -> tuple[LocaleId, ...]:
    """List table locales that use an expression (empty if none)."""
    return PLURAL_RULES.get(expression, ())
