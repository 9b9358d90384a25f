"""Quickstart example for lexiconengine.

This example demonstrates basic usage of lexiconengine: merging dictionaries
from an application and its components, looking up keys with locale
fallback, and selecting plural forms.

Note: Examples print summaries instead of handling every diagnostic. In
production, log RebuildSummary.diagnostics and react to failed rebuilds.
"""

from lexiconengine import (
    LocalizationConfig,
    LocalizationEngine,
    MappingDictionarySource,
    NotInitializedError,
    PluralRuleEngine,
)
from lexiconengine.localization import ChangeKind, SourceChange

# Example 1: Application dictionaries
print("=" * 50)
print("Example 1: Simple Lookup")
print("=" * 50)

source = MappingDictionarySource({
    "ru": {"GREETING": "Привет", "APPLE": ["яблоко", "яблока", "яблок"]},
    "en": {"GREETING": "Hello", "APPLE": ["apple", "apples"]},
})
engine = LocalizationEngine(LocalizationConfig("ru"), source)

try:
    engine.get("en", "GREETING")
except NotInitializedError as error:
    print(f"Before load: {error}")

summary = engine.load()
print(summary)
# Output: RebuildSummary(status=success, generation=1, locales=2, duplicates=0, diagnostics=0)

print(engine.get("en", "GREETING"))
# Output: Hello
print(engine.get(None, "GREETING"))
# Output: Привет

# Example 2: Plural forms
print("\n" + "=" * 50)
print("Example 2: Plural Forms")
print("=" * 50)

for count in (1, 2, 5, 11, 21, 22, 25):
    print(f"ru {count:>2}: {engine.pluralize('ru', 'APPLE', count)}")
# Output: яблоко, яблока, яблок, яблок, яблоко, яблока, яблок

for count in (0, 1, 2):
    print(f"en {count:>2}: {engine.pluralize('en', 'APPLE', count)}")
# Output: apples, apple, apples

# Example 3: Locale fallback
print("\n" + "=" * 50)
print("Example 3: Locale Fallback")
print("=" * 50)

# en-GB has no dictionary of its own: en-gb -> en -> ru
print(engine.current_locale("en-GB"))
# Output: en-gb
print(engine.resolve("en-GB").locale)
# Output: en
print(engine.get("en-GB", "GREETING"))
# Output: Hello

# Unknown language falls back to the default locale
print(engine.get("de", "GREETING"))
# Output: Привет

# Example 4: Components and overrides
print("\n" + "=" * 50)
print("Example 4: Components")
print("=" * 50)

source.set_source("checkout", {"en": {"PAY": "Pay now"}, "ru": {"PAY": "Оплатить"}})
source.set_source("promo", {"en": {"PAY": "Pay now and save"}})
summary = engine.notify_changed(SourceChange(ChangeKind.ADDED, "promo"))

# The later-discovered component wins and the overwrite is reported
for duplicate in summary.duplicates:
    print(
        f"{duplicate.locale}/{duplicate.key}: "
        f"{duplicate.source} overrides {duplicate.previous_source}"
    )
print(engine.get("en", "PAY"))
# Output: Pay now and save

# Example 5: Missing values and placeholders
print("\n" + "=" * 50)
print("Example 5: Missing Values")
print("=" * 50)

print(repr(engine.get("en", "NO_SUCH_KEY")))
# Output: ''

placeholder_engine = LocalizationEngine(LocalizationConfig("ru", placeholder=True), source)
placeholder_engine.load()
print(placeholder_engine.get("en", "NO_SUCH_KEY"))
# Output: NO_SUCH_KEY

# Example 6: Client payload
print("\n" + "=" * 50)
print("Example 6: Serialized Dictionary")
print("=" * 50)

print(engine.serialized("en"))
print(engine.script("en")[:60] + "...")

# Example 7: Plural rules directly
print("\n" + "=" * 50)
print("Example 7: Plural Rule Engine")
print("=" * 50)

plurals = PluralRuleEngine()
forms = ["plik", "pliki", "plików"]
polish_rule = plurals.rule_for("pl")
print(polish_rule)
for count in (1, 3, 5, 22, 25):
    print(f"pl {count:>2}: {plurals.select(polish_rule, count, forms)}")
# Output: plik, pliki, plików, pliki, plików

print("\n" + "=" * 50)
print("All examples completed successfully!")
print("=" * 50)
