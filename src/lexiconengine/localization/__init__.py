"""Localization package: merge, store, provider and engine wiring.

Provides the full localization stack on top of the plural rule runtime.

Submodules:
    types        - PEP 695 type aliases (LocalizationKey, SourceId, LocalizedValue)
    loading      - RawDictionary, DictionarySource protocol, MappingDictionarySource
    merger       - merge(), MergedDictionary, PluralizationInfo, MergeResult
    validation   - Plural form-count checks
    serializer   - JSON text and script embedding of merged dictionaries
    store        - LocalizationStore, StoreSnapshot, RebuildSummary
    provider     - LocalizationProvider (get / pluralize)
    config       - LocalizationConfig
    orchestrator - LocalizationEngine, SourceChange

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from lexiconengine.enums import ChangeKind, RebuildStatus
from lexiconengine.localization.config import LocalizationConfig
from lexiconengine.localization.loading import (
    DictionarySource,
    MappingDictionarySource,
    RawDictionary,
)
from lexiconengine.localization.merger import (
    MergedDictionary,
    MergeResult,
    PluralizationInfo,
    merge,
)
from lexiconengine.localization.orchestrator import LocalizationEngine, SourceChange
from lexiconengine.localization.provider import LocalizationProvider
from lexiconengine.localization.serializer import serialize_dictionary, to_script
from lexiconengine.localization.store import LocalizationStore, RebuildSummary, StoreSnapshot
from lexiconengine.localization.types import LocalizationKey, LocalizedValue, SourceId

__all__ = [
    # Main engine
    "LocalizationEngine",
    "LocalizationConfig",
    "SourceChange",
    "ChangeKind",
    # Sources
    "DictionarySource",
    "MappingDictionarySource",
    "RawDictionary",
    # Merge
    "merge",
    "MergeResult",
    "MergedDictionary",
    "PluralizationInfo",
    # Store and provider
    "LocalizationStore",
    "LocalizationProvider",
    "StoreSnapshot",
    "RebuildSummary",
    "RebuildStatus",
    # Serialization
    "serialize_dictionary",
    "to_script",
    # Type aliases for user code type annotations
    "LocalizationKey",
    "LocalizedValue",
    "SourceId",
]
