"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating provider call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping, Sequence

__all__ = [
    "LocalizedValue",
    "LocalizationKey",
    "RawEntries",
    "RawValue",
    "SourceId",
]

type LocalizationKey = str
"""Identifier of a localized string (e.g., 'APPLE', 'WELCOME_TITLE')."""

type SourceId = str
"""Identity of a dictionary source (the application root or a component name)."""

type LocalizedValue = str | tuple[str, ...]
"""Merged value: plain string or plural form array (index 0 = first form)."""

type RawValue = str | Sequence[str]
"""Value as supplied by a source, before freezing."""

type RawEntries = Mapping[str, object]
"""Key/value mapping as supplied by a source; values are validated on merge."""
