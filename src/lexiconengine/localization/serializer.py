"""Serialized text form of merged dictionaries.

Produces the JSON object text handed to response-embedding collaborators
(HTTP middleware, template helpers). Plural form arrays become JSON arrays
and the pluralization descriptor is emitted under the reserved key::

    {"APPLE": ["apple", "apples"], "$pluralization": {"rule": "(n != 1)"}}

Output is deterministic: entries keep merge order, the descriptor comes last
and inherited keys are sorted, so merging the same input twice serializes
byte-identically.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from lexiconengine.constants import LOCALIZATION_SCRIPT_FORMAT, PLURALIZATION_KEY

if TYPE_CHECKING:
    from .merger import MergedDictionary

__all__ = ["serialize_dictionary", "to_script", "to_serializable"]


def to_serializable(dictionary: MergedDictionary) -> dict[str, object]:
    """Convert a merged dictionary to plain JSON-compatible data."""
    data: dict[str, object] = {
        key: list(value) if isinstance(value, tuple) else value
        for key, value in dictionary.items()
    }
    data[PLURALIZATION_KEY] = dictionary.pluralization.to_dict()
    return data


def serialize_dictionary(dictionary: MergedDictionary) -> str:
    """Serialize a merged dictionary to JSON object text.

    Non-ASCII text is kept as-is (UTF-8 payloads stay readable).

    Example:
        >>> from lexiconengine.localization.merger import MergedDictionary, PluralizationInfo
        >>> serialize_dictionary(MergedDictionary("ru", {"A": "б"}, PluralizationInfo("0")))
        '{"A": "б", "$pluralization": {"rule": "0"}}'
    """
    return json.dumps(to_serializable(dictionary), ensure_ascii=False)


def to_script(payload: str) -> str:
    """Wrap serialized dictionary text as a browser script body.

    Example:
        >>> to_script('{"A": "a"}')
        'window.localization = {"A": "a"};'
    """
    # "\/" is a valid JSON escape; no "</" reaches an inline script body
    return LOCALIZATION_SCRIPT_FORMAT.format(payload=payload.replace("</", "<\\/"))
