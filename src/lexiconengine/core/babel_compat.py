"""Optional Babel access for CLDR tooling.

The localization core never imports Babel. Only the plural rule audit
(``lexiconengine.runtime.cldr_audit``) reads CLDR data, and it goes through
this module so that a missing install fails with one message naming the
``babel`` extra::

    pip install lexiconengine[babel]

Python 3.13+.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "BabelImportError",
    "is_babel_available",
    "load_cldr_locale",
    "require_babel",
]

_INSTALL_HINT = "pip install lexiconengine[babel]"


@lru_cache(maxsize=1)
def _check_babel_available() -> bool:
    """Import probe, run once per process."""
    try:
        import babel  # noqa: F401, PLC0415  # pylint: disable=unused-import
    except ImportError:
        return False
    return True


class BabelImportError(ImportError):
    """A CLDR feature was used without Babel installed.

    Attributes:
        feature: Name of the function that needed Babel
    """

    def __init__(self, feature: str) -> None:
        super().__init__(
            f"{feature} requires Babel for CLDR plural data. Install with: {_INSTALL_HINT}"
        )
        self.feature = feature


def is_babel_available() -> bool:
    """Check whether Babel can be imported."""
    return _check_babel_available()


def require_babel(feature: str) -> None:
    """Raise BabelImportError naming ``feature`` unless Babel is installed."""
    if not _check_babel_available():
        raise BabelImportError(feature)


def load_cldr_locale(tag: str) -> Locale | None:
    """Parse a hyphenated locale tag into a Babel Locale.

    Args:
        tag: Locale tag such as "en-us" (case-insensitive)

    Returns:
        The Babel Locale, or None when CLDR has no data for the tag

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("load_cldr_locale")
    from babel import Locale, UnknownLocaleError  # noqa: PLC0415

    try:
        return Locale.parse(tag, sep="-")
    except UnknownLocaleError:
        return None
