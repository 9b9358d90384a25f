"""Localization configuration.

Provides a single frozen dataclass with the inputs the engine consumes:
the default locale (required), the missing-value placeholder flag and the
compiled rule cache size. ``from_mapping`` reads the ``l10n`` section of an
application configuration mapping::

    {"l10n": {"defaultLocale": "en", "placeholder": true}}

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from lexiconengine.constants import DEFAULT_RULE_CACHE_SIZE
from lexiconengine.diagnostics import ConfigurationError, ErrorTemplate
from lexiconengine.locale_utils import LocaleId, normalize_locale

__all__ = ["CONFIG_SECTION", "LocalizationConfig"]

# Name of the application config section holding localization settings.
CONFIG_SECTION: str = "l10n"


@dataclass(frozen=True, slots=True)
class LocalizationConfig:
    """Immutable localization settings.

    Attributes:
        default_locale: Default locale identifier, normalized to lowercase
        placeholder: Render missing values as their key instead of ""
            (default: False)
        rule_cache_size: Maximum compiled plural rules kept (default: 256)

    Example:
        >>> LocalizationConfig("EN-US").default_locale
        'en-us'
        >>> LocalizationConfig.from_mapping({"l10n": {"defaultLocale": "ru"}}).placeholder
        False
    """

    default_locale: LocaleId
    placeholder: bool = False
    rule_cache_size: int = DEFAULT_RULE_CACHE_SIZE

    def __post_init__(self) -> None:
        """Validate and normalize configuration values at construction time.

        Raises:
            InvalidLocaleNameError: If default_locale is malformed
            ConfigurationError: If placeholder is not a bool or
                rule_cache_size is not a positive integer
        """
        object.__setattr__(self, "default_locale", normalize_locale(self.default_locale))
        if not isinstance(self.placeholder, bool):
            raise ConfigurationError(
                ErrorTemplate.config_invalid_value("placeholder", self.placeholder, "a boolean")
            )
        if (
            isinstance(self.rule_cache_size, bool)
            or not isinstance(self.rule_cache_size, int)
            or self.rule_cache_size <= 0
        ):
            raise ConfigurationError(
                ErrorTemplate.config_invalid_value(
                    "rule_cache_size", self.rule_cache_size, "a positive integer"
                )
            )

    @classmethod
    def from_mapping(cls, config: Mapping[str, object]) -> LocalizationConfig:
        """Build settings from an application configuration mapping.

        Accepts either the whole application config (with an ``l10n``
        section) or the section itself.

        Keys:
            defaultLocale: Required default locale
            placeholder: Optional bool
            ruleCacheSize: Optional positive int

        Raises:
            ConfigurationError: If the section or defaultLocale is missing,
                or a value has the wrong type
            InvalidLocaleNameError: If defaultLocale is malformed
        """
        section = config.get(CONFIG_SECTION, config)
        if not isinstance(section, Mapping):
            raise ConfigurationError(ErrorTemplate.config_section_missing(CONFIG_SECTION))

        default_locale = section.get("defaultLocale")
        if not default_locale:
            raise ConfigurationError(
                ErrorTemplate.config_section_missing(f"{CONFIG_SECTION}.defaultLocale")
            )
        if not isinstance(default_locale, str):
            raise ConfigurationError(
                ErrorTemplate.config_invalid_value("defaultLocale", default_locale, "a string")
            )

        placeholder = section.get("placeholder", False)
        rule_cache_size = section.get("ruleCacheSize", DEFAULT_RULE_CACHE_SIZE)
        return cls(
            default_locale=default_locale,
            placeholder=placeholder,  # type: ignore[arg-type]
            rule_cache_size=rule_cache_size,  # type: ignore[arg-type]
        )
