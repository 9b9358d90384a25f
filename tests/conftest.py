"""Shared pytest configuration for the lexiconengine tests.

Hypothesis profiles (max_examples is set here and nowhere else):
    dev      500 examples, default for local runs
    ci       50 derandomized examples, selected by CI=true
    verbose  100 examples with progress output

HYPOTHESIS_PROFILE=<name> overrides the automatic choice.

Tests marked ``@pytest.mark.fuzz`` are long-running property searches and
are skipped unless the run selects them with ``pytest -m fuzz``.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from tests.strategies import RU_APPLE_FORMS

# -- Hypothesis profiles -------------------------------------------------

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Pick the profile: HYPOTHESIS_PROFILE, then CI=true, then dev."""
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# -- Fuzz marker -----------------------------------------------------------

def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker for intensive property tests."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless the marker expression names fuzz."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# -- Shared fixtures -------------------------------------------------------


@pytest.fixture
def scenario_source():
    """Application root (ru default) plus two components defining en.

    Component B is discovered after component A and overrides FIRST.
    """
    from lexiconengine.localization import MappingDictionarySource

    return MappingDictionarySource(
        {
            "ru": {"THIRD": "ru third", "APPLE": list(RU_APPLE_FORMS)},
            "en": {"GREETING": "Hello"},
        },
        components=[
            ("component-a", {"en": {"FIRST": "en first"}}),
            ("component-b", {"en": {"FIRST": "en first B", "SECOND": "en second"}}),
        ],
    )


@pytest.fixture
def loaded_engine(scenario_source):
    """LocalizationEngine with default locale ru, already loaded."""
    from lexiconengine.localization import LocalizationConfig, LocalizationEngine

    engine = LocalizationEngine(LocalizationConfig("ru"), scenario_source)
    summary = engine.load()
    assert summary.is_success
    return engine
