# tests/conftest.py
"""Shared test fixtures and Hypothesis configuration.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from nodecompat.analysis import build_compatibility_matrix
from nodecompat.contracts import CompatibilityMatrix, NodeConnectionInfo
from tests.fixtures.nodes import sample_catalog

# =============================================================================
# Hypothesis Profiles
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def catalog() -> list[NodeConnectionInfo]:
    """Small n8n catalog: trigger, actions, branching, and AI nodes."""
    return sample_catalog()


@pytest.fixture
def matrix(catalog: list[NodeConnectionInfo]) -> CompatibilityMatrix:
    """Matrix built over the sample catalog."""
    return build_compatibility_matrix(catalog)
