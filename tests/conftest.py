"""Pytest configuration and shared fixtures for the gdoc2md test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from gdoc2md.normalize import NormalizeContext
from gdoc2md.options import ConversionOptions

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def context() -> NormalizeContext:
    """Provide a normalization context with default options."""
    return NormalizeContext(options=ConversionOptions())


@pytest.fixture
def make_context():
    """Provide a factory for normalization contexts with custom options."""

    def factory(**kwargs) -> NormalizeContext:
        return NormalizeContext(options=ConversionOptions(**kwargs))

    return factory
