# tests/conftest.py
import pytest
from hypothesis import settings

from approxium.core.registry import ApproxRegistry, _bootstrap_default_registry

settings.register_profile("ci", deadline=None)
settings.load_profile("ci")


@pytest.fixture
def fresh_registry() -> ApproxRegistry:
    return _bootstrap_default_registry()

@pytest.fixture
def empty_registry() -> ApproxRegistry:
    return ApproxRegistry()
