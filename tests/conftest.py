"""Shared pytest fixtures for diresolve tests."""

from datetime import datetime

import pytest

from diresolve import DictRegistry, Resolve
from diresolve._internal.descriptors import ParameterDescriptorExtractor


@pytest.fixture()
def registry() -> DictRegistry:
    """Empty dict-backed registry, filled in by individual tests."""
    return DictRegistry()


@pytest.fixture()
def resolve(registry: DictRegistry) -> Resolve:
    """Resolver bound to the ``registry`` fixture."""
    return Resolve(registry)


@pytest.fixture()
def resolve_without_registry() -> Resolve:
    """Resolver created without a registry."""
    return Resolve()


@pytest.fixture()
def extractor() -> ParameterDescriptorExtractor:
    """ParameterDescriptorExtractor instance."""
    return ParameterDescriptorExtractor()


@pytest.fixture()
def start_at() -> datetime:
    return datetime(2020, 1, 1)
