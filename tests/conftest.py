"""Shared pytest fixtures for tinywire tests."""

import pytest

from tinywire.container import Container
from tinywire.lock_mode import LockMode
from tinywire.providers import ConstructorDependenciesExtractor, Lifetime


@pytest.fixture()
def container() -> Container:
    """Default container: transient lifetime, thread-locked singletons."""
    return Container()


@pytest.fixture()
def container_unlocked() -> Container:
    """Container without singleton locking."""
    return Container(lock_mode=LockMode.NONE)


@pytest.fixture()
def container_singleton() -> Container:
    """Container with singleton as the default lifetime."""
    return Container(default_lifetime=Lifetime.SINGLETON)


@pytest.fixture()
def dependencies_extractor() -> ConstructorDependenciesExtractor:
    """ConstructorDependenciesExtractor instance."""
    return ConstructorDependenciesExtractor()
