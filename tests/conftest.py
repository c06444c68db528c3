"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from bindery import (
    EditableDiscovery,
    InMemoryKeyValueStore,
    InMemoryRepository,
    JsonDiscovery,
    KeyValueStoreDiscovery,
    ManageableDiscovery,
    Resource,
)


@pytest.fixture
def repo():
    """Empty in-memory repository."""
    return InMemoryRepository()


@pytest.fixture
def files_repo():
    """Repository with /file1, /file2 and a /data directory."""
    return InMemoryRepository(
        [
            Resource("/file1"),
            Resource("/file2"),
            Resource("/data"),
            Resource("/data/file2"),
            Resource("/data/file3"),
        ]
    )


DISCOVERY_VARIANTS = ["editable", "manageable", "keyvalue", "json"]


def make_discovery(variant, repository, tmp_path):
    """Create a mutable discovery of the given variant."""
    if variant == "editable":
        return EditableDiscovery(repository)
    if variant == "manageable":
        return ManageableDiscovery(repository)
    if variant == "keyvalue":
        return KeyValueStoreDiscovery(repository, InMemoryKeyValueStore())
    if variant == "json":
        return JsonDiscovery(tmp_path / "discovery.json", repository)
    raise ValueError(variant)


@pytest.fixture(params=DISCOVERY_VARIANTS)
def discovery(request, files_repo, tmp_path):
    """Every mutable discovery variant over `files_repo`."""
    return make_discovery(request.param, files_repo, tmp_path)


@pytest.fixture(params=["editable", "keyvalue", "json"])
def lazy_discovery(request, files_repo, tmp_path):
    """Variants with lazy bindings and glob-scan lookups."""
    return make_discovery(request.param, files_repo, tmp_path)
