"""Tests for ManageableDiscovery: eager bindings and the resource path index."""

import pytest

from bindery import BindingError, ManageableDiscovery, Resource


@pytest.fixture
def manageable(files_repo):
    discovery = ManageableDiscovery(files_repo)
    discovery.define("type1")
    return discovery


def test_find_unknown_type_is_empty(manageable):
    assert manageable.find("foo") == []
    assert manageable.find_bindings("foo", lambda binding: True) == []


def test_bind_without_resources_fails(manageable):
    """CRITICAL: eager bindings never hold zero resources.

    Why: A binding that binds nothing is almost always a typo in the query.
    """
    with pytest.raises(BindingError, match='Did not find any resources to bind for query "/foo".'):
        manageable.bind("/foo", "type1")

    assert len(manageable) == 0


def test_resources_are_snapshotted_at_bind_time(manageable, files_repo):
    manageable.bind("/data/*", "type1")

    files_repo.add(Resource("/data/file4"))

    assert manageable.get_bindings("/data/file4") == []
    (binding,) = manageable.get_bindings("/data/file2")
    assert [r.path for r in binding.get_resources()] == ["/data/file2", "/data/file3"]


def test_literal_query_indexes_only_its_resource(manageable):
    manageable.bind("/data", "type1")

    assert [b.query for b in manageable.get_bindings("/data")] == ["/data"]
    assert manageable.get_bindings("/data/file2") == []


def test_unbind_clears_resource_path_index(manageable):
    manageable.bind("/file*", "type1")
    manageable.bind("/file1", "type1")

    manageable.unbind("/file*")

    assert [b.query for b in manageable.get_bindings("/file1")] == ["/file1"]
    assert manageable.get_bindings("/file2") == []
