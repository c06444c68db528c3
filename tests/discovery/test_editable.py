"""Tests for the lazy, glob-scanning discoveries.

EditableDiscovery, KeyValueStoreDiscovery and JsonDiscovery resolve their
bindings lazily and match resource paths against the stored queries.
"""

import pytest

from bindery import NoSuchTypeError, Resource


def test_find_unknown_type_fails(lazy_discovery):
    with pytest.raises(NoSuchTypeError, match='The binding type "foo" has not been defined.'):
        lazy_discovery.find("foo")


def test_find_bindings_of_unknown_type_fails(lazy_discovery):
    with pytest.raises(NoSuchTypeError):
        lazy_discovery.find_bindings("foo", lambda binding: True)


def test_query_without_resources_is_accepted(lazy_discovery, files_repo):
    lazy_discovery.define("type1")
    lazy_discovery.bind("/later/*", "type1")

    files_repo.add(Resource("/later/file"))

    (binding,) = lazy_discovery.get_bindings("/later/file")
    assert [r.path for r in binding.get_resources()] == ["/later/file"]


def test_literal_query_applies_below_its_path(lazy_discovery):
    lazy_discovery.define("type1")
    lazy_discovery.bind("/data", "type1")

    assert [b.query for b in lazy_discovery.get_bindings("/data")] == ["/data"]
    assert [b.query for b in lazy_discovery.get_bindings("/data/file2")] == ["/data"]
    assert lazy_discovery.get_bindings("/database") == []


def test_resolved_bindings_keep_their_resources(lazy_discovery, files_repo):
    """Resolution is memoized once the resources were read."""
    lazy_discovery.define("type1")
    lazy_discovery.bind("/data/*", "type1")
    (binding,) = lazy_discovery.find("type1")
    assert [r.path for r in binding.get_resources()] == ["/data/file2", "/data/file3"]

    files_repo.add(Resource("/data/file4"))

    assert [b.query for b in lazy_discovery.get_bindings("/data/file4")] == ["/data/*"]
    assert [r.path for r in binding.get_resources()] == ["/data/file2", "/data/file3"]
