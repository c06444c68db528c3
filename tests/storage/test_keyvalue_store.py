"""Tests for the key-value store backends."""

import pytest

from bindery import BindingType, ClassBinding, InMemoryKeyValueStore, ResourceBinding
from bindery.core.binding import types_by_name
from bindery.errors import StorageCorruptError
from bindery.storage import BindingStore, KeyValueBindingStore, KeyValueStore, LocalBindingStore


@pytest.fixture
def binding_type():
    return BindingType("type1")


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


def test_backends_satisfy_protocols(store):
    assert isinstance(store, KeyValueStore)
    assert isinstance(LocalBindingStore(), BindingStore)
    assert isinstance(KeyValueBindingStore(store, types_by_name({})), BindingStore)


def test_values_are_copies(store):
    value = {"a": [1, 2]}
    store.set("key", value)
    value["a"].append(3)

    assert store.get("key") == {"a": [1, 2]}


def test_missing_keys_return_default(store):
    assert store.get("missing") is None
    assert store.get("missing", 5) == 5
    assert store.get_multiple(["missing"], default=0) == {"missing": 0}


def test_remove_reports_existence(store):
    store.set("key", 1)

    assert store.exists("key")
    assert store.remove("key")
    assert not store.remove("key")
    assert not store.exists("key")


def test_unserializable_values_are_rejected(store):
    with pytest.raises(TypeError, match='Cannot store the value for key "key"'):
        store.set("key", object())


def test_binding_records_round_trip(store, binding_type):
    bindings = KeyValueBindingStore(store, types_by_name({"type1": binding_type}))
    binding = ResourceBinding("/file1", binding_type)

    bindings.put(1, binding)
    fresh = KeyValueBindingStore(store, types_by_name({"type1": binding_type}))

    assert 1 in fresh
    assert len(fresh) == 1
    assert fresh.get(1) == binding
    assert fresh.get(1) is fresh.get(1)


def test_missing_record_is_corruption(store, binding_type):
    bindings = KeyValueBindingStore(store, types_by_name({"type1": binding_type}))

    with pytest.raises(StorageCorruptError, match="Could not fetch data for binding with ID 3."):
        bindings.get(3)


def test_clear_keeps_other_keys(store, binding_type):
    bindings = KeyValueBindingStore(store, types_by_name({"type1": binding_type}))
    bindings.put(1, ClassBinding("app.Plugin", binding_type))
    store.set("//nextId", 2)

    bindings.clear()

    assert list(store.keys()) == ["//nextId"]
    assert len(bindings) == 0


def test_local_store_missing_id_is_corruption():
    with pytest.raises(StorageCorruptError):
        LocalBindingStore().get(1)
