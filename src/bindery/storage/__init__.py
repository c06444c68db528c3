"""Storage backends."""

from bindery.storage.allocator import IdAllocator
from bindery.storage.codegen import PythonDiscoveryStorage
from bindery.storage.keyvalue import InMemoryKeyValueStore, KeyValueBindingStore
from bindery.storage.local import LocalBindingStore
from bindery.storage.protocol import BindingStore, KeyValueStore

__all__ = [
    "BindingStore",
    "KeyValueStore",
    "LocalBindingStore",
    "KeyValueBindingStore",
    "InMemoryKeyValueStore",
    "IdAllocator",
    "PythonDiscoveryStorage",
]
