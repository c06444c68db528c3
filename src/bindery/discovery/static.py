"""Read-only discovery over precomputed tables.

`PythonDiscoveryStorage` writes subclasses of `StaticDiscovery` whose class
attributes hold a frozen copy of a discovery. Lookups by resource path use
the resource paths resolved when the module was generated; bindings are
rebuilt from the tables on first access and resolve their queries lazily.

Usage:
    class AppDiscovery(StaticDiscovery):
        TYPES = {"type1": {"name": "type1", "parameters": [], "binding_class": None}}
        BINDINGS = {1: {"kind": "resource", "uuid": "...", "type": "type1",
                        "parameters": {}, "query": "/file1", "language": "glob"}}
        QUERY_INDEX = {"/file1": [1]}
        TYPE_INDEX = {"type1": [1]}
        RESOURCE_PATH_INDEX = {"/file1": [1]}
        UUID_INDEX = {"...": 1}
        NEXT_ID = 2

    AppDiscovery(repo).get_bindings("/file1")
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from bindery.core.binding import Binding, binding_from_dict
from bindery.core.schema import BindingType
from bindery.discovery.base import IndexedDiscovery
from bindery.errors import StorageCorruptError
from bindery.index import IndexState, LookupStrategy
from bindery.storage.protocol import BindingStore


class _TableStore:
    """Binding store reading serialized bindings from a class table."""

    def __init__(self, table: Mapping[int, Mapping[str, Any]], get_type: Callable[[str], BindingType]):
        self._table = table
        self._get_type = get_type
        self._cache: dict[int, Binding] = {}

    def get(self, binding_id: int) -> Binding:
        if binding_id not in self._cache:
            if binding_id not in self._table:
                raise StorageCorruptError.missing_binding(binding_id)
            self._cache[binding_id] = binding_from_dict(self._table[binding_id], self._get_type)
        return self._cache[binding_id]

    def put(self, binding_id: int, binding: Binding) -> None:
        raise TypeError("Static discoveries are read-only.")

    def delete(self, binding_id: int) -> None:
        raise TypeError("Static discoveries are read-only.")

    def clear(self) -> None:
        raise TypeError("Static discoveries are read-only.")

    def __contains__(self, binding_id: object) -> bool:
        return binding_id in self._table

    def __len__(self) -> int:
        return len(self._table)


class StaticDiscovery(IndexedDiscovery):
    """Discovery frozen into class attributes.

    `find()` returns an empty list for unknown types.

    Args:
        repository: Repository the binding queries are resolved against.
        initializers: Extra binding initializers.
    """

    TYPES: ClassVar[dict[str, dict[str, Any]]] = {}
    BINDINGS: ClassVar[dict[int, dict[str, Any]]] = {}
    QUERY_INDEX: ClassVar[dict[str, list[int]]] = {}
    TYPE_INDEX: ClassVar[dict[str, list[int]]] = {}
    RESOURCE_PATH_INDEX: ClassVar[dict[str, list[int]]] = {}
    UUID_INDEX: ClassVar[dict[str, int]] = {}
    NEXT_ID: ClassVar[int] = 1

    lookup_strategy = LookupStrategy.RESOURCE_PATH_INDEX

    def _create_store(self) -> BindingStore:
        return _TableStore(self.BINDINGS, lambda name: self._index.get_type(name))

    def _load(self) -> None:
        types = {name: BindingType.from_dict(data) for name, data in self.TYPES.items()}
        state = IndexState(
            next_id=self.NEXT_ID,
            query_index={k: list(v) for k, v in self.QUERY_INDEX.items()},
            type_index={k: list(v) for k, v in self.TYPE_INDEX.items()},
            resource_path_index={k: list(v) for k, v in self.RESOURCE_PATH_INDEX.items()},
            uuid_index=dict(self.UUID_INDEX),
        )
        self._index.restore(state, types)

    def _find_unknown_type(self, type_name: str) -> list[Binding]:
        return []
