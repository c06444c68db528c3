"""The binding index: synchronized maps over one set of bindings.

Every binding gets an id from a monotonic allocator and is recorded in:

    query index          binding query -> ids   (resource bindings)
    type index           type name -> ids       (every binding)
    resource path index  resolved path -> ids   (RESOURCE_PATH_INDEX only)
    uuid index           uuid -> id

The maps are changed together. Inserts do everything that can fail
(type lookup, duplicate scan, resource resolution) before touching any map,
and removal is plain dict manipulation, so no caller ever observes a
partially updated index.

Usage:
    index = BindingIndex(LookupStrategy.GLOB_SCAN)
    index.define(BindingType("type1"))
    index.insert(ResourceBinding.lazy("/file1", index.get_type("type1"), {}, repo))
    index.ids_for_resource_path("/file1")  # [1]
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from bindery.core.binding import Binding, InitializerChain, ResourceBinding
from bindery.core.query import resource_path_matches_query
from bindery.core.schema import BindingType
from bindery.errors import (
    BindingNotAcceptedError,
    DuplicateTypeError,
    NoSuchTypeError,
    StorageCorruptError,
)
from bindery.index.models import IndexState, LookupStrategy
from bindery.storage.allocator import IdAllocator
from bindery.storage.local import LocalBindingStore
from bindery.storage.protocol import BindingStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Entry:
    """Index keys of one binding, so removal never has to load it."""

    type_name: str
    uuid: UUID
    query: str | None = None
    resource_paths: tuple[str, ...] = ()


def _add(index: dict[str, dict[int, None]], key: str, binding_id: int) -> None:
    index.setdefault(key, {})[binding_id] = None


def _discard(index: dict[str, dict[int, None]], key: str, binding_id: int) -> None:
    ids = index.get(key)
    if ids is None:
        return
    ids.pop(binding_id, None)
    if not ids:
        del index[key]


class BindingIndex:
    """Binding types plus the synchronized id maps of their bindings.

    One class serves every discovery variant. The lookup strategy picks how
    resource paths are matched; the store picks where bindings live.

    Args:
        strategy: How bindings are found for a resource path.
        store: Id-to-binding storage (in-memory dict by default).
        initializers: Run once on each stored binding before it is first
            handed out.
    """

    def __init__(
        self,
        strategy: LookupStrategy = LookupStrategy.GLOB_SCAN,
        store: BindingStore | None = None,
        initializers: InitializerChain | None = None,
    ):
        self._strategy = strategy
        self._store: BindingStore = store if store is not None else LocalBindingStore()
        self._initializers = initializers if initializers is not None else InitializerChain()
        self._allocator = IdAllocator()

        self._types: dict[str, BindingType] = {}
        self._entries: dict[int, _Entry] = {}
        # Id sets are dicts with None values, ordered by insertion (which is id order)
        self._query_index: dict[str, dict[int, None]] = {}
        self._type_index: dict[str, dict[int, None]] = {}
        self._resource_path_index: dict[str, dict[int, None]] = {}
        self._uuid_index: dict[UUID, int] = {}
        self._initialized: set[int] = set()

    @property
    def strategy(self) -> LookupStrategy:
        return self._strategy

    # Types

    def define(self, binding_type: BindingType) -> None:
        """Register a type under its name.

        Raises:
            DuplicateTypeError: If a type with the name is already defined.
        """
        if binding_type.name in self._types:
            raise DuplicateTypeError.for_type_name(binding_type.name)
        self._types[binding_type.name] = binding_type
        logger.debug("Defined binding type %s", binding_type.name)

    def undefine(self, type_name: str) -> list[int]:
        """Remove a type and every binding of it.

        Returns:
            Ids of the removed bindings. Empty if the type was not defined.
        """
        if type_name not in self._types:
            return []
        removed = self.remove(list(self._type_index.get(type_name, ())))
        del self._types[type_name]
        logger.debug("Undefined binding type %s with %d bindings", type_name, len(removed))
        return removed

    def get_type(self, type_name: str) -> BindingType:
        """Get a defined type.

        Raises:
            NoSuchTypeError: If the type is not defined.
        """
        try:
            return self._types[type_name]
        except KeyError:
            raise NoSuchTypeError.for_type_name(type_name) from None

    def has_type(self, type_name: str) -> bool:
        return type_name in self._types

    def get_types(self) -> list[BindingType]:
        return list(self._types.values())

    # Mutation

    def _duplicate_candidates(self, binding: Binding) -> Iterable[int]:
        if isinstance(binding, ResourceBinding):
            return self._query_index.get(binding.query, {})
        return self._type_index.get(binding.type_name, {})

    def find_duplicate(self, binding: Binding) -> int | None:
        """Id of a stored binding equal to `binding`.

        Only bindings under the same query (or, for bindings without a query,
        of the same type) are compared.
        """
        if binding.uuid in self._uuid_index:
            return self._uuid_index[binding.uuid]
        for binding_id in self._duplicate_candidates(binding):
            if self._store.get(binding_id).equals(binding):
                return binding_id
        return None

    def insert(self, binding: Binding, initialized: bool = True) -> int | None:
        """Add a binding to every applicable map.

        Args:
            binding: Binding to add.
            initialized: False for bindings restored from persisted state;
                initializers then run when the binding is first read.

        Returns:
            The new id, or None if an equal binding is already stored.

        Raises:
            NoSuchTypeError: If the binding's type is not defined.
            BindingNotAcceptedError: If the type does not accept the binding class.
            BindingError: If resolving the resources for the path index fails.
        """
        binding_type = self.get_type(binding.type_name)
        if not binding_type.accepts_binding(binding):
            raise BindingNotAcceptedError.for_binding_class(binding_type.name, type(binding))
        if self.find_duplicate(binding) is not None:
            logger.debug("Ignoring duplicate %r", binding)
            return None

        query = binding.query if isinstance(binding, ResourceBinding) else None
        resource_paths: tuple[str, ...] = ()
        if self._strategy is LookupStrategy.RESOURCE_PATH_INDEX and isinstance(binding, ResourceBinding):
            resource_paths = tuple(dict.fromkeys(r.path for r in binding.get_resources()))

        binding_id = self._allocator.allocate()
        self._store.put(binding_id, binding)
        self._commit(
            binding_id,
            _Entry(binding.type_name, binding.uuid, query, resource_paths),
        )
        if initialized:
            self._initialized.add(binding_id)
        logger.debug("Indexed %r under id %d", binding, binding_id)
        return binding_id

    def _commit(self, binding_id: int, entry: _Entry) -> None:
        self._entries[binding_id] = entry
        _add(self._type_index, entry.type_name, binding_id)
        if entry.query is not None:
            _add(self._query_index, entry.query, binding_id)
        for path in entry.resource_paths:
            _add(self._resource_path_index, path, binding_id)
        self._uuid_index[entry.uuid] = binding_id

    def remove(self, binding_ids: Iterable[int]) -> list[int]:
        """Remove bindings from every map and from the store.

        Unknown ids are skipped.

        Returns:
            Ids actually removed.
        """
        removed: list[int] = []
        for binding_id in binding_ids:
            entry = self._entries.pop(binding_id, None)
            if entry is None:
                continue
            _discard(self._type_index, entry.type_name, binding_id)
            if entry.query is not None:
                _discard(self._query_index, entry.query, binding_id)
            for path in entry.resource_paths:
                _discard(self._resource_path_index, path, binding_id)
            self._uuid_index.pop(entry.uuid, None)
            self._initialized.discard(binding_id)
            self._store.delete(binding_id)
            removed.append(binding_id)
        return removed

    def clear(self) -> None:
        """Remove every binding and every type. Ids are not reused afterwards."""
        self._store.clear()
        self.reset()
        logger.debug("Cleared binding index")

    def reset(self) -> None:
        """Forget every type and binding without touching the store."""
        self._types.clear()
        self._entries.clear()
        self._query_index.clear()
        self._type_index.clear()
        self._resource_path_index.clear()
        self._uuid_index.clear()
        self._initialized.clear()

    # Lookup

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, binding_id: object) -> bool:
        return binding_id in self._entries

    def get(self, binding_id: int) -> Binding:
        """Get a binding, running the initializers on its first read.

        Raises:
            KeyError: If no binding has the id.
            StorageCorruptError: If the id is indexed but the binding is not stored.
        """
        if binding_id not in self._entries:
            raise KeyError(f"No binding with id {binding_id}")
        binding = self._store.get(binding_id)
        if binding_id not in self._initialized:
            self._initializers.initialize(binding)
            self._initialized.add(binding_id)
        return binding

    def peek(self, binding_id: int) -> Binding:
        """Get a binding without initializing it. For filtering and removal.

        Raises:
            KeyError: If no binding has the id.
            StorageCorruptError: If the id is indexed but the binding is not stored.
        """
        if binding_id not in self._entries:
            raise KeyError(f"No binding with id {binding_id}")
        return self._store.get(binding_id)

    def get_many(self, binding_ids: Iterable[int]) -> list[Binding]:
        return [self.get(binding_id) for binding_id in binding_ids]

    def all_ids(self) -> list[int]:
        return sorted(self._entries)

    def ids_for_type(self, type_name: str) -> list[int]:
        return list(self._type_index.get(type_name, ()))

    def ids_for_query(self, query: str) -> list[int]:
        """Ids of bindings whose stored query is exactly `query`."""
        return list(self._query_index.get(query, ()))

    def id_for_uuid(self, uuid: UUID) -> int | None:
        return self._uuid_index.get(uuid)

    def ids_for_resource_path(self, resource_path: str) -> list[int]:
        """Ids of resource bindings that apply to a concrete path, in id order."""
        if self._strategy is LookupStrategy.RESOURCE_PATH_INDEX:
            return list(self._resource_path_index.get(resource_path, ()))
        matched: set[int] = set()
        for query, ids in self._query_index.items():
            if resource_path_matches_query(resource_path, query):
                matched.update(ids)
        return sorted(matched)

    def filter_ids(
        self,
        binding_ids: Iterable[int],
        type_name: str | None = None,
        predicate: Callable[[Binding], bool] | None = None,
    ) -> list[int]:
        """Narrow ids down by exact type name and a binding predicate.

        The predicate sees uninitialized bindings.
        """
        result: list[int] = []
        for binding_id in binding_ids:
            if type_name is not None and self._entries[binding_id].type_name != type_name:
                continue
            if predicate is not None and not predicate(self.peek(binding_id)):
                continue
            result.append(binding_id)
        return result

    # Persistence

    def snapshot(self) -> IndexState:
        """Plain-data copy of the id maps."""
        return IndexState(
            next_id=self._allocator.next_id,
            query_index={k: list(v) for k, v in self._query_index.items()},
            type_index={k: list(v) for k, v in self._type_index.items()},
            resource_path_index={k: list(v) for k, v in self._resource_path_index.items()},
            uuid_index={str(uuid): binding_id for uuid, binding_id in self._uuid_index.items()},
        )

    def restore(self, state: IndexState, types: Mapping[str, BindingType]) -> None:
        """Replace the index contents with persisted state.

        The bindings themselves must already be in (or loadable by) the store.
        They count as uninitialized.

        Raises:
            StorageCorruptError: If the maps disagree with each other.
        """
        entries: dict[int, dict[str, Any]] = {}
        for type_name, ids in state.type_index.items():
            if type_name not in types:
                raise StorageCorruptError.rebuild()
            for binding_id in ids:
                entries[binding_id] = {"type_name": type_name}
        for uuid, binding_id in state.uuid_index.items():
            if binding_id not in entries:
                raise StorageCorruptError.rebuild()
            entries[binding_id]["uuid"] = UUID(uuid)
        for query, ids in state.query_index.items():
            for binding_id in ids:
                if binding_id not in entries:
                    raise StorageCorruptError.rebuild()
                entries[binding_id]["query"] = query
        paths: dict[int, list[str]] = {}
        for path, ids in state.resource_path_index.items():
            for binding_id in ids:
                if binding_id not in entries:
                    raise StorageCorruptError.rebuild()
                paths.setdefault(binding_id, []).append(path)
        if any("uuid" not in data for data in entries.values()):
            raise StorageCorruptError.rebuild()

        self.reset()
        self._types.update(types)
        for binding_id in sorted(entries):
            data = entries[binding_id]
            self._commit(
                binding_id,
                _Entry(
                    type_name=data["type_name"],
                    uuid=data["uuid"],
                    query=data.get("query"),
                    resource_paths=tuple(paths.get(binding_id, ())),
                ),
            )
        # Keep the original per-key id order
        for target, source in (
            (self._query_index, state.query_index),
            (self._type_index, state.type_index),
            (self._resource_path_index, state.resource_path_index),
        ):
            for key, ids in source.items():
                if key in target:
                    target[key] = dict.fromkeys(ids)
        next_id = max(state.next_id, max(entries, default=0) + 1)
        if next_id > self._allocator.next_id:
            self._allocator.restore(next_id)
        logger.debug("Restored binding index with %d bindings", len(entries))
