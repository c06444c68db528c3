"""Discovery persisted in a key-value store.

Layout in the store:

    //types       type name -> serialized type
    //queryIndex  binding query -> binding ids
    //typeIndex   type name -> binding ids
    //uuidIndex   binding uuid -> binding id
    //nextId      next binding id (starts at 1)
    b#<id>        serialized binding

The index maps are read when the discovery is first used. Binding records
are fetched only when a binding is actually needed.

Usage:
    store = InMemoryKeyValueStore()
    discovery = KeyValueStoreDiscovery(repo, store)
    discovery.define("translations")
    discovery.bind("/app/trans/*.xlf", "translations")

    # Later, from the same store
    KeyValueStoreDiscovery(repo, store).find("translations")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from bindery.core.binding import BindingInitializer
from bindery.core.schema import BindingType
from bindery.discovery.editable import EditableDiscovery
from bindery.errors import LoadingError
from bindery.index import IndexState
from bindery.storage.keyvalue import KeyValueBindingStore
from bindery.storage.protocol import BindingStore, KeyValueStore

if TYPE_CHECKING:
    from bindery.repository import ResourceRepository

logger = logging.getLogger(__name__)

TYPES_KEY = "//types"
QUERY_INDEX_KEY = "//queryIndex"
TYPE_INDEX_KEY = "//typeIndex"
UUID_INDEX_KEY = "//uuidIndex"
NEXT_ID_KEY = "//nextId"


class KeyValueStoreDiscovery(EditableDiscovery):
    """Lazy-binding discovery that writes through to a key-value store.

    Args:
        repository: Repository the binding queries are resolved against.
        store: Store holding the discovery.
        initializers: Extra binding initializers.
    """

    def __init__(
        self,
        repository: ResourceRepository,
        store: KeyValueStore,
        initializers: Iterable[BindingInitializer] = (),
    ):
        self._store = store
        super().__init__(repository, initializers)

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def _create_store(self) -> BindingStore:
        return KeyValueBindingStore(self._store, lambda name: self._index.get_type(name))

    def _load(self) -> None:
        values = self._store.get_multiple(
            [TYPES_KEY, QUERY_INDEX_KEY, TYPE_INDEX_KEY, UUID_INDEX_KEY, NEXT_ID_KEY]
        )
        try:
            types = {
                name: BindingType.from_dict(data)
                for name, data in (values[TYPES_KEY] or {}).items()
            }
            state = IndexState.from_dict(
                {
                    "next_id": values[NEXT_ID_KEY] or 1,
                    "query_index": values[QUERY_INDEX_KEY],
                    "type_index": values[TYPE_INDEX_KEY],
                    "uuid_index": values[UUID_INDEX_KEY],
                }
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise LoadingError(f"The key-value store holds malformed discovery data: {e}") from e
        self._index.restore(state, types)
        logger.debug("Loaded %d types and %d bindings from key-value store", len(types), len(self._index))

    def _flush(self) -> None:
        state = self._index.snapshot()
        self._store.set(TYPES_KEY, {t.name: t.to_dict() for t in self._index.get_types()})
        self._store.set(QUERY_INDEX_KEY, state.query_index)
        self._store.set(TYPE_INDEX_KEY, state.type_index)
        self._store.set(UUID_INDEX_KEY, state.uuid_index)
        self._store.set(NEXT_ID_KEY, state.next_id)
