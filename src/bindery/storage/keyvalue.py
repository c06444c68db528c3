"""Key-value store backends.

`InMemoryKeyValueStore` keeps JSON-encoded values in a dict, so whatever goes
in has to survive serialization, exactly as with an external store.
`KeyValueBindingStore` keeps one record per binding in such a store and
materializes bindings only when they are asked for.

Usage:
    store = InMemoryKeyValueStore()
    store.set("//nextId", 1)
    store.get("//nextId")  # 1
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from bindery.core.binding import Binding, binding_from_dict
from bindery.core.schema import BindingType
from bindery.errors import StorageCorruptError
from bindery.storage.protocol import KeyValueStore

logger = logging.getLogger(__name__)

BINDING_KEY_PREFIX = "b#"


class InMemoryKeyValueStore:
    """Dict-backed key-value store holding JSON strings."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except TypeError as e:
            raise TypeError(f'Cannot store the value for key "{key}": {e}') from e

    def remove(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def exists(self, key: str) -> bool:
        return key in self._data

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        return {key: self.get(key, default) for key in keys}

    def keys(self) -> Iterator[str]:
        return iter(list(self._data))

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


def binding_key(binding_id: int) -> str:
    return f"{BINDING_KEY_PREFIX}{binding_id}"


class KeyValueBindingStore:
    """Binding records in a key-value store, loaded on demand.

    Each binding is stored under `b#<id>` as its `to_dict()` form. Loaded
    bindings are cached; restored resource bindings are uninitialized.

    Args:
        store: Backing key-value store.
        get_type: Looks up binding types by name when restoring records.
    """

    def __init__(self, store: KeyValueStore, get_type: Callable[[str], BindingType]):
        self._store = store
        self._get_type = get_type
        self._cache: dict[int, Binding] = {}

    def get(self, binding_id: int) -> Binding:
        if binding_id in self._cache:
            return self._cache[binding_id]
        data = self._store.get(binding_key(binding_id))
        if data is None:
            raise StorageCorruptError.missing_binding(binding_id)
        binding = binding_from_dict(data, self._get_type)
        self._cache[binding_id] = binding
        logger.debug("Loaded binding %s from key-value store", binding_id)
        return binding

    def put(self, binding_id: int, binding: Binding) -> None:
        self._store.set(binding_key(binding_id), binding.to_dict())
        self._cache[binding_id] = binding

    def delete(self, binding_id: int) -> None:
        self._store.remove(binding_key(binding_id))
        self._cache.pop(binding_id, None)

    def clear(self) -> None:
        for key in self._store.keys():
            if key.startswith(BINDING_KEY_PREFIX):
                self._store.remove(key)
        self._cache.clear()

    def __contains__(self, binding_id: object) -> bool:
        if not isinstance(binding_id, int):
            return False
        return binding_id in self._cache or self._store.exists(binding_key(binding_id))

    def __len__(self) -> int:
        return sum(1 for key in self._store.keys() if key.startswith(BINDING_KEY_PREFIX))
