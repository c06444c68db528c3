"""Storage protocols for swappable backends.

The storage layer abstracts where a discovery keeps its bindings:
- `LocalBindingStore`: in-memory dict (default)
- `KeyValueBindingStore`: records in any `KeyValueStore`, loaded on demand

Usage:
    store = KeyValueBindingStore(InMemoryKeyValueStore(), index.get_type)
    index = BindingIndex(store=store)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Protocol, runtime_checkable

from bindery.core.binding import Binding


@runtime_checkable
class BindingStore(Protocol):
    """Id-to-binding storage owned by one binding index."""

    def get(self, binding_id: int) -> Binding:
        """Get a binding.

        Raises:
            StorageCorruptError: If no binding is stored under the id.
        """
        ...

    def put(self, binding_id: int, binding: Binding) -> None:
        """Store a binding under a fresh id."""
        ...

    def delete(self, binding_id: int) -> None:
        """Remove a binding. Unknown ids are ignored."""
        ...

    def clear(self) -> None:
        """Remove every binding."""
        ...

    def __contains__(self, binding_id: object) -> bool: ...

    def __len__(self) -> int: ...


@runtime_checkable
class KeyValueStore(Protocol):
    """Key to serialized-value storage.

    Values are JSON-compatible: dicts, lists, strings, numbers, booleans, None.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Value stored under the key, `default` if there is none."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one."""
        ...

    def remove(self, key: str) -> bool:
        """Remove a key. Returns True if it existed."""
        ...

    def exists(self, key: str) -> bool:
        """Check whether a key is stored."""
        ...

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Values for several keys, `default` for missing ones."""
        ...

    def keys(self) -> Iterator[str]:
        """Iterate all stored keys."""
        ...

    def clear(self) -> None:
        """Remove every key."""
        ...
