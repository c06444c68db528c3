"""Local in-memory binding store.

Simple dict-based storage suitable for single-process use and testing.

Usage:
    index = BindingIndex(store=LocalBindingStore())
"""

from __future__ import annotations

from bindery.core.binding import Binding
from bindery.errors import StorageCorruptError


class LocalBindingStore:
    """Bindings kept in a dict keyed by id.

    Structure:
        _bindings[binding_id] = binding
    """

    def __init__(self) -> None:
        self._bindings: dict[int, Binding] = {}

    def get(self, binding_id: int) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError:
            raise StorageCorruptError.missing_binding(binding_id) from None

    def put(self, binding_id: int, binding: Binding) -> None:
        self._bindings[binding_id] = binding

    def delete(self, binding_id: int) -> None:
        self._bindings.pop(binding_id, None)

    def clear(self) -> None:
        self._bindings.clear()

    def __contains__(self, binding_id: object) -> bool:
        return binding_id in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)
