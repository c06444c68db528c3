"""A discovery that never holds anything.

Useful as a default where a discovery is optional.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from bindery.core.binding import Binding
from bindery.core.schema import BindingType
from bindery.discovery.base import coerce_type
from bindery.discovery.protocol import BindingPredicate
from bindery.errors import NoSuchBindingError, NoSuchTypeError


class NullDiscovery:
    """Discovery that ignores every change and finds nothing."""

    def define(self, binding_type: BindingType | str) -> None:
        coerce_type(binding_type)

    def undefine(self, type_name: str) -> None:
        pass

    def bind(
        self,
        query: str,
        type_name: str,
        parameters: Mapping[str, Any] | None = None,
        language: str = "glob",
    ) -> None:
        pass

    def unbind(
        self,
        query: str,
        type_name: str | None = None,
        parameters: Mapping[str, Any] | None = None,
        language: str | None = None,
    ) -> None:
        pass

    def add_binding(self, binding: Binding) -> None:
        pass

    def remove_binding(self, uuid: UUID) -> None:
        pass

    def remove_bindings(
        self, type_name: str | None = None, expr: BindingPredicate | None = None
    ) -> None:
        pass

    def clear(self) -> None:
        pass

    def remove_types(self) -> None:
        pass

    def find(self, type_name: str) -> list[Binding]:
        return []

    def find_bindings(self, type_name: str, expr: BindingPredicate | None = None) -> list[Binding]:
        return []

    def get_bindings(
        self, resource_path: str | None = None, type_name: str | None = None
    ) -> list[Binding]:
        return []

    def has_bindings(
        self, type_name: str | None = None, expr: BindingPredicate | None = None
    ) -> bool:
        return False

    def get_binding(self, uuid: UUID) -> Binding:
        raise NoSuchBindingError.for_uuid(uuid)

    def has_binding(self, uuid: UUID) -> bool:
        return False

    def get_type(self, type_name: str) -> BindingType:
        raise NoSuchTypeError.for_type_name(type_name)

    def get_types(self) -> list[BindingType]:
        return []

    def has_type(self, type_name: str) -> bool:
        return False

    def has_types(self) -> bool:
        return False

    def __len__(self) -> int:
        return 0
