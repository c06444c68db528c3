"""Discovery protocols.

`Discovery` is the read side every variant offers. `EditableDiscoveryProtocol`
adds registration of types and bindings.

Usage:
    def load_translations(discovery: Discovery) -> list[Resource]:
        resources = []
        for binding in discovery.find("translations"):
            resources.extend(binding.get_resources())
        return resources
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from bindery.core.binding import Binding
from bindery.core.schema import BindingType

BindingPredicate = Callable[[Binding], bool]


@runtime_checkable
class Discovery(Protocol):
    """Answers lookups of bindings by type, by resource path, or both."""

    def find(self, type_name: str) -> list[Binding]:
        """Bindings of a type in insertion order."""
        ...

    def find_bindings(self, type_name: str, expr: BindingPredicate | None = None) -> list[Binding]:
        """Bindings of a type accepted by a predicate."""
        ...

    def get_bindings(
        self, resource_path: str | None = None, type_name: str | None = None
    ) -> list[Binding]:
        """Bindings applying to a resource path and/or of a type."""
        ...

    def has_bindings(
        self, type_name: str | None = None, expr: BindingPredicate | None = None
    ) -> bool:
        """Check whether any (matching) binding exists."""
        ...

    def get_binding(self, uuid: UUID) -> Binding:
        """Get a binding by uuid. Raises NoSuchBindingError."""
        ...

    def has_binding(self, uuid: UUID) -> bool: ...

    def get_type(self, type_name: str) -> BindingType:
        """Get a defined type. Raises NoSuchTypeError."""
        ...

    def get_types(self) -> list[BindingType]: ...

    def has_type(self, type_name: str) -> bool: ...

    def has_types(self) -> bool: ...


@runtime_checkable
class EditableDiscoveryProtocol(Discovery, Protocol):
    """Discovery that types and bindings can be registered with."""

    def define(self, binding_type: BindingType | str) -> None: ...

    def undefine(self, type_name: str) -> None: ...

    def bind(
        self,
        query: str,
        type_name: str,
        parameters: Mapping[str, Any] | None = None,
        language: str = "glob",
    ) -> None: ...

    def unbind(
        self,
        query: str,
        type_name: str | None = None,
        parameters: Mapping[str, Any] | None = None,
        language: str | None = None,
    ) -> None: ...

    def add_binding(self, binding: Binding) -> None: ...

    def remove_binding(self, uuid: UUID) -> None: ...

    def remove_bindings(
        self, type_name: str | None = None, expr: BindingPredicate | None = None
    ) -> None: ...

    def clear(self) -> None: ...
