"""Binding initializers.

Bindings restored from persisted state know their query but not the
repository to resolve it against. Initializers attach such runtime
collaborators. A discovery runs them once per binding it constructs or
deserializes, and never on bindings it only reads to remove them.

Usage:
    initializers = InitializerChain([RepositoryInitializer(repo)])
    initializers.initialize(binding)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from bindery.core.binding.models import Binding, ResourceBinding

if TYPE_CHECKING:
    from bindery.repository import ResourceRepository


@runtime_checkable
class BindingInitializer(Protocol):
    """Prepares bindings of certain classes for use."""

    def accepts_binding(self, binding_class: type[Binding]) -> bool:
        """Whether bindings of this class need this initializer."""
        ...

    def initialize_binding(self, binding: Binding) -> None:
        """Initialize a binding of an accepted class."""
        ...


class RepositoryInitializer:
    """Attaches a repository to uninitialized resource bindings.

    Args:
        repository: Repository resource bindings resolve their queries against.
    """

    def __init__(self, repository: ResourceRepository):
        self._repository = repository

    def accepts_binding(self, binding_class: type[Binding]) -> bool:
        return issubclass(binding_class, ResourceBinding)

    def initialize_binding(self, binding: Binding) -> None:
        if not isinstance(binding, ResourceBinding):
            raise TypeError(f"Expected a ResourceBinding. Got: {type(binding).__name__}")
        if not binding.is_initialized:
            binding.initialize(self._repository)


class InitializerChain:
    """Runs the initializers that accept a binding's class.

    Which initializers accept a class is asked once per class and cached.

    Args:
        initializers: Initializers in the order they should run.
    """

    def __init__(self, initializers: Iterable[BindingInitializer] = ()):
        self._initializers = list(initializers)
        self._by_class: dict[type, list[BindingInitializer]] = {}

    def add(self, initializer: BindingInitializer) -> None:
        self._initializers.append(initializer)
        self._by_class.clear()

    def _for_class(self, binding_class: type[Binding]) -> list[BindingInitializer]:
        if binding_class not in self._by_class:
            self._by_class[binding_class] = [
                initializer
                for initializer in self._initializers
                if initializer.accepts_binding(binding_class)
            ]
        return self._by_class[binding_class]

    def initialize(self, binding: Binding) -> None:
        for initializer in self._for_class(type(binding)):
            initializer.initialize_binding(binding)

    def __len__(self) -> int:
        return len(self._initializers)
