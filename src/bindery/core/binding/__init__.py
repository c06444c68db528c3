"""Binding entities, resource resolution and initializers."""

from bindery.core.binding.initializer import (
    BindingInitializer,
    InitializerChain,
    RepositoryInitializer,
)
from bindery.core.binding.models import Binding, ClassBinding, ResourceBinding
from bindery.core.binding.operations import binding_from_dict, types_by_name
from bindery.core.binding.resolution import EagerResources, LazyResources, ResourceResolution

__all__ = [
    # Models
    "Binding",
    "ResourceBinding",
    "ClassBinding",
    # Resolution
    "EagerResources",
    "LazyResources",
    "ResourceResolution",
    # Initializers
    "BindingInitializer",
    "RepositoryInitializer",
    "InitializerChain",
    # Operations
    "binding_from_dict",
    "types_by_name",
]
