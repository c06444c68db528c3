"""Core primitives: binding types, bindings and query matching."""

from bindery.core.binding import (
    Binding,
    BindingInitializer,
    ClassBinding,
    EagerResources,
    InitializerChain,
    LazyResources,
    RepositoryInitializer,
    ResourceBinding,
    binding_from_dict,
)
from bindery.core.query import (
    DEFAULT_LANGUAGE,
    QueryLanguage,
    glob_match,
    is_base_path,
    resource_path_matches_query,
)
from bindery.core.schema import (
    BindingParameter,
    BindingType,
    ConstraintViolation,
    ParameterValidator,
    SimpleParameterValidator,
    ViolationCode,
)

__all__ = [
    # Schema
    "BindingParameter",
    "BindingType",
    "ConstraintViolation",
    "ParameterValidator",
    "SimpleParameterValidator",
    "ViolationCode",
    # Bindings
    "Binding",
    "ResourceBinding",
    "ClassBinding",
    "EagerResources",
    "LazyResources",
    "BindingInitializer",
    "RepositoryInitializer",
    "InitializerChain",
    "binding_from_dict",
    # Query
    "QueryLanguage",
    "DEFAULT_LANGUAGE",
    "glob_match",
    "is_base_path",
    "resource_path_matches_query",
]
