"""bindery: resource discovery and binding index.

Usage:
    from bindery import (
        BindingParameter, BindingType, EditableDiscovery, InMemoryRepository, Resource,
    )

    repo = InMemoryRepository([Resource("/app/trans/errors.fr.xlf")])
    discovery = EditableDiscovery(repo)
    discovery.define(BindingType("translations", [BindingParameter("domain", required=True)]))
    discovery.bind("/app/trans/*.xlf", "translations", {"domain": "errors"})

    for binding in discovery.find("translations"):
        print(binding.get_parameter_value("domain"), binding.get_resources())
"""

__version__ = "0.1.0"

# Core primitives
from bindery.core import (
    Binding,
    BindingInitializer,
    BindingParameter,
    BindingType,
    ClassBinding,
    ConstraintViolation,
    EagerResources,
    InitializerChain,
    LazyResources,
    ParameterValidator,
    RepositoryInitializer,
    ResourceBinding,
    SimpleParameterValidator,
    ViolationCode,
    glob_match,
    resource_path_matches_query,
)

# Configuration
from bindery.config import DiscoverySettings

# Discoveries
from bindery.discovery import (
    Discovery,
    EditableDiscovery,
    JsonDiscovery,
    KeyValueStoreDiscovery,
    ManageableDiscovery,
    NullDiscovery,
    StaticDiscovery,
)

# Errors
from bindery.errors import (
    BindingError,
    BindingNotAcceptedError,
    DiscoveryError,
    DuplicateTypeError,
    LoadingError,
    MissingParameterError,
    NoSuchBindingError,
    NoSuchParameterError,
    NoSuchTypeError,
    NotInitializedError,
    StorageCorruptError,
    UnsupportedLanguageError,
)

# Index
from bindery.index import BindingIndex, LookupStrategy

# Repositories
from bindery.repository import InMemoryRepository, Resource, ResourceRepository

# Storage
from bindery.storage import (
    InMemoryKeyValueStore,
    KeyValueStore,
    PythonDiscoveryStorage,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "BindingParameter",
    "BindingType",
    "ConstraintViolation",
    "ParameterValidator",
    "SimpleParameterValidator",
    "ViolationCode",
    "Binding",
    "ResourceBinding",
    "ClassBinding",
    "EagerResources",
    "LazyResources",
    "BindingInitializer",
    "RepositoryInitializer",
    "InitializerChain",
    "glob_match",
    "resource_path_matches_query",
    # Discovery
    "Discovery",
    "EditableDiscovery",
    "ManageableDiscovery",
    "KeyValueStoreDiscovery",
    "JsonDiscovery",
    "StaticDiscovery",
    "NullDiscovery",
    # Index
    "BindingIndex",
    "LookupStrategy",
    # Repository
    "Resource",
    "ResourceRepository",
    "InMemoryRepository",
    # Storage
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "PythonDiscoveryStorage",
    # Config
    "DiscoverySettings",
    # Errors
    "DiscoveryError",
    "NoSuchTypeError",
    "DuplicateTypeError",
    "NoSuchParameterError",
    "MissingParameterError",
    "BindingError",
    "UnsupportedLanguageError",
    "NoSuchBindingError",
    "BindingNotAcceptedError",
    "NotInitializedError",
    "LoadingError",
    "StorageCorruptError",
]
