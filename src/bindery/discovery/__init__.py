"""Discovery variants.

EditableDiscovery and ManageableDiscovery keep everything in memory.
KeyValueStoreDiscovery and JsonDiscovery persist on every change.
StaticDiscovery is the base class of generated discoveries.
"""

from bindery.discovery.base import AbstractDiscovery, IndexedDiscovery
from bindery.discovery.editable import EditableDiscovery
from bindery.discovery.json_file import DiscoveryDocument, JsonDiscovery
from bindery.discovery.keyvalue import KeyValueStoreDiscovery
from bindery.discovery.manageable import ManageableDiscovery
from bindery.discovery.null import NullDiscovery
from bindery.discovery.protocol import BindingPredicate, Discovery, EditableDiscoveryProtocol
from bindery.discovery.static import StaticDiscovery

__all__ = [
    # Protocols
    "Discovery",
    "EditableDiscoveryProtocol",
    "BindingPredicate",
    # Base classes
    "IndexedDiscovery",
    "AbstractDiscovery",
    # In-memory
    "EditableDiscovery",
    "ManageableDiscovery",
    "NullDiscovery",
    # Persistent
    "KeyValueStoreDiscovery",
    "JsonDiscovery",
    "DiscoveryDocument",
    "StaticDiscovery",
]
