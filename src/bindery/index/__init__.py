"""Binding index: the synchronized id maps shared by every discovery."""

from bindery.index.core import BindingIndex
from bindery.index.models import IndexState, LookupStrategy

__all__ = [
    "BindingIndex",
    "IndexState",
    "LookupStrategy",
]
