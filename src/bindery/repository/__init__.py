"""Resource repositories consumed by discoveries."""

from bindery.repository.local import InMemoryRepository
from bindery.repository.models import Resource
from bindery.repository.protocol import ResourceRepository

__all__ = [
    "Resource",
    "ResourceRepository",
    "InMemoryRepository",
]
