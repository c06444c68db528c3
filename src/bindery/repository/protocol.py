"""Resource repository protocol.

The discovery never mutates a repository; it only resolves queries through it.

Usage:
    repo = InMemoryRepository()
    repo.add(Resource("/app/trans/errors.fr.xlf"))
    discovery = ManageableDiscovery(repo)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from bindery.repository.models import Resource


@runtime_checkable
class ResourceRepository(Protocol):
    """Resolves paths and glob queries to resources."""

    def find(self, query: str, language: str = "glob") -> list[Resource]:
        """Resources matching a path or glob, in a stable order.

        Returns an empty list when nothing matches.
        """
        ...

    def contains(self, query: str, language: str = "glob") -> bool:
        """Check whether a path or glob matches any resource."""
        ...
