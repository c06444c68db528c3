"""Local in-memory resource repository.

Simple dict-based repository suitable for single-process use and testing.

Usage:
    repo = InMemoryRepository([Resource("/file1"), Resource("/file2")])
    repo.find("/file*")  # both resources, sorted by path
"""

from __future__ import annotations

from collections.abc import Iterable

from bindery.core.query import check_language, glob_match, is_base_path, is_dynamic_query
from bindery.repository.models import Resource


class InMemoryRepository:
    """Resources kept in a dict keyed by path.

    Args:
        resources: Initial resources.
    """

    def __init__(self, resources: Iterable[Resource] = ()):
        self._resources: dict[str, Resource] = {}
        for resource in resources:
            self.add(resource)

    def add(self, resource: Resource | str) -> Resource:
        """Add or replace a resource. Bare strings become body-less resources."""
        if isinstance(resource, str):
            resource = Resource(resource)
        if not resource.path.startswith("/"):
            raise ValueError(f'Resource paths must be absolute. Got: "{resource.path}"')
        self._resources[resource.path] = resource
        return resource

    def remove(self, query: str) -> int:
        """Remove matching resources and everything below literal paths.

        Returns:
            Number of removed resources.
        """
        if is_dynamic_query(query):
            doomed = [path for path in self._resources if glob_match(path, query)]
        else:
            doomed = [path for path in self._resources if is_base_path(query, path)]
        for path in doomed:
            del self._resources[path]
        return len(doomed)

    def get(self, path: str) -> Resource:
        """Get a resource by exact path.

        Raises:
            KeyError: If no resource exists at the path.
        """
        try:
            return self._resources[path]
        except KeyError:
            raise KeyError(f'The resource "{path}" does not exist.') from None

    def find(self, query: str, language: str = "glob") -> list[Resource]:
        check_language(language)
        if is_dynamic_query(query):
            return [self._resources[path] for path in sorted(self._resources) if glob_match(path, query)]
        resource = self._resources.get(query)
        return [resource] if resource is not None else []

    def contains(self, query: str, language: str = "glob") -> bool:
        check_language(language)
        if is_dynamic_query(query):
            return any(glob_match(path, query) for path in self._resources)
        return query in self._resources

    def __len__(self) -> int:
        return len(self._resources)
