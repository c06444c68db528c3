"""Strategies for obtaining the resources of a resource binding.

Eager resolution snapshots the resources once, when the binding is built.
Lazy resolution asks the repository on first access and memoizes the result
for the lifetime of the binding, even if the repository changes later.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bindery.repository import Resource, ResourceRepository


class EagerResources:
    """Resources resolved up front.

    Args:
        resources: The resolved resources.
    """

    __slots__ = ("_resources",)

    def __init__(self, resources: Sequence[Resource]):
        self._resources = tuple(resources)

    @classmethod
    def resolve(cls, repository: ResourceRepository, query: str, language: str = "glob") -> EagerResources:
        return cls(repository.find(query, language))

    @property
    def is_resolved(self) -> bool:
        return True

    def get(self) -> list[Resource]:
        return list(self._resources)


class LazyResources:
    """Resources resolved on first access, then cached.

    Args:
        repository: Repository queried on first access.
        query: Path or glob to resolve.
        language: Query language.
    """

    __slots__ = ("_repository", "_query", "_language", "_resources")

    def __init__(self, repository: ResourceRepository, query: str, language: str = "glob"):
        self._repository = repository
        self._query = query
        self._language = language
        self._resources: tuple[Resource, ...] | None = None

    @property
    def repository(self) -> ResourceRepository:
        return self._repository

    @property
    def is_resolved(self) -> bool:
        return self._resources is not None

    def get(self) -> list[Resource]:
        if self._resources is None:
            self._resources = tuple(self._repository.find(self._query, self._language))
        return list(self._resources)


ResourceResolution = EagerResources | LazyResources
