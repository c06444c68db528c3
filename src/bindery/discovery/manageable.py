"""Discovery that snapshots resources when binding.

Bindings are eager: the query is resolved when `bind()` runs and must match
at least one resource. The resolved paths are indexed, so looking up the
bindings of a resource path is a dict access. Resources added to the
repository afterwards are not seen by existing bindings.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bindery.core.binding import Binding, ResourceBinding
from bindery.core.schema import BindingType
from bindery.discovery.base import AbstractDiscovery
from bindery.index import LookupStrategy


class ManageableDiscovery(AbstractDiscovery):
    """In-memory discovery with eager bindings and a resource path index.

    `find()` returns an empty list for types that were never defined.

    Args:
        repository: Repository the binding queries are resolved against.
        initializers: Extra binding initializers.
    """

    lookup_strategy = LookupStrategy.RESOURCE_PATH_INDEX

    def _create_binding(
        self,
        query: str,
        binding_type: BindingType,
        parameters: Mapping[str, Any] | None,
        language: str,
    ) -> ResourceBinding:
        return ResourceBinding.eager(query, binding_type, parameters, self._repository, language)

    def _find_unknown_type(self, type_name: str) -> list[Binding]:
        return []
