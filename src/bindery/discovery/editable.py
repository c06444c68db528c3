"""Discovery over a live repository.

Bindings are lazy: their queries are resolved on first access, so queries
that match nothing yet are accepted. Bindings are found for a resource path
by testing every stored query, which keeps lookups correct while the
repository changes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bindery.core.binding import Binding, ResourceBinding
from bindery.core.schema import BindingType
from bindery.discovery.base import AbstractDiscovery
from bindery.errors import NoSuchTypeError
from bindery.index import LookupStrategy


class EditableDiscovery(AbstractDiscovery):
    """In-memory discovery with lazy bindings and glob-scan lookups.

    `find()` raises NoSuchTypeError for types that were never defined.

    Args:
        repository: Repository the binding queries are resolved against.
        initializers: Extra binding initializers.
    """

    lookup_strategy = LookupStrategy.GLOB_SCAN

    def _create_binding(
        self,
        query: str,
        binding_type: BindingType,
        parameters: Mapping[str, Any] | None,
        language: str,
    ) -> ResourceBinding:
        return ResourceBinding.lazy(query, binding_type, parameters, self._repository, language)

    def _find_unknown_type(self, type_name: str) -> list[Binding]:
        raise NoSuchTypeError.for_type_name(type_name)
