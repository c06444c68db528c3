"""Index models: lookup strategies and persisted index state."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class LookupStrategy(Enum):
    """How bindings are found for a concrete resource path.

    GLOB_SCAN tests every stored query against the path. It stays correct
    while the repository changes underneath lazy bindings.

    RESOURCE_PATH_INDEX resolves each binding's resources once, at insertion,
    and indexes the resulting paths. Lookups are a dict access, but resources
    added to the repository later are not picked up.
    """

    GLOB_SCAN = auto()
    RESOURCE_PATH_INDEX = auto()


def _id_lists(data: Mapping[str, Any] | None) -> dict[str, list[int]]:
    return {str(key): [int(i) for i in ids] for key, ids in (data or {}).items()}


@dataclass(slots=True)
class IndexState:
    """Snapshot of the id maps of a binding index.

    Types and binding records are persisted separately; this is what ties
    them together.

    Attributes:
        next_id: Next id the allocator will hand out.
        query_index: Binding query to ids, resource bindings only.
        type_index: Type name to ids, every binding.
        resource_path_index: Resolved resource path to ids.
        uuid_index: Binding uuid (as string) to id.
    """

    next_id: int = 1
    query_index: dict[str, list[int]] = field(default_factory=dict)
    type_index: dict[str, list[int]] = field(default_factory=dict)
    resource_path_index: dict[str, list[int]] = field(default_factory=dict)
    uuid_index: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "next_id": self.next_id,
            "query_index": self.query_index,
            "type_index": self.type_index,
            "resource_path_index": self.resource_path_index,
            "uuid_index": self.uuid_index,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IndexState:
        return cls(
            next_id=int(data.get("next_id", 1)),
            query_index=_id_lists(data.get("query_index")),
            type_index=_id_lists(data.get("type_index")),
            resource_path_index=_id_lists(data.get("resource_path_index")),
            uuid_index={str(k): int(v) for k, v in (data.get("uuid_index") or {}).items()},
        )
