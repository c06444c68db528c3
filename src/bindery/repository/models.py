"""Resource models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Resource:
    """A resource stored in a repository.

    Args:
        path: Absolute path of the resource, e.g. "/app/trans/errors.fr.xlf".
        body: Arbitrary payload. Never inspected by the discovery.
    """

    path: str
    body: Any = None

    @property
    def name(self) -> str:
        return self.path.rstrip("/").rpartition("/")[2] or "/"
