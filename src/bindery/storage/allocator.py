"""Binding id allocation.

IdAllocator hands out the integer ids under which a discovery indexes its
bindings. Ids increase monotonically and are never reused, so the id order
of a discovery is the insertion order of its bindings.
"""

from __future__ import annotations


class IdAllocator:
    """Allocates monotonically increasing binding ids.

    Args:
        first_id: Id returned by the first allocation.
    """

    def __init__(self, first_id: int = 1):
        """Initialize the allocator.

        Args:
            first_id: Id returned by the first allocation (default 1).

        Raises:
            ValueError: If first_id is negative.
        """
        if first_id < 0:
            raise ValueError(f"Binding ids must not be negative. Got: {first_id}")
        self._next_id = first_id

    @property
    def next_id(self) -> int:
        """Id the next allocation will return."""
        return self._next_id

    def allocate(self) -> int:
        """Allocate a new id.

        Returns:
            An id larger than every id allocated before.
        """
        binding_id = self._next_id
        self._next_id += 1
        return binding_id

    def restore(self, next_id: int) -> None:
        """Continue allocation from persisted state.

        Ids are never handed out twice, so the allocator cannot move backwards.

        Args:
            next_id: Persisted value of `next_id`.

        Raises:
            ValueError: If next_id lies below the current position.
        """
        if next_id < self._next_id:
            raise ValueError(
                f"Cannot rewind id allocation from {self._next_id} to {next_id}"
            )
        self._next_id = next_id
