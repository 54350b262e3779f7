"""Occupancy tracking for faculty, rooms and student groups."""

from collections import defaultdict
from collections.abc import Hashable

from .models import Dimension, SlotKey


class AvailabilityTracker:
    """Tracks which (day, slot) keys each resource occupies.

    This class maintains three independent indexes:
    - faculty: faculty id -> set of occupied (day, slot) keys
    - room: room id -> set of occupied (day, slot) keys
    - group: (department, semester) -> set of occupied (day, slot) keys

    It holds no constraint logic. Callers decide what may be marked; the
    tracker only answers whether a key is taken.
    """

    def __init__(self) -> None:
        self._index: dict[Dimension, dict[Hashable, set[SlotKey]]] = {
            dimension: defaultdict(set) for dimension in Dimension
        }

    def mark_occupied(self, dimension: Dimension, resource_id: Hashable, key: SlotKey) -> None:
        """Reserve ``key`` for a resource."""
        self._index[dimension][resource_id].add(key)

    def unmark_occupied(self, dimension: Dimension, resource_id: Hashable, key: SlotKey) -> None:
        """Release ``key`` for a resource (inverse of mark_occupied())."""
        occupied = self._index[dimension].get(resource_id)
        if occupied is not None:
            occupied.discard(key)

    def is_occupied(self, dimension: Dimension, resource_id: Hashable, key: SlotKey) -> bool:
        """Check if a resource holds ``key``."""
        occupied = self._index[dimension].get(resource_id)
        return occupied is not None and key in occupied

    def occupied_keys(self, dimension: Dimension, resource_id: Hashable) -> frozenset[SlotKey]:
        """Snapshot of the keys held by a resource."""
        return frozenset(self._index[dimension].get(resource_id, ()))

    def is_free_for_all(
        self, dimension: Dimension, resource_id: Hashable, keys: list[SlotKey]
    ) -> bool:
        """Check that a resource holds none of ``keys``."""
        return not any(self.is_occupied(dimension, resource_id, key) for key in keys)
