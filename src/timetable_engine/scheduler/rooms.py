"""Room management for timetable generation."""

from .availability import AvailabilityTracker
from .models import (
    Course,
    Dimension,
    Room,
    RoomType,
    SchedulingConfig,
    SessionType,
    SlotKey,
)


class RoomManager:
    """Selects rooms for sessions by type, capacity and occupancy.

    Selection rules:
    1. PRACTICAL sessions need a LAB, everything else a CLASSROOM
    2. Capacity must be at least ``room_capacity_ratio`` of the batch size
    3. The room must be free for every slot of the session
    4. PRACTICAL sessions fall back to a SEMINAR_HALL when no LAB qualifies
    5. Among qualifying rooms the smallest wins, then department affinity
    """

    # session type -> (required room type, fallback room type)
    ROOM_TYPE_RULES: dict[SessionType, tuple[RoomType, RoomType | None]] = {
        SessionType.LECTURE: (RoomType.CLASSROOM, None),
        SessionType.TUTORIAL: (RoomType.CLASSROOM, None),
        SessionType.PRACTICAL: (RoomType.LAB, RoomType.SEMINAR_HALL),
    }

    def __init__(self, rooms: list[Room], config: SchedulingConfig) -> None:
        """Initialize the room manager.

        Args:
            rooms: Rooms available to the run
            config: Scheduling configuration
        """
        self.rooms = list(rooms)
        self.config = config
        self._by_type: dict[RoomType, list[Room]] = {}
        for room in self.rooms:
            self._by_type.setdefault(room.room_type, []).append(room)

    def min_capacity(self, course: Course) -> float:
        """Smallest acceptable room capacity for a course."""
        batch = course.max_batch_size or self.config.default_batch_size
        return batch * self.config.room_capacity_ratio

    def get_rooms_by_type(self, room_type: RoomType) -> list[Room]:
        return self._by_type.get(room_type, [])

    def _preference_key(self, room: Room, course: Course) -> tuple:
        affinity = 0 if room.department in (None, course.department) else 1
        return (room.capacity, affinity, room.id)

    def _qualifying(
        self,
        room_type: RoomType,
        course: Course,
        keys: list[SlotKey],
        tracker: AvailabilityTracker,
    ) -> list[Room]:
        min_capacity = self.min_capacity(course)
        return [
            room
            for room in self.get_rooms_by_type(room_type)
            if room.capacity >= min_capacity
            and tracker.is_free_for_all(Dimension.ROOM, room.id, keys)
        ]

    def available_rooms(
        self,
        course: Course,
        session_type: SessionType,
        keys: list[SlotKey],
        tracker: AvailabilityTracker,
    ) -> list[Room]:
        """Rooms that can host the session at ``keys``, best first.

        Args:
            course: Course being placed
            session_type: Type of the session
            keys: (day, slot) keys the session would occupy
            tracker: Current occupancy index

        Returns:
            Qualifying rooms ordered by preference (may be empty)
        """
        required, fallback = self.ROOM_TYPE_RULES[session_type]
        rooms = self._qualifying(required, course, keys, tracker)
        if not rooms and fallback is not None:
            rooms = self._qualifying(fallback, course, keys, tracker)
        return sorted(rooms, key=lambda r: self._preference_key(r, course))

    def find_room(
        self,
        course: Course,
        session_type: SessionType,
        keys: list[SlotKey],
        tracker: AvailabilityTracker,
    ) -> Room | None:
        """Find the preferred room for a session, or None."""
        rooms = self.available_rooms(course, session_type, keys, tracker)
        return rooms[0] if rooms else None

    def has_candidate_rooms(self, course: Course, session_type: SessionType) -> bool:
        """Check whether any room could ever host this session type."""
        required, fallback = self.ROOM_TYPE_RULES[session_type]
        min_capacity = self.min_capacity(course)
        for room_type in (required, fallback):
            if room_type is None:
                continue
            if any(r.capacity >= min_capacity for r in self.get_rooms_by_type(room_type)):
                return True
        return False
