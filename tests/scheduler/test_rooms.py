"""Tests for RoomManager class."""

from timetable_engine.scheduler.availability import AvailabilityTracker
from timetable_engine.scheduler.models import Day, Dimension, RoomType, SessionType
from timetable_engine.scheduler.rooms import RoomManager

MONDAY_1 = [(Day.MONDAY, 1)]
MONDAY_LAB = [(Day.MONDAY, 6), (Day.MONDAY, 7)]


class TestRoomManager:
    """Tests for RoomManager class."""

    def test_min_capacity_uses_ratio(self, make_course, config):
        manager = RoomManager([], config)
        assert manager.min_capacity(make_course(max_batch_size=60)) == 48
        # Unset batch size falls back to the configured default
        assert manager.min_capacity(make_course(max_batch_size=0)) == 48

    def test_smallest_qualifying_room_first(self, make_course, make_room, config):
        rooms = [make_room("R80", capacity=80), make_room("R40", capacity=40), make_room("R50", capacity=50)]
        manager = RoomManager(rooms, config)

        available = manager.available_rooms(
            make_course(), SessionType.LECTURE, MONDAY_1, AvailabilityTracker()
        )
        assert [r.id for r in available] == ["R50", "R80"]

    def test_department_affinity_breaks_capacity_tie(self, make_course, make_room, config):
        rooms = [make_room("A1", department="EEE"), make_room("B1", department="CSE")]
        manager = RoomManager(rooms, config)

        room = manager.find_room(make_course(), SessionType.TUTORIAL, MONDAY_1, AvailabilityTracker())
        assert room.id == "B1"

    def test_occupied_room_excluded(self, make_course, make_room, config):
        manager = RoomManager([make_room("R1"), make_room("R2", capacity=90)], config)
        tracker = AvailabilityTracker()
        tracker.mark_occupied(Dimension.ROOM, "R1", (Day.MONDAY, 1))

        room = manager.find_room(make_course(), SessionType.LECTURE, MONDAY_1, tracker)
        assert room.id == "R2"

    def test_lectures_never_use_labs(self, make_course, make_room, config):
        manager = RoomManager([make_room("LAB1", RoomType.LAB)], config)
        assert manager.find_room(
            make_course(), SessionType.LECTURE, MONDAY_1, AvailabilityTracker()
        ) is None

    def test_practical_prefers_lab(self, make_course, make_room, config):
        rooms = [make_room("SH1", RoomType.SEMINAR_HALL), make_room("LAB1", RoomType.LAB, capacity=90)]
        manager = RoomManager(rooms, config)

        room = manager.find_room(make_course(), SessionType.PRACTICAL, MONDAY_LAB, AvailabilityTracker())
        assert room.id == "LAB1"

    def test_practical_falls_back_to_free_seminar_hall(self, make_course, make_room, config):
        rooms = [make_room("LAB1", RoomType.LAB), make_room("SH1", RoomType.SEMINAR_HALL)]
        manager = RoomManager(rooms, config)
        tracker = AvailabilityTracker()
        tracker.mark_occupied(Dimension.ROOM, "LAB1", (Day.MONDAY, 7))

        room = manager.find_room(make_course(), SessionType.PRACTICAL, MONDAY_LAB, tracker)
        assert room.id == "SH1"

    def test_fallback_respects_occupancy(self, make_course, make_room, config):
        rooms = [make_room("LAB1", RoomType.LAB), make_room("SH1", RoomType.SEMINAR_HALL)]
        manager = RoomManager(rooms, config)
        tracker = AvailabilityTracker()
        tracker.mark_occupied(Dimension.ROOM, "LAB1", (Day.MONDAY, 6))
        tracker.mark_occupied(Dimension.ROOM, "SH1", (Day.MONDAY, 7))

        assert manager.find_room(make_course(), SessionType.PRACTICAL, MONDAY_LAB, tracker) is None

    def test_has_candidate_rooms(self, make_course, make_room, config):
        manager = RoomManager([make_room("R1", capacity=30), make_room("SH1", RoomType.SEMINAR_HALL)], config)

        assert not manager.has_candidate_rooms(make_course(), SessionType.LECTURE)
        assert manager.has_candidate_rooms(make_course(), SessionType.PRACTICAL)
        assert manager.has_candidate_rooms(make_course(max_batch_size=30), SessionType.LECTURE)
