"""Tests for scheduler models."""

from timetable_engine.scheduler.models import (
    Course,
    Day,
    Faculty,
    ScheduleEntry,
    SchedulingConfig,
    SessionType,
)


class TestSchedulingConfig:
    """Tests for SchedulingConfig grid helpers."""

    def test_working_slots_skip_break(self, config):
        assert [s.id for s in config.working_slots] == [1, 2, 3, 4, 6, 7, 8, 9, 10]

    def test_session_slot_ids(self, config):
        assert config.session_slot_ids(3, 2) == [3, 4]
        assert config.session_slot_ids(4, 2) is None  # would cross lunch
        assert config.session_slot_ids(10, 2) is None  # past end of day
        assert config.session_slot_ids(6, 1) == [6]

    def test_from_dict_partial_weights(self):
        config = SchedulingConfig.from_dict(
            {"weights": {"morning_lecture_bonus": 5}, "room_capacity_ratio": 0.9, "unknown": 1}
        )
        assert config.weights.morning_lecture_bonus == 5
        assert config.weights.base_score == 100
        assert config.room_capacity_ratio == 0.9

    def test_with_overrides_leaves_original(self, config):
        changed = config.with_overrides(seed=1)
        assert changed.seed == 1
        assert config.seed == 42


class TestRecords:
    """Tests for record parsing."""

    def test_course_camel_and_snake_case(self):
        camel = Course.from_dict({"code": "A", "department": "CSE", "semester": "3", "theoryHours": 2})
        snake = Course.from_dict({"code": "A", "department": "CSE", "semester": 3, "theory_hours": 2})
        assert camel == snake
        assert camel.group_key == ("CSE", 3)

    def test_faculty_unavailable_slots(self):
        instructor = Faculty.from_dict(
            {
                "id": "F1",
                "department": "CSE",
                "unavailableSlots": [{"day": "FRIDAY", "timeSlotId": 9}, ["monday", 2]],
            }
        )
        assert instructor.unavailable_slots == {(Day.FRIDAY, 9), (Day.MONDAY, 2)}
        assert instructor.max_hours_per_week == 20

    def test_schedule_entry_round_trip(self, make_entry):
        entry = make_entry(day=Day.THURSDAY, time_slot_id=7, duration=2, session_type=SessionType.PRACTICAL)
        assert ScheduleEntry.from_dict(entry.to_dict()) == entry
        assert entry.slot_ids == [7, 8]
        assert entry.end_time == "16:00"
