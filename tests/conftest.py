"""Test fixtures for timetable engine tests."""

import pytest

from timetable_engine.scheduler.models import (
    Course,
    Day,
    Faculty,
    Room,
    RoomType,
    ScheduleEntry,
    SchedulingConfig,
    SessionType,
    TimeSlot,
)


@pytest.fixture
def config():
    """Default grid and weights with a fixed seed."""
    return SchedulingConfig(seed=42)


@pytest.fixture
def monday_config():
    """A single working day with three back-to-back slots."""
    return SchedulingConfig(
        working_days=(Day.MONDAY,),
        time_slots=(
            TimeSlot(1, "08:00", "09:00"),
            TimeSlot(2, "09:00", "10:00"),
            TimeSlot(3, "10:00", "11:00"),
        ),
        seed=3,
    )


@pytest.fixture
def make_course():
    """Factory for courses of department CSE, semester 3 by default."""

    def _make(code="CS101", **kwargs):
        kwargs.setdefault("department", "CSE")
        kwargs.setdefault("semester", 3)
        kwargs.setdefault("max_batch_size", 60)
        return Course(code=code, **kwargs)

    return _make


@pytest.fixture
def make_faculty():
    """Factory for CSE instructors."""

    def _make(faculty_id="F1", **kwargs):
        kwargs.setdefault("department", "CSE")
        return Faculty(id=faculty_id, **kwargs)

    return _make


@pytest.fixture
def make_room():
    """Factory for rooms (a 60-seat CSE classroom by default)."""

    def _make(room_id="R101", room_type=RoomType.CLASSROOM, capacity=60, **kwargs):
        kwargs.setdefault("department", "CSE")
        return Room(id=room_id, room_type=room_type, capacity=capacity, **kwargs)

    return _make


@pytest.fixture
def make_entry(config):
    """Factory for schedule entries with times taken from the default grid."""

    def _make(
        course_code="CS101",
        faculty_id="F1",
        room_id="R101",
        day=Day.MONDAY,
        time_slot_id=1,
        duration=1,
        session_type=SessionType.LECTURE,
        department="CSE",
        semester=3,
    ):
        first = config.get_slot(time_slot_id)
        last = config.get_slot(time_slot_id + duration - 1)
        return ScheduleEntry(
            course_code=course_code,
            faculty_id=faculty_id,
            room_id=room_id,
            day=day,
            time_slot_id=time_slot_id,
            start_time=first.start,
            end_time=last.end,
            duration=duration,
            session_type=session_type,
            department=department,
            semester=semester,
        )

    return _make
