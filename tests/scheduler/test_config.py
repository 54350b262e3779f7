"""Tests for snapshot loading."""

import json

import pytest

from timetable_engine.exceptions import InvalidRecordError, SnapshotFileNotFoundError
from timetable_engine.scheduler.config import SnapshotLoader
from timetable_engine.scheduler.models import Day, RoomType

COURSES = [
    {
        "code": "CS301",
        "name": "Operating Systems",
        "department": "CSE",
        "semester": 3,
        "type": "THEORY",
        "credits": 4,
        "theoryHours": 3,
        "tutorialHours": 1,
        "maxBatchSize": 60,
    },
    {
        "code": "CS302",
        "department": "CSE",
        "semester": 3,
        "type": "PRACTICAL",
        "practical_hours": 4,
        "requires_lab": True,
        "lab_duration_hours": 2,
    },
    {"code": "CS501", "department": "CSE", "semester": 5, "theoryHours": 3},
    {"code": "CS399", "department": "CSE", "semester": 3, "theoryHours": 2, "isActive": False},
]

FACULTY = [
    {
        "id": "F1",
        "name": "Dr. Rao",
        "department": "CSE",
        "maxHoursPerWeek": 18,
        "currentHoursPerWeek": 4,
        "unavailableSlots": [{"day": "Monday", "timeSlotId": 1}],
        "eligibleCourses": ["CS301"],
    },
    {"employeeId": "F2", "department": "CSE"},
    {"id": "F3", "department": "EEE"},
]

ROOMS_CSV = """id,type,capacity,building,department,is_active
R101,CLASSROOM,60,Main,CSE,true
L1,lab,40,Annex,,true
R999,CLASSROOM,100,Main,,false
"""


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "courses.json").write_text(json.dumps(COURSES), encoding="utf-8")
    (tmp_path / "faculty.json").write_text(json.dumps(FACULTY), encoding="utf-8")
    (tmp_path / "rooms.csv").write_text(ROOMS_CSV, encoding="utf-8")
    return tmp_path


class TestSnapshotLoader:
    """Tests for SnapshotLoader class."""

    def test_load_scopes_snapshot(self, data_dir):
        snapshot = SnapshotLoader(data_dir).load("CSE", 3)

        assert [c.code for c in snapshot.courses] == ["CS301", "CS302"]
        assert [f.id for f in snapshot.faculty] == ["F1", "F2"]
        assert [r.id for r in snapshot.rooms] == ["R101", "L1"]

    def test_course_fields(self, data_dir):
        course, lab = SnapshotLoader(data_dir).load("CSE", 3).courses
        assert course.name == "Operating Systems"
        assert (course.theory_hours, course.tutorial_hours, course.max_batch_size) == (3, 1, 60)
        assert lab.requires_lab
        assert (lab.practical_hours, lab.lab_duration_hours) == (4, 2)

    def test_faculty_fields(self, data_dir):
        instructor = SnapshotLoader(data_dir).load("CSE", 3).faculty[0]
        assert instructor.max_hours_per_week == 18
        assert instructor.current_hours_per_week == 4
        assert instructor.is_unavailable(Day.MONDAY, 1)
        assert instructor.eligible_courses == ["CS301"]

    def test_room_fields(self, data_dir):
        rooms = SnapshotLoader(data_dir).load("CSE", 3).rooms
        assert rooms[1].room_type == RoomType.LAB
        assert rooms[1].department is None
        assert rooms[0].building == "Main"

    @pytest.mark.parametrize("filename", ["courses.json", "faculty.json", "rooms.csv"])
    def test_missing_file(self, data_dir, filename):
        (data_dir / filename).unlink()
        with pytest.raises(SnapshotFileNotFoundError) as exc_info:
            SnapshotLoader(data_dir)
        assert exc_info.value.path.name == filename

    def test_invalid_course_record(self, data_dir):
        (data_dir / "courses.json").write_text(json.dumps([{"code": "X"}]), encoding="utf-8")
        with pytest.raises(InvalidRecordError) as exc_info:
            SnapshotLoader(data_dir)
        assert exc_info.value.index == 0
        assert "courses.json" in str(exc_info.value)

    def test_invalid_room_type(self, data_dir):
        (data_dir / "rooms.csv").write_text("id,type,capacity\nX,GARAGE,10\n", encoding="utf-8")
        with pytest.raises(InvalidRecordError):
            SnapshotLoader(data_dir)


class TestSettings:
    """Tests for settings.json and overrides."""

    def test_defaults_without_settings(self, data_dir):
        config = SnapshotLoader(data_dir).build_config()
        assert config.max_consecutive_hours == 3
        assert config.room_capacity_ratio == 0.8

    def test_settings_file_and_overrides(self, data_dir):
        settings = {
            "seed": 1,
            "max_consecutive_hours": 4,
            "working_days": ["Monday", "Tuesday"],
            "weights": {"consecutive_penalty": 30},
        }
        (data_dir / "settings.json").write_text(json.dumps(settings), encoding="utf-8")

        config = SnapshotLoader(data_dir).build_config(seed=9, time_limit=None)

        assert config.seed == 9
        assert config.time_limit is None
        assert config.max_consecutive_hours == 4
        assert config.working_days == (Day.MONDAY, Day.TUESDAY)
        assert config.weights.consecutive_penalty == 30
        assert config.weights.day_spread_penalty == 15

    def test_invalid_settings(self, data_dir):
        (data_dir / "settings.json").write_text(json.dumps({"weights": {"bogus": 1}}), encoding="utf-8")
        with pytest.raises(InvalidRecordError):
            SnapshotLoader(data_dir).build_config()
