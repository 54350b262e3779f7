"""Tests for TimetableGenerator."""

import pytest

from timetable_engine.scheduler.constants import ALGORITHM_NAME
from timetable_engine.scheduler.models import (
    DomainSnapshot,
    RoomType,
    UnscheduledReason,
)
from timetable_engine.scheduler.scheduler import TimetableGenerator, generate


@pytest.fixture
def snapshot(make_course, make_faculty, make_room):
    return DomainSnapshot(
        department="CSE",
        semester=3,
        courses=(
            make_course("CS301", theory_hours=3, tutorial_hours=1),
            make_course("CS302", theory_hours=2, practical_hours=4, requires_lab=True),
            make_course("CS303", hours_per_week=3),
        ),
        faculty=(
            make_faculty("F1", current_hours_per_week=4),
            make_faculty("F2"),
            make_faculty("F3", max_hours_per_week=6),
        ),
        rooms=(make_room("R101"), make_room("R102", capacity=80), make_room("L1", RoomType.LAB)),
    )


class TestTimetableGenerator:
    """Tests for the full pipeline."""

    def test_generates_conflict_free_schedule(self, snapshot, config):
        result = TimetableGenerator(config).generate(snapshot)

        assert result.feasible
        assert result.fully_assigned
        assert result.hard_conflicts == 0
        assert result.total_assigned == 11
        assert result.total_unplaced == 0
        assert 0 < result.score <= 100
        assert result.algorithm == ALGORITHM_NAME
        assert result.local_search_passes >= 1
        assert (result.department, result.semester) == ("CSE", 3)

    def test_entries_within_working_slots(self, snapshot, config):
        result = TimetableGenerator(config).generate(snapshot)
        for entry in result.schedule:
            assert config.session_slot_ids(entry.time_slot_id, entry.duration) is not None
            assert entry.day in config.working_days

    def test_faculty_caps_respected(self, snapshot, config):
        result = TimetableGenerator(config).generate(snapshot)
        for instructor in snapshot.faculty:
            total = instructor.current_hours_per_week + result.faculty_hours.get(instructor.id, 0)
            assert total <= instructor.max_hours_per_week

    def test_faculty_hours_cover_run_only(self, snapshot, config):
        result = TimetableGenerator(config).generate(snapshot)
        assert sum(result.faculty_hours.values()) == sum(e.duration for e in result.schedule)
        # Baselines on the input records are never touched
        assert snapshot.faculty[0].current_hours_per_week == 4

    def test_faculty_hours_list_every_instructor(self, make_course, make_faculty, make_room, config):
        snapshot = DomainSnapshot(
            department="CSE",
            semester=3,
            courses=(make_course("CS301", theory_hours=2, eligible_faculty=["F1"]),),
            faculty=(make_faculty("F1"), make_faculty("F2")),
            rooms=(make_room(),),
        )
        result = TimetableGenerator(config).generate(snapshot)

        assert result.faculty_hours == {"F1": 2, "F2": 0}

    def test_seeded_runs_repeat(self, snapshot, config):
        first = TimetableGenerator(config).generate(snapshot)
        second = generate(snapshot, config)
        assert [e.to_dict() for e in first.schedule] == [e.to_dict() for e in second.schedule]
        assert first.score == second.score

    def test_empty_input_is_infeasible(self, make_course, config):
        snapshot = DomainSnapshot(
            department="CSE", semester=3, courses=(make_course(theory_hours=2),)
        )
        result = TimetableGenerator(config).generate(snapshot)

        assert result.feasible is False
        assert result.fully_assigned is False
        assert result.schedule == ()
        assert result.iterations == 0
        assert result.score == 0
        assert len(result.unplaced) == 2
        assert {u.reason for u in result.unplaced} == {UnscheduledReason.EMPTY_INPUT}
        assert "faculty" in result.unplaced[0].details

    def test_zero_time_limit_returns_partial_result(self, snapshot, config):
        result = TimetableGenerator(config.with_overrides(time_limit=0)).generate(snapshot)

        assert result.feasible
        assert result.fully_assigned is False
        assert result.schedule == ()
        assert {u.reason for u in result.unplaced} == {UnscheduledReason.TIME_LIMIT_EXCEEDED}

    def test_to_dict(self, snapshot, config):
        data = TimetableGenerator(config).generate(snapshot).to_dict()

        assert set(data) == {
            "department", "semester", "generated_at", "schedule",
            "unplaced", "faculty_hours", "generation_meta",
        }
        meta = data["generation_meta"]
        assert meta["algorithm"] == ALGORITHM_NAME
        assert meta["hard_conflicts"] == 0
        entry = data["schedule"][0]
        assert set(entry) >= {"course", "faculty", "room", "day", "time_slot_id", "start_time", "end_time"}
