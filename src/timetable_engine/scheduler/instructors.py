"""Instructor eligibility and load-aware selection."""

from .models import Course, Day, Dimension, Faculty, SchedulingConfig
from .state import ScheduleState


class InstructorPool:
    """Answers which instructors may teach a session at a given time.

    An instructor is eligible for a course when the course lists them
    explicitly, or (for courses without an explicit list) when they list the
    course or belong to the course's department.
    """

    def __init__(self, faculty: list[Faculty], config: SchedulingConfig) -> None:
        self.faculty = list(faculty)
        self.config = config
        self._by_id = {f.id: f for f in self.faculty}
        self._eligible_cache: dict[str, list[Faculty]] = {}

    def get(self, faculty_id: str) -> Faculty | None:
        return self._by_id.get(faculty_id)

    def is_eligible(self, faculty: Faculty, course: Course) -> bool:
        """Check course eligibility, ignoring time and load."""
        if course.eligible_faculty:
            return faculty.id in course.eligible_faculty
        if course.code in faculty.eligible_courses:
            return True
        return faculty.department == course.department

    def eligible_for(self, course: Course) -> list[Faculty]:
        """All instructors eligible for a course (cached per course code)."""
        if course.code not in self._eligible_cache:
            self._eligible_cache[course.code] = [
                f for f in self.faculty if self.is_eligible(f, course)
            ]
        return self._eligible_cache[course.code]

    def weekly_cap(self, faculty: Faculty) -> int:
        return faculty.max_hours_per_week or self.config.default_max_hours_per_week

    def has_capacity(self, faculty: Faculty, duration: int, state: ScheduleState) -> bool:
        """Check the weekly cap would hold after adding ``duration`` hours."""
        current = state.faculty_hours.get(faculty.id, 0)
        return current + duration <= self.weekly_cap(faculty)

    def _within_daily_cap(
        self, faculty: Faculty, day: Day, duration: int, state: ScheduleState
    ) -> bool:
        if not self.config.enforce_daily_cap or faculty.max_hours_per_day <= 0:
            return True
        return state.faculty_hours_on_day(faculty.id, day) + duration <= faculty.max_hours_per_day

    def is_available(
        self,
        faculty: Faculty,
        day: Day,
        slot_ids: list[int],
        state: ScheduleState,
    ) -> bool:
        """Check time availability and caps for a placement."""
        duration = len(slot_ids)
        if any(faculty.is_unavailable(day, slot_id) for slot_id in slot_ids):
            return False
        keys = state.keys_for(day, slot_ids)
        if not state.tracker.is_free_for_all(Dimension.FACULTY, faculty.id, keys):
            return False
        if not self.has_capacity(faculty, duration, state):
            return False
        return self._within_daily_cap(faculty, day, duration, state)

    def available_instructors(
        self,
        course: Course,
        day: Day,
        slot_ids: list[int],
        state: ScheduleState,
    ) -> list[Faculty]:
        """Eligible and free instructors, lowest current load first.

        Args:
            course: Course being placed
            day: Day of the placement
            slot_ids: Slot ids the session would occupy
            state: Current run state

        Returns:
            Instructors ordered by (current hours, id)
        """
        available = [
            f
            for f in self.eligible_for(course)
            if self.is_available(f, day, slot_ids, state)
        ]
        return sorted(available, key=lambda f: (state.faculty_hours.get(f.id, 0), f.id))

    def find_instructor(
        self,
        course: Course,
        day: Day,
        slot_ids: list[int],
        state: ScheduleState,
    ) -> Faculty | None:
        """Lowest-load available instructor, or None."""
        available = self.available_instructors(course, day, slot_ids, state)
        return available[0] if available else None
