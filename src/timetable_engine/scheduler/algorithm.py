"""Greedy slot search with bounded backtracking for weekly timetables."""

import logging
import random
import time
from collections import Counter
from dataclasses import dataclass

from .instructors import InstructorPool
from .models import (
    Course,
    Day,
    Dimension,
    Faculty,
    Room,
    ScheduleEntry,
    SchedulingConfig,
    Session,
    SessionType,
    UnplacedSession,
    UnscheduledReason,
)
from .planner import plan_sessions
from .rooms import RoomManager
from .state import ScheduleState
from .utils import format_group, sort_courses_by_priority

logger = logging.getLogger(__name__)


@dataclass
class Placement:
    """A feasible (day, start slot) candidate and its soft score."""

    day: Day
    slot_ids: list[int]
    score: int

    @property
    def start_slot(self) -> int:
        return self.slot_ids[0]


class AssignmentEngine:
    """Places course sessions into the weekly grid one at a time.

    For every session:
    1. Scan working days (seeded shuffle) x non-break slots for placements
       where the group, a suitable room and an eligible instructor are free
       for all slots of the session
    2. Score feasible placements by soft constraints, keep the strictly best
    3. Commit with the lowest-load instructor and the smallest suitable room
    4. When nothing is feasible, try a bounded backtracking swap that evicts
       one entry of the same group and rolls back if it cannot be re-placed

    Failures never raise; unplaced sessions are collected in ``unplaced``.
    """

    def __init__(
        self,
        courses: list[Course],
        faculty: list[Faculty],
        rooms: list[Room],
        config: SchedulingConfig,
        state: ScheduleState | None = None,
        rng: random.Random | None = None,
        deadline: float | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            courses: Courses of the run (used to re-place evicted entries)
            faculty: Instructors of the run
            rooms: Rooms of the run
            config: Scheduling configuration
            state: Run state to build into (a fresh one by default)
            rng: Random source for day order and backtracking
                 (seeded from ``config.seed`` by default)
            deadline: ``time.monotonic()`` value after which no new
                      sessions are attempted
        """
        self.config = config
        self.courses = {course.code: course for course in courses}
        self.state = state if state is not None else ScheduleState(config, faculty)
        self.instructors = InstructorPool(faculty, config)
        self.room_manager = RoomManager(rooms, config)
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.deadline = deadline
        self.iterations = 0
        self.conflicts_resolved = 0
        self.unplaced: list[UnplacedSession] = []
        self._last_failure: tuple[UnscheduledReason, str] = (
            UnscheduledReason.NO_SLOT_AVAILABLE,
            "",
        )

    @property
    def schedule(self) -> list[ScheduleEntry]:
        return self.state.schedule

    def deadline_passed(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def assign_courses(self, courses: list[Course]) -> bool:
        """Assign every course in priority order.

        Returns:
            True if every session of every course was placed
        """
        all_assigned = True
        for course in sort_courses_by_priority(courses, self.config):
            if not self.assign_course(course):
                all_assigned = False
        return all_assigned

    def assign_course(self, course: Course) -> bool:
        """Place all sessions of a course.

        Args:
            course: Course to schedule

        Returns:
            True iff every derived session was placed
        """
        sessions = plan_sessions(course, self.config)
        all_assigned = True

        for index, session in enumerate(sessions):
            if self.deadline_passed():
                for remaining in sessions[index:]:
                    self._record_unplaced(
                        remaining,
                        UnscheduledReason.TIME_LIMIT_EXCEEDED,
                        "Generation time limit reached before this session was tried",
                    )
                all_assigned = False
                break

            if self.place_session(course, session) is None:
                reason, details = self._last_failure
                if self.backtrack_swap(course, session):
                    self.conflicts_resolved += 1
                else:
                    all_assigned = False
                    self._record_unplaced(session, reason, details)
            self.iterations += 1

        if not all_assigned:
            logger.warning(f"Could not fully schedule course {course.code}")
        return all_assigned

    def place_session(self, course: Course, session: Session) -> ScheduleEntry | None:
        """Find the best slot for a session and commit it."""
        placement = self.find_best_slot(course, session)
        if placement is None:
            return None
        return self.commit(course, session, placement)

    def find_best_slot(self, course: Course, session: Session) -> Placement | None:
        """Find the highest scoring feasible placement for a session.

        Args:
            course: Course the session belongs to
            session: Session to place

        Returns:
            Best Placement, or None when nothing is feasible (the reason is
            kept for reporting)
        """
        group = course.group_key
        days = list(self.config.working_days)
        self.rng.shuffle(days)

        best: Placement | None = None
        failures: Counter[UnscheduledReason] = Counter()
        positions_tried = 0

        for day in days:
            for slot in self.config.working_slots:
                positions_tried += 1

                slot_ids = self.config.session_slot_ids(slot.id, session.duration)
                if slot_ids is None:
                    failures[UnscheduledReason.NO_CONSECUTIVE_SLOTS] += 1
                    continue

                keys = self.state.keys_for(day, slot_ids)
                if not self.state.tracker.is_free_for_all(Dimension.GROUP, group, keys):
                    failures[UnscheduledReason.NO_SLOT_AVAILABLE] += 1
                    continue

                if not self.room_manager.available_rooms(
                    course, session.session_type, keys, self.state.tracker
                ):
                    failures[UnscheduledReason.NO_ROOM_AVAILABLE] += 1
                    continue

                if not self.instructors.available_instructors(
                    course, day, slot_ids, self.state
                ):
                    failures[UnscheduledReason.NO_FACULTY_AVAILABLE] += 1
                    continue

                score = self.score_slot(course, session, day, slot_ids)
                if best is None or score > best.score:
                    best = Placement(day, slot_ids, score)

        if best is None:
            self._last_failure = self._summarize_failures(
                course, session, positions_tried, failures
            )
        return best

    def score_slot(
        self, course: Course, session: Session, day: Day, slot_ids: list[int]
    ) -> int:
        """Soft-constraint score of a feasible placement (higher is better)."""
        weights = self.config.weights
        group = course.group_key
        start = slot_ids[0]

        score = weights.base_score
        score -= weights.day_spread_penalty * self.state.group_sessions_on_day(group, day)

        if session.session_type == SessionType.LECTURE and start <= weights.morning_slot_max:
            score += weights.morning_lecture_bonus
        if (
            session.session_type == SessionType.PRACTICAL
            and start >= weights.afternoon_slot_min
        ):
            score += weights.afternoon_practical_bonus
        if (
            session.session_type == SessionType.LECTURE
            and start >= weights.late_lecture_slot_min
        ):
            score -= weights.late_lecture_penalty

        run = self.state.group_run_length(group, day, slot_ids)
        if run > self.config.max_consecutive_hours:
            score -= weights.consecutive_penalty

        return score

    def commit(
        self, course: Course, session: Session, placement: Placement
    ) -> ScheduleEntry | None:
        """Reserve resources for a placement and append the entry.

        Args:
            course: Course the session belongs to
            session: Session being placed
            placement: Feasible placement from find_best_slot()

        Returns:
            The committed ScheduleEntry, or None if the placement is no
            longer feasible
        """
        day, slot_ids = placement.day, placement.slot_ids
        keys = self.state.keys_for(day, slot_ids)

        faculty = self.instructors.find_instructor(course, day, slot_ids, self.state)
        room = self.room_manager.find_room(
            course, session.session_type, keys, self.state.tracker
        )
        if faculty is None or room is None:
            return None

        first = self.config.get_slot(placement.start_slot)
        last = self.config.get_slot(slot_ids[-1])
        entry = ScheduleEntry(
            course_code=course.code,
            faculty_id=faculty.id,
            room_id=room.id,
            day=day,
            time_slot_id=first.id,
            start_time=first.start,
            end_time=last.end,
            duration=session.duration,
            session_type=session.session_type,
            department=course.department,
            semester=course.semester,
        )
        self.state.commit(entry)

        logger.debug(
            f"Placed {course.code} {session.session_type.value} on {day.value} "
            f"slot {first.id} ({faculty.id}, {room.id}, score {placement.score})"
        )
        return entry

    def backtrack_swap(self, course: Course, session: Session) -> bool:
        """Try to make room for a blocked session by moving one group entry.

        Each attempt is a transaction: a random (day, slot) held by the same
        student group is released, the blocked session is retried, and the
        evicted entry is re-placed through the normal search. If either step
        fails, the state is rolled back to exactly what it was before the
        attempt.

        Returns:
            True if the blocked session and the evicted entry are both placed
        """
        group = course.group_key
        working_slots = self.config.working_slots
        if not working_slots or not self.config.working_days:
            return False

        for attempt in range(self.config.backtrack_attempts):
            day = self.rng.choice(self.config.working_days)
            slot = self.rng.choice(working_slots)

            blocking = self.state.entries_at(group, day, slot.id)
            if not blocking:
                continue

            evicted = blocking[0]
            evicted_course = self.courses.get(evicted.course_code)
            if evicted_course is None:
                continue

            self.state.release(evicted)

            placed = self.place_session(course, session)
            if placed is None:
                self.state.commit(evicted)
                continue

            relocated = self.place_session(
                evicted_course,
                Session(evicted.course_code, evicted.session_type, evicted.duration),
            )
            if relocated is None:
                self.state.release(placed)
                self.state.commit(evicted)
                continue

            logger.debug(
                f"Backtracking moved {evicted.course_code} from {evicted.day.value} "
                f"slot {evicted.time_slot_id} to {relocated.day.value} slot "
                f"{relocated.time_slot_id} to fit {course.code} (attempt {attempt + 1})"
            )
            return True

        return False

    def _record_unplaced(
        self, session: Session, reason: UnscheduledReason, details: str
    ) -> None:
        self.unplaced.append(
            UnplacedSession(
                course_code=session.course_code,
                session_type=session.session_type,
                duration=session.duration,
                reason=reason,
                details=details,
            )
        )

    def _summarize_failures(
        self,
        course: Course,
        session: Session,
        positions_tried: int,
        failures: Counter,
    ) -> tuple[UnscheduledReason, str]:
        """Pick the dominant failure reason and describe the scan."""
        if not failures:
            return (
                UnscheduledReason.NO_SLOT_AVAILABLE,
                "No working slots configured",
            )

        labels = {
            UnscheduledReason.NO_CONSECUTIVE_SLOTS: "insufficient consecutive slots",
            UnscheduledReason.NO_SLOT_AVAILABLE: "group busy",
            UnscheduledReason.NO_ROOM_AVAILABLE: "no room",
            UnscheduledReason.NO_FACULTY_AVAILABLE: "no instructor",
        }
        summary = ", ".join(
            f"{labels[reason]}: {count}" for reason, count in failures.most_common()
        )
        reason = failures.most_common(1)[0][0]
        return (
            reason,
            f"{session.session_type.value} of {session.duration} slot(s) for "
            f"{format_group(course.group_key)}: tried {positions_tried} positions "
            f"({summary})",
        )
