"""Main timetable generator: assignment, local search and evaluation."""

import logging
import random
import time

from .algorithm import AssignmentEngine
from .fitness import FitnessEvaluator, find_hard_conflicts
from .models import (
    DomainSnapshot,
    GenerationResult,
    SchedulingConfig,
    UnplacedSession,
    UnscheduledReason,
)
from .optimizer import LocalSearchOptimizer
from .planner import plan_sessions
from .state import ScheduleState
from .workload import aggregate_faculty_hours

logger = logging.getLogger(__name__)


class TimetableGenerator:
    """
    Weekly timetable generator for one (department, semester).

    Pipeline:
    1. Sort courses (lab courses first, then by weekly hours)
    2. Greedy slot search with bounded backtracking per session
    3. Hill-climbing local search over the committed schedule
    4. Fitness score and hard-conflict check

    Every call to ``generate`` builds its own state, load copy and random
    source, so one generator can serve several runs, and separate runs share
    nothing mutable.
    """

    def __init__(self, config: SchedulingConfig | None = None):
        """
        Initialize the generator.

        Args:
            config: Scheduling configuration. Defaults to the built-in grid
                    and weights.
        """
        self.config = config or SchedulingConfig()

    def generate(self, snapshot: DomainSnapshot) -> GenerationResult:
        """
        Generate a timetable for a snapshot.

        Args:
            snapshot: Courses, faculty and rooms of the run

        Returns:
            GenerationResult with the (possibly partial) schedule and metadata.
            Never raises for well-formed input.
        """
        started = time.monotonic()
        courses = list(snapshot.courses)
        faculty = list(snapshot.faculty)
        rooms = list(snapshot.rooms)

        logger.info(
            f"Starting generation for {snapshot.department} sem {snapshot.semester}: "
            f"{len(courses)} courses, {len(faculty)} faculty, {len(rooms)} rooms"
        )

        if snapshot.is_empty:
            return self._create_empty_input_result(snapshot)

        deadline = None
        if self.config.time_limit is not None:
            deadline = started + self.config.time_limit

        state = ScheduleState(self.config, faculty)
        engine = AssignmentEngine(
            courses,
            faculty,
            rooms,
            self.config,
            state=state,
            rng=random.Random(self.config.seed),
            deadline=deadline,
        )
        fully_assigned = engine.assign_courses(courses)

        optimizer = LocalSearchOptimizer(state, engine.instructors, deadline=deadline)
        passes = optimizer.optimize()

        evaluator = FitnessEvaluator(
            state.schedule, [f.id for f in faculty], self.config.weights
        )
        score = evaluator.score()
        hard_conflicts = evaluator.count_hard_conflicts()
        if hard_conflicts:
            for kind, resource, day, slot_id in find_hard_conflicts(state.schedule):
                logger.error(
                    f"Double booking of {kind} {resource} on {day.value} slot {slot_id}"
                )
            logger.error(
                f"Engine invariant violated: {hard_conflicts} hard conflicts in schedule"
            )

        duration_ms = int((time.monotonic() - started) * 1000)
        total_sessions = len(state.schedule) + len(engine.unplaced)
        logger.info(
            f"Placed {len(state.schedule)} of {total_sessions} sessions in {duration_ms}ms "
            f"(score {score}, iterations {engine.iterations}, "
            f"resolved {engine.conflicts_resolved})"
        )

        return GenerationResult(
            schedule=tuple(state.schedule),
            unplaced=tuple(engine.unplaced),
            iterations=engine.iterations,
            conflicts_resolved=engine.conflicts_resolved,
            score=score,
            hard_conflicts=hard_conflicts,
            faculty_hours=aggregate_faculty_hours(state.schedule, [f.id for f in faculty]),
            fully_assigned=fully_assigned,
            feasible=True,
            local_search_passes=passes,
            department=snapshot.department,
            semester=snapshot.semester,
            duration_ms=duration_ms,
        )

    def _create_empty_input_result(self, snapshot: DomainSnapshot) -> GenerationResult:
        """Create an infeasible result with zero assignments."""
        missing = [
            name
            for name, items in (
                ("courses", snapshot.courses),
                ("faculty", snapshot.faculty),
                ("rooms", snapshot.rooms),
            )
            if not items
        ]
        details = f"No {', '.join(missing)} available for this department/semester"
        logger.warning(f"Generation refused: {details}")

        unplaced = [
            UnplacedSession(
                course_code=session.course_code,
                session_type=session.session_type,
                duration=session.duration,
                reason=UnscheduledReason.EMPTY_INPUT,
                details=details,
            )
            for course in snapshot.courses
            for session in plan_sessions(course, self.config)
        ]
        return GenerationResult(
            unplaced=tuple(unplaced),
            fully_assigned=False,
            feasible=False,
            department=snapshot.department,
            semester=snapshot.semester,
        )


def generate(
    snapshot: DomainSnapshot, config: SchedulingConfig | None = None
) -> GenerationResult:
    """Convenience wrapper: generate a timetable with a fresh generator."""
    return TimetableGenerator(config).generate(snapshot)
