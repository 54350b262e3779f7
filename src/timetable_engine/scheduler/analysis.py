"""Pre-run constraint analysis of a domain snapshot."""

import logging
from dataclasses import dataclass, field
from typing import Any

from .constants import NEAR_CAPACITY_RATIO
from .models import DomainSnapshot, RoomType, SchedulingConfig
from .planner import plan_sessions, planned_hours
from .rooms import RoomManager

logger = logging.getLogger(__name__)


@dataclass
class ConstraintAnalysis:
    """Capacity estimate and warnings for a snapshot, before generation."""

    courses: int = 0
    faculty: int = 0
    rooms: int = 0
    total_hours_needed: int = 0
    available_slots: int = 0
    feasible: bool = True
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "courses": self.courses,
            "faculty": self.faculty,
            "rooms": self.rooms,
            "total_hours_needed": self.total_hours_needed,
            "available_slots": self.available_slots,
            "feasible": self.feasible,
            "warnings": self.warnings,
            "recommendations": self.recommendations,
        }


def analyze_constraints(
    snapshot: DomainSnapshot, config: SchedulingConfig
) -> ConstraintAnalysis:
    """Estimate whether a snapshot can be scheduled and flag likely problems.

    Capacity is a coarse upper bound: planned hours must fit into the weekly
    grid times the number of instructors. A feasible analysis does not
    guarantee a complete schedule.

    Args:
        snapshot: Courses, faculty and rooms of the run
        config: Scheduling configuration

    Returns:
        ConstraintAnalysis with counts, warnings and recommendations
    """
    courses = list(snapshot.courses)
    faculty = list(snapshot.faculty)
    rooms = list(snapshot.rooms)

    total_hours = planned_hours(courses, config)
    available_slots = len(config.working_days) * len(config.working_slots)
    feasible = total_hours <= available_slots * max(len(faculty), 1)

    analysis = ConstraintAnalysis(
        courses=len(courses),
        faculty=len(faculty),
        rooms=len(rooms),
        total_hours_needed=total_hours,
        available_slots=available_slots,
        feasible=feasible,
    )

    if not faculty:
        analysis.warnings.append("No faculty found for this department")
    if not courses:
        analysis.warnings.append("No courses found for this semester")
    if not rooms:
        analysis.warnings.append("No rooms available")
    if not feasible:
        analysis.warnings.append(
            f"Total hours needed ({total_hours}) may exceed available capacity"
        )

    # A single student group can attend at most one session per slot
    if total_hours > available_slots:
        analysis.warnings.append(
            f"Group needs {total_hours} hours but the week has only "
            f"{available_slots} teaching slots"
        )
        analysis.recommendations.append(
            "Reduce weekly hours or extend the working days/time-slot grid"
        )

    lab_courses = [c for c in courses if c.requires_lab or c.practical_hours > 0]
    lab_rooms = [r for r in rooms if r.room_type == RoomType.LAB]
    if len(lab_courses) > len(lab_rooms):
        analysis.warnings.append(
            f"{len(lab_courses)} lab courses but only {len(lab_rooms)} labs available"
        )
        analysis.recommendations.append("Consider adding more lab rooms or using lab-sharing")

    room_manager = RoomManager(rooms, config)
    for course in courses:
        session_types = {s.session_type for s in plan_sessions(course, config)}
        for session_type in sorted(session_types, key=lambda t: t.value):
            if not room_manager.has_candidate_rooms(course, session_type):
                analysis.warnings.append(
                    f"No room can host {session_type.value} sessions of {course.code} "
                    f"(needs capacity {room_manager.min_capacity(course):g})"
                )

    overloaded = [
        f
        for f in faculty
        if f.current_hours_per_week
        >= (f.max_hours_per_week or config.default_max_hours_per_week) * NEAR_CAPACITY_RATIO
    ]
    if overloaded:
        analysis.warnings.append(
            f"{len(overloaded)} faculty members are near/at workload capacity"
        )
        analysis.recommendations.append(
            "Consider hiring additional faculty or redistributing electives"
        )

    for warning in analysis.warnings:
        logger.warning(warning)

    return analysis
