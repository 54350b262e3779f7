"""Session planning: expand a course into its weekly teaching sessions."""

import math

from .models import Course, SchedulingConfig, Session, SessionType


def lab_duration(course: Course, config: SchedulingConfig) -> int:
    """Length of one lab block in slots (configured default when unset)."""
    return course.lab_duration_hours or config.default_lab_duration


def plan_sessions(course: Course, config: SchedulingConfig) -> list[Session]:
    """Build the ordered list of sessions needed for a course.

    - One 1-slot LECTURE per theory hour
    - One 1-slot TUTORIAL per tutorial hour
    - ceil(practical_hours / lab_duration) PRACTICAL blocks when the course has
      practical hours or requires a lab (a single block if it requires a lab
      but declares no practical hours)
    - Courses with no breakdown at all fall back to ``hours_per_week`` (or the
      configured default) single-slot lectures

    Args:
        course: Course to expand
        config: Scheduling configuration

    Returns:
        List of Session objects, lectures first, then tutorials, then labs
    """
    sessions: list[Session] = []

    for _ in range(max(course.theory_hours, 0)):
        sessions.append(Session(course.code, SessionType.LECTURE, 1))

    for _ in range(max(course.tutorial_hours, 0)):
        sessions.append(Session(course.code, SessionType.TUTORIAL, 1))

    if course.practical_hours > 0 or course.requires_lab:
        block = lab_duration(course, config)
        if course.practical_hours > 0:
            blocks = math.ceil(course.practical_hours / block)
        else:
            blocks = 1
        for _ in range(blocks):
            sessions.append(Session(course.code, SessionType.PRACTICAL, block))

    if not sessions:
        hours = course.hours_per_week or config.default_hours_per_week
        for _ in range(hours):
            sessions.append(Session(course.code, SessionType.LECTURE, 1))

    return sessions


def planned_hours(courses: list[Course], config: SchedulingConfig) -> int:
    """Total slot-hours required by all sessions of the given courses."""
    return sum(
        session.duration
        for course in courses
        for session in plan_sessions(course, config)
    )
