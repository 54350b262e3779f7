"""Utility functions for timetable generation."""

from .models import Course, GroupKey, SchedulingConfig


def format_group(group: GroupKey) -> str:
    """Human-readable student group label (e.g., 'CSE sem 3')."""
    department, semester = group
    return f"{department} sem {semester}"


def weekly_hours(course: Course, config: SchedulingConfig) -> int:
    """Declared weekly teaching hours of a course.

    Uses ``hours_per_week`` when set, otherwise the theory/practical/tutorial
    breakdown, otherwise the configured default.
    """
    if course.hours_per_week > 0:
        return course.hours_per_week
    breakdown = course.theory_hours + course.practical_hours + course.tutorial_hours
    if breakdown > 0:
        return breakdown
    return config.default_hours_per_week


def sort_courses_by_priority(
    courses: list[Course], config: SchedulingConfig
) -> list[Course]:
    """Sort courses by scheduling priority.

    Priority order:
    1. Courses requiring a lab first (hardest to place)
    2. Weekly hours (descending)
    3. Course code, for a stable order across runs

    Args:
        courses: Courses of the run
        config: Scheduling configuration

    Returns:
        Sorted list with highest priority first
    """
    return sorted(
        courses,
        key=lambda c: (
            0 if c.requires_lab else 1,
            -weekly_hours(c, config),
            c.code,
        ),
    )

