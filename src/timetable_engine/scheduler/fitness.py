"""Fitness scoring and hard-conflict detection for generated schedules."""

import math
from collections import Counter
from collections.abc import Iterable

from .models import Day, ScheduleEntry, SessionType, SoftConstraintWeights

# (kind, resource id, day, slot id)
ConflictKey = tuple[str, str, Day, int]


def entry_score(
    entry: ScheduleEntry,
    weights: SoftConstraintWeights,
    time_slot_id: int | None = None,
) -> int:
    """Position-only score of a single entry (higher is better).

    Args:
        entry: Entry to score
        weights: Soft constraint weights
        time_slot_id: Score as if the entry started at this slot instead

    Returns:
        Base score adjusted for time-of-day preferences
    """
    slot = entry.time_slot_id if time_slot_id is None else time_slot_id
    score = weights.entry_base_score

    if entry.session_type == SessionType.LECTURE and slot <= weights.morning_slot_max:
        score += weights.morning_lecture_bonus
    if entry.session_type == SessionType.PRACTICAL and slot >= weights.afternoon_slot_min:
        score += weights.afternoon_practical_bonus
    if slot >= weights.very_late_slot_min:
        score -= weights.very_late_penalty

    return score


def total_entry_score(
    schedule: Iterable[ScheduleEntry], weights: SoftConstraintWeights
) -> int:
    """Sum of per-entry scores over a schedule."""
    return sum(entry_score(entry, weights) for entry in schedule)


def workload_stddev(schedule: list[ScheduleEntry], faculty_ids: Iterable[str]) -> float:
    """Population standard deviation of assigned-session counts per instructor.

    Every instructor of the run counts, including those with no sessions.
    """
    counts = Counter(entry.faculty_id for entry in schedule)
    ids = set(faculty_ids) | set(counts)
    if not ids:
        return 0.0
    loads = [counts.get(faculty_id, 0) for faculty_id in ids]
    mean = sum(loads) / len(loads)
    variance = sum((load - mean) ** 2 for load in loads) / len(loads)
    return math.sqrt(variance)


def calculate_fitness_score(
    schedule: list[ScheduleEntry],
    faculty_ids: Iterable[str],
    weights: SoftConstraintWeights,
) -> int:
    """Aggregate 0-100 quality score of a schedule.

    Combines per-entry preference scores with a workload balance term and
    normalizes by ``len(schedule) * 100 + fitness_offset``.
    """
    if not schedule:
        return 0

    total = total_entry_score(schedule, weights)
    stddev = workload_stddev(schedule, faculty_ids)
    workload_score = max(0.0, 100 - stddev * weights.workload_stddev_factor)
    total += workload_score * weights.workload_weight

    max_possible = len(schedule) * 100 + weights.fitness_offset
    score = math.floor(total / max_possible * 100 + 0.5)
    return max(0, min(100, score))


def find_hard_conflicts(schedule: list[ScheduleEntry]) -> list[ConflictKey]:
    """Return every repeated (room, day, slot) or (faculty, day, slot) key.

    All slots of multi-slot entries are checked. A key seen ``n`` times is
    reported ``n - 1`` times.
    """
    seen: set[ConflictKey] = set()
    conflicts: list[ConflictKey] = []

    for entry in schedule:
        for slot_id in entry.slot_ids:
            room_key = ("room", entry.room_id, entry.day, slot_id)
            faculty_key = ("faculty", entry.faculty_id, entry.day, slot_id)
            for key in (room_key, faculty_key):
                if key in seen:
                    conflicts.append(key)
                seen.add(key)

    return conflicts


def count_hard_conflicts(schedule: list[ScheduleEntry]) -> int:
    """Number of double bookings; nonzero means the engine is defective."""
    return len(find_hard_conflicts(schedule))


class FitnessEvaluator:
    """Scores a finished schedule and checks its hard guarantees."""

    def __init__(
        self,
        schedule: list[ScheduleEntry],
        faculty_ids: Iterable[str],
        weights: SoftConstraintWeights,
    ) -> None:
        self.schedule = schedule
        self.faculty_ids = list(faculty_ids)
        self.weights = weights

    def score(self) -> int:
        return calculate_fitness_score(self.schedule, self.faculty_ids, self.weights)

    def count_hard_conflicts(self) -> int:
        return count_hard_conflicts(self.schedule)
