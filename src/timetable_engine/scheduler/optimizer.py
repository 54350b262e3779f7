"""Hill-climbing local search over a committed schedule."""

import logging
import time

from .fitness import entry_score
from .instructors import InstructorPool
from .models import Day, Dimension, ScheduleEntry
from .state import ScheduleState

logger = logging.getLogger(__name__)


class LocalSearchOptimizer:
    """Improves a schedule by exchanging the time positions of entry pairs.

    Two entries may swap when they have different instructors, rooms and
    courses and the same duration. A swap moves only day, start slot and
    start/end times; instructor, room and course stay with their entry.
    Keeping resources distinct is not enough on its own (an instructor may
    teach another group at the partner's time), so every improving swap is
    re-validated against the availability index and undone if infeasible.
    """

    def __init__(
        self,
        state: ScheduleState,
        instructors: InstructorPool,
        deadline: float | None = None,
    ) -> None:
        self.state = state
        self.instructors = instructors
        self.config = state.config
        self.deadline = deadline
        self.swaps = 0

    @staticmethod
    def can_swap(a: ScheduleEntry, b: ScheduleEntry) -> bool:
        """Check whether two entries may exchange time positions."""
        if a.faculty_id == b.faculty_id:
            return False
        if a.room_id == b.room_id:
            return False
        if a.course_code == b.course_code:
            return False
        return a.duration == b.duration

    def swap_gain(self, a: ScheduleEntry, b: ScheduleEntry) -> int:
        """Change in summed per-entry score if a and b exchanged slots."""
        weights = self.config.weights
        before = entry_score(a, weights) + entry_score(b, weights)
        after = entry_score(a, weights, b.time_slot_id) + entry_score(
            b, weights, a.time_slot_id
        )
        return after - before

    def optimize(self) -> int:
        """Run improving passes until none improves or the pass limit is hit.

        Returns:
            Number of passes performed
        """
        passes = 0
        improved = True
        schedule = self.state.schedule

        while improved and passes < self.config.local_search_max_passes:
            improved = False
            passes += 1

            for i in range(len(schedule)):
                for j in range(i + 1, len(schedule)):
                    a, b = schedule[i], schedule[j]
                    if not self.can_swap(a, b):
                        continue
                    if self.swap_gain(a, b) <= 0:
                        continue
                    if self._try_swap(a, b):
                        self.swaps += 1
                        improved = True

            if self.deadline is not None and time.monotonic() >= self.deadline:
                logger.warning(f"Local search stopped by time limit after {passes} passes")
                break

        logger.info(
            f"Local search completed after {passes} passes ({self.swaps} swaps)"
        )
        return passes

    def _fits(self, entry: ScheduleEntry, day: Day, slot_ids: list[int]) -> bool:
        """Check an entry's own resources are free at another position."""
        keys = self.state.keys_for(day, slot_ids)
        tracker = self.state.tracker
        if not tracker.is_free_for_all(Dimension.FACULTY, entry.faculty_id, keys):
            return False
        if not tracker.is_free_for_all(Dimension.ROOM, entry.room_id, keys):
            return False
        if not tracker.is_free_for_all(Dimension.GROUP, entry.group_key, keys):
            return False

        faculty = self.instructors.get(entry.faculty_id)
        if faculty is None:
            return True
        if any(faculty.is_unavailable(day, slot_id) for slot_id in slot_ids):
            return False
        if self.config.enforce_daily_cap and faculty.max_hours_per_day > 0:
            hours = self.state.faculty_hours_on_day(faculty.id, day) + entry.duration
            if hours > faculty.max_hours_per_day:
                return False
        return True

    def _try_swap(self, a: ScheduleEntry, b: ScheduleEntry) -> bool:
        """Exchange time positions of a and b if both remain feasible."""
        self.state.unreserve(a)
        self.state.unreserve(b)

        if self._fits(a, b.day, b.slot_ids) and self._fits(b, a.day, a.slot_ids):
            a.day, b.day = b.day, a.day
            a.time_slot_id, b.time_slot_id = b.time_slot_id, a.time_slot_id
            a.start_time, b.start_time = b.start_time, a.start_time
            a.end_time, b.end_time = b.end_time, a.end_time
            swapped = True
        else:
            swapped = False

        self.state.reserve(a)
        self.state.reserve(b)
        return swapped
