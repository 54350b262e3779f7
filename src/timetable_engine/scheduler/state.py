"""Run-owned scheduling state with commit/release bookkeeping."""

from collections import defaultdict

from .availability import AvailabilityTracker
from .models import (
    Day,
    Dimension,
    Faculty,
    GroupKey,
    ScheduleEntry,
    SchedulingConfig,
    SlotKey,
)


class ScheduleState:
    """Mutable state of a single generation run.

    Owns the schedule being built, the availability index and a working copy
    of instructor load seeded from the persisted baseline. Every change goes
    through ``commit``/``release`` (or ``reserve``/``unreserve`` when the
    entry keeps its list position), which keeps the index consistent with the
    committed entries at all times.
    """

    def __init__(self, config: SchedulingConfig, faculty: list[Faculty]) -> None:
        self.config = config
        self.tracker = AvailabilityTracker()
        self.schedule: list[ScheduleEntry] = []
        # faculty id -> committed weekly hours (baseline + this run)
        self.faculty_hours: dict[str, int] = {
            f.id: f.current_hours_per_week for f in faculty
        }
        # (faculty id, day) -> hours assigned in this run
        self._faculty_daily_hours: dict[tuple[str, Day], int] = defaultdict(int)
        # (group, day) -> number of sessions
        self._group_day_sessions: dict[tuple[GroupKey, Day], int] = defaultdict(int)

    @staticmethod
    def keys_for(day: Day, slot_ids: list[int]) -> list[SlotKey]:
        return [(day, slot_id) for slot_id in slot_ids]

    def reserve(self, entry: ScheduleEntry) -> None:
        """Mark an entry's resources occupied without touching the list."""
        for key in self.keys_for(entry.day, entry.slot_ids):
            self.tracker.mark_occupied(Dimension.FACULTY, entry.faculty_id, key)
            self.tracker.mark_occupied(Dimension.ROOM, entry.room_id, key)
            self.tracker.mark_occupied(Dimension.GROUP, entry.group_key, key)
        self.faculty_hours[entry.faculty_id] = (
            self.faculty_hours.get(entry.faculty_id, 0) + entry.duration
        )
        self._faculty_daily_hours[(entry.faculty_id, entry.day)] += entry.duration
        self._group_day_sessions[(entry.group_key, entry.day)] += 1

    def unreserve(self, entry: ScheduleEntry) -> None:
        """Release an entry's resources without touching the list."""
        for key in self.keys_for(entry.day, entry.slot_ids):
            self.tracker.unmark_occupied(Dimension.FACULTY, entry.faculty_id, key)
            self.tracker.unmark_occupied(Dimension.ROOM, entry.room_id, key)
            self.tracker.unmark_occupied(Dimension.GROUP, entry.group_key, key)
        self.faculty_hours[entry.faculty_id] -= entry.duration
        self._faculty_daily_hours[(entry.faculty_id, entry.day)] -= entry.duration
        self._group_day_sessions[(entry.group_key, entry.day)] -= 1

    def commit(self, entry: ScheduleEntry) -> None:
        """Append an entry and reserve its resources."""
        self.reserve(entry)
        self.schedule.append(entry)

    def release(self, entry: ScheduleEntry) -> None:
        """Remove an entry and free its resources (inverse of commit())."""
        for index, existing in enumerate(self.schedule):
            if existing is entry:
                del self.schedule[index]
                break
        else:
            raise ValueError(f"Entry for {entry.course_code} is not committed")
        self.unreserve(entry)

    def group_sessions_on_day(self, group: GroupKey, day: Day) -> int:
        return self._group_day_sessions[(group, day)]

    def faculty_hours_on_day(self, faculty_id: str, day: Day) -> int:
        return self._faculty_daily_hours[(faculty_id, day)]

    def group_run_length(self, group: GroupKey, day: Day, slot_ids: list[int]) -> int:
        """Length of the group's consecutive occupied run if ``slot_ids`` were added.

        Counts adjacent occupied slot ids before the first and after the last
        slot of the placement. Break slots are never occupied, so they end a
        run.
        """
        run = len(slot_ids)
        slot_id = slot_ids[0] - 1
        while self.tracker.is_occupied(Dimension.GROUP, group, (day, slot_id)):
            run += 1
            slot_id -= 1
        slot_id = slot_ids[-1] + 1
        while self.tracker.is_occupied(Dimension.GROUP, group, (day, slot_id)):
            run += 1
            slot_id += 1
        return run

    def entries_at(self, group: GroupKey, day: Day, slot_id: int) -> list[ScheduleEntry]:
        """Committed entries of a group that cover (day, slot_id)."""
        return [
            entry
            for entry in self.schedule
            if entry.group_key == group
            and entry.day == day
            and slot_id in entry.slot_ids
        ]
