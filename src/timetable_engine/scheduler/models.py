"""Data models for the timetable generation engine."""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from enum import Enum
from typing import Any

from .constants import (
    ALGORITHM_NAME,
    BACKTRACK_ATTEMPTS,
    DEFAULT_BATCH_SIZE,
    DEFAULT_HOURS_PER_WEEK,
    DEFAULT_LAB_DURATION,
    LOCAL_SEARCH_MAX_PASSES,
    MAX_CONSECUTIVE_HOURS,
    MAX_FACULTY_HOURS_PER_DAY,
    MAX_FACULTY_HOURS_PER_WEEK,
    ROOM_CAPACITY_RATIO,
    SOFT_CONSTRAINT_WEIGHTS,
    TIME_SLOTS,
    WORKING_DAYS,
)


class Day(str, Enum):
    """Days of the academic week."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"  # Not a working day by default

    @classmethod
    def from_name(cls, name: str) -> "Day":
        """Parse a day name case-insensitively ("Monday", "monday", "MONDAY")."""
        return cls(name.strip().lower())


class SessionType(str, Enum):
    """Type of teaching session."""

    LECTURE = "LECTURE"
    TUTORIAL = "TUTORIAL"
    PRACTICAL = "PRACTICAL"


class RoomType(str, Enum):
    """Type of physical room."""

    CLASSROOM = "CLASSROOM"
    LAB = "LAB"
    SEMINAR_HALL = "SEMINAR_HALL"
    AUDITORIUM = "AUDITORIUM"


class CourseType(str, Enum):
    """Catalogue type of a course."""

    THEORY = "THEORY"
    PRACTICAL = "PRACTICAL"
    ELECTIVE = "ELECTIVE"
    OPEN_ELECTIVE = "OPEN_ELECTIVE"
    PROJECT = "PROJECT"


class Dimension(str, Enum):
    """Occupancy dimension tracked by the availability index."""

    FACULTY = "faculty"
    ROOM = "room"
    GROUP = "group"


class UnscheduledReason(str, Enum):
    """Reasons why a session could not be placed."""

    NO_ROOM_AVAILABLE = "no_room_available"
    NO_FACULTY_AVAILABLE = "no_faculty_available"
    NO_SLOT_AVAILABLE = "no_slot_available"
    NO_CONSECUTIVE_SLOTS = "no_consecutive_slots"
    TIME_LIMIT_EXCEEDED = "time_limit_exceeded"
    EMPTY_INPUT = "empty_input"


# (day, slot_id) occupancy key
SlotKey = tuple[Day, int]

# (department, semester) student group identity
GroupKey = tuple[str, int]


def _get(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key, accepting camelCase and snake_case."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class TimeSlot:
    """A fixed-width interval of the daily grid."""

    id: int
    start: str
    end: str
    is_break: bool = False

    @property
    def label(self) -> str:
        return f"{self.start}-{self.end}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeSlot":
        return cls(
            id=int(data["id"]),
            start=data["start"],
            end=data["end"],
            is_break=bool(_get(data, "is_break", "isBreak", default=False)),
        )


@dataclass(frozen=True)
class SoftConstraintWeights:
    """Tunable magnitudes of the soft constraints."""

    base_score: int = SOFT_CONSTRAINT_WEIGHTS["base_score"]
    day_spread_penalty: int = SOFT_CONSTRAINT_WEIGHTS["day_spread_penalty"]
    morning_lecture_bonus: int = SOFT_CONSTRAINT_WEIGHTS["morning_lecture_bonus"]
    morning_slot_max: int = SOFT_CONSTRAINT_WEIGHTS["morning_slot_max"]
    afternoon_practical_bonus: int = SOFT_CONSTRAINT_WEIGHTS["afternoon_practical_bonus"]
    afternoon_slot_min: int = SOFT_CONSTRAINT_WEIGHTS["afternoon_slot_min"]
    late_lecture_penalty: int = SOFT_CONSTRAINT_WEIGHTS["late_lecture_penalty"]
    late_lecture_slot_min: int = SOFT_CONSTRAINT_WEIGHTS["late_lecture_slot_min"]
    consecutive_penalty: int = SOFT_CONSTRAINT_WEIGHTS["consecutive_penalty"]
    entry_base_score: int = SOFT_CONSTRAINT_WEIGHTS["entry_base_score"]
    very_late_penalty: int = SOFT_CONSTRAINT_WEIGHTS["very_late_penalty"]
    very_late_slot_min: int = SOFT_CONSTRAINT_WEIGHTS["very_late_slot_min"]
    workload_weight: int = SOFT_CONSTRAINT_WEIGHTS["workload_weight"]
    workload_stddev_factor: int = SOFT_CONSTRAINT_WEIGHTS["workload_stddev_factor"]
    fitness_offset: int = SOFT_CONSTRAINT_WEIGHTS["fitness_offset"]


def _default_time_slots() -> tuple[TimeSlot, ...]:
    return tuple(TimeSlot.from_dict(slot) for slot in TIME_SLOTS)


def _default_working_days() -> tuple[Day, ...]:
    return tuple(Day(day) for day in WORKING_DAYS)


@dataclass(frozen=True)
class SchedulingConfig:
    """Immutable configuration for one generation run.

    Holds the time-slot grid, working days, hard limits, soft constraint
    weights and search bounds. A run never reads module-level constants
    directly, so two runs with different configs cannot interfere.
    """

    working_days: tuple[Day, ...] = field(default_factory=_default_working_days)
    time_slots: tuple[TimeSlot, ...] = field(default_factory=_default_time_slots)
    max_consecutive_hours: int = MAX_CONSECUTIVE_HOURS
    room_capacity_ratio: float = ROOM_CAPACITY_RATIO
    default_batch_size: int = DEFAULT_BATCH_SIZE
    default_lab_duration: int = DEFAULT_LAB_DURATION
    default_hours_per_week: int = DEFAULT_HOURS_PER_WEEK
    default_max_hours_per_week: int = MAX_FACULTY_HOURS_PER_WEEK
    weights: SoftConstraintWeights = field(default_factory=SoftConstraintWeights)
    backtrack_attempts: int = BACKTRACK_ATTEMPTS
    local_search_max_passes: int = LOCAL_SEARCH_MAX_PASSES
    seed: int | None = None
    time_limit: float | None = None
    enforce_daily_cap: bool = False

    @property
    def working_slots(self) -> list[TimeSlot]:
        """Non-break slots in grid order."""
        return [slot for slot in self.time_slots if not slot.is_break]

    def get_slot(self, slot_id: int) -> TimeSlot | None:
        for slot in self.time_slots:
            if slot.id == slot_id:
                return slot
        return None

    def session_slot_ids(self, start_slot: int, duration: int) -> list[int] | None:
        """Slot ids covered by a session starting at ``start_slot``.

        Returns None when any of the ``duration`` consecutive ids is missing
        from the grid or is a break slot.
        """
        working = {slot.id for slot in self.working_slots}
        slot_ids = [start_slot + offset for offset in range(duration)]
        if all(slot_id in working for slot_id in slot_ids):
            return slot_ids
        return None

    def with_overrides(self, **overrides: Any) -> "SchedulingConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SchedulingConfig":
        """Build a config from a settings dictionary.

        Unknown keys are ignored. ``weights`` may be a partial mapping.
        """
        base = cls()
        names = {f.name for f in fields(cls)}
        overrides: dict[str, Any] = {}
        for key, value in data.items():
            if key not in names or value is None:
                continue
            if key == "working_days":
                overrides[key] = tuple(Day.from_name(day) for day in value)
            elif key == "time_slots":
                overrides[key] = tuple(TimeSlot.from_dict(slot) for slot in value)
            elif key == "weights":
                overrides[key] = replace(base.weights, **value)
            else:
                overrides[key] = value
        return replace(base, **overrides)


@dataclass
class Course:
    """A course to be expanded into weekly sessions."""

    code: str
    department: str
    semester: int
    name: str = ""
    course_type: CourseType = CourseType.THEORY
    credits: int = 0
    hours_per_week: int = 0
    theory_hours: int = 0
    practical_hours: int = 0
    tutorial_hours: int = 0
    requires_lab: bool = False
    lab_duration_hours: int = 0
    max_batch_size: int = 0
    eligible_faculty: list[str] = field(default_factory=list)
    is_elective: bool = False
    elective_group: str | None = None
    is_active: bool = True

    @property
    def group_key(self) -> GroupKey:
        """Student group that attends every session of this course."""
        return (self.department, self.semester)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Course":
        """Create a Course from a dictionary."""
        return cls(
            code=str(data["code"]),
            department=data["department"],
            semester=int(data["semester"]),
            name=data.get("name", ""),
            course_type=CourseType(_get(data, "type", "course_type", default="THEORY")),
            credits=int(data.get("credits", 0)),
            hours_per_week=int(_get(data, "hoursPerWeek", "hours_per_week", default=0)),
            theory_hours=int(_get(data, "theoryHours", "theory_hours", default=0)),
            practical_hours=int(_get(data, "practicalHours", "practical_hours", default=0)),
            tutorial_hours=int(_get(data, "tutorialHours", "tutorial_hours", default=0)),
            requires_lab=bool(_get(data, "requiresLab", "requires_lab", default=False)),
            lab_duration_hours=int(
                _get(data, "labDurationHours", "lab_duration_hours", default=0)
            ),
            max_batch_size=int(_get(data, "maxBatchSize", "max_batch_size", default=0)),
            eligible_faculty=[
                str(f) for f in _get(data, "eligibleFaculty", "eligible_faculty", default=[])
            ],
            is_elective=bool(_get(data, "isElective", "is_elective", default=False)),
            elective_group=_get(data, "electiveGroup", "elective_group"),
            is_active=bool(_get(data, "isActive", "is_active", default=True)),
        )


@dataclass
class Faculty:
    """An instructor as loaded for a run.

    ``current_hours_per_week`` is the persisted baseline. The engine copies it
    into run-owned state and never writes back to this record.
    """

    id: str
    department: str
    name: str = ""
    max_hours_per_week: int = MAX_FACULTY_HOURS_PER_WEEK
    max_hours_per_day: int = MAX_FACULTY_HOURS_PER_DAY
    current_hours_per_week: int = 0
    unavailable_slots: set[SlotKey] = field(default_factory=set)
    eligible_courses: list[str] = field(default_factory=list)
    is_active: bool = True

    def is_unavailable(self, day: Day, slot_id: int) -> bool:
        return (day, slot_id) in self.unavailable_slots

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Faculty":
        """Create a Faculty from a dictionary."""
        unavailable = set()
        for item in _get(data, "unavailableSlots", "unavailable_slots", default=[]):
            if isinstance(item, dict):
                day = item["day"]
                slot_id = _get(item, "timeSlotId", "time_slot_id", "slot")
            else:
                day, slot_id = item
            unavailable.add((Day.from_name(day), int(slot_id)))

        return cls(
            id=str(_get(data, "id", "employeeId", "employee_id")),
            department=data["department"],
            name=data.get("name", ""),
            max_hours_per_week=int(
                _get(data, "maxHoursPerWeek", "max_hours_per_week",
                     default=MAX_FACULTY_HOURS_PER_WEEK)
            ),
            max_hours_per_day=int(
                _get(data, "maxHoursPerDay", "max_hours_per_day",
                     default=MAX_FACULTY_HOURS_PER_DAY)
            ),
            current_hours_per_week=int(
                _get(data, "currentHoursPerWeek", "current_hours_per_week", default=0)
            ),
            unavailable_slots=unavailable,
            eligible_courses=[
                str(c) for c in _get(data, "eligibleCourses", "eligible_courses", default=[])
            ],
            is_active=bool(_get(data, "isActive", "is_active", default=True)),
        )


@dataclass
class Room:
    """A physical room for scheduling."""

    id: str
    room_type: RoomType
    capacity: int
    building: str = ""
    department: str | None = None
    is_active: bool = True

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Room):
            return False
        return self.id == other.id

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Room":
        """Create a Room from a dictionary."""
        return cls(
            id=str(_get(data, "id", "roomNumber", "room_number")),
            room_type=RoomType(_get(data, "type", "room_type")),
            capacity=int(data["capacity"]),
            building=data.get("building", "") or "",
            department=data.get("department") or None,
            is_active=bool(_get(data, "isActive", "is_active", default=True)),
        )


@dataclass(frozen=True)
class Session:
    """One weekly contiguous teaching block of a course."""

    course_code: str
    session_type: SessionType
    duration: int


@dataclass
class ScheduleEntry:
    """A committed session placement."""

    course_code: str
    faculty_id: str
    room_id: str
    day: Day
    time_slot_id: int
    start_time: str
    end_time: str
    duration: int
    session_type: SessionType
    department: str
    semester: int

    @property
    def group_key(self) -> GroupKey:
        return (self.department, self.semester)

    @property
    def slot_ids(self) -> list[int]:
        """Slot ids occupied by this entry."""
        return [self.time_slot_id + offset for offset in range(self.duration)]

    def to_dict(self) -> dict[str, Any]:
        """Convert entry to dictionary."""
        return {
            "course": self.course_code,
            "faculty": self.faculty_id,
            "room": self.room_id,
            "day": self.day.value,
            "time_slot_id": self.time_slot_id,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": self.duration,
            "session_type": self.session_type.value,
            "department": self.department,
            "semester": self.semester,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleEntry":
        return cls(
            course_code=data["course"],
            faculty_id=data["faculty"],
            room_id=data["room"],
            day=Day.from_name(data["day"]),
            time_slot_id=int(data["time_slot_id"]),
            start_time=data["start_time"],
            end_time=data["end_time"],
            duration=int(data.get("duration", 1)),
            session_type=SessionType(data.get("session_type", "LECTURE")),
            department=data.get("department", ""),
            semester=int(data.get("semester", 0)),
        )


@dataclass
class UnplacedSession:
    """A session that could not be placed."""

    course_code: str
    session_type: SessionType
    duration: int
    reason: UnscheduledReason
    details: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "course": self.course_code,
            "session_type": self.session_type.value,
            "duration": self.duration,
            "reason": self.reason.value,
            "details": self.details,
        }


@dataclass(frozen=True)
class DomainSnapshot:
    """Input of one generation run, scoped to a (department, semester)."""

    department: str
    semester: int
    courses: tuple[Course, ...] = ()
    faculty: tuple[Faculty, ...] = ()
    rooms: tuple[Room, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.courses or not self.faculty or not self.rooms


@dataclass(frozen=True)
class GenerationResult:
    """Result of the generation process."""

    schedule: tuple[ScheduleEntry, ...] = ()
    unplaced: tuple[UnplacedSession, ...] = ()
    iterations: int = 0
    conflicts_resolved: int = 0
    score: int = 0
    hard_conflicts: int = 0
    faculty_hours: dict[str, int] = field(default_factory=dict)
    fully_assigned: bool = False
    feasible: bool = True
    local_search_passes: int = 0
    department: str = ""
    semester: int = 0
    algorithm: str = ALGORITHM_NAME
    duration_ms: int = 0
    generated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def total_assigned(self) -> int:
        """Total number of placed sessions."""
        return len(self.schedule)

    @property
    def total_unplaced(self) -> int:
        """Total number of sessions left out."""
        return len(self.unplaced)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "department": self.department,
            "semester": self.semester,
            "generated_at": self.generated_at,
            "schedule": [entry.to_dict() for entry in self.schedule],
            "unplaced": [item.to_dict() for item in self.unplaced],
            "faculty_hours": dict(self.faculty_hours),
            "generation_meta": {
                "algorithm": self.algorithm,
                "iterations": self.iterations,
                "conflicts_resolved": self.conflicts_resolved,
                "score": self.score,
                "hard_conflicts": self.hard_conflicts,
                "local_search_passes": self.local_search_passes,
                "fully_assigned": self.fully_assigned,
                "feasible": self.feasible,
                "duration_ms": self.duration_ms,
            },
        }
