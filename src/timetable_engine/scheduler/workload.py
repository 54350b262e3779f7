"""Instructor workload aggregation and write-back."""

import json
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from ..exceptions import InvalidRecordError, SnapshotFileNotFoundError
from .constants import HIGH_WORKLOAD_RATIO, MAX_FACULTY_HOURS_PER_WEEK
from .models import Faculty, ScheduleEntry

logger = logging.getLogger(__name__)


def aggregate_faculty_hours(
    schedule: Iterable[ScheduleEntry], faculty_ids: Iterable[str] = ()
) -> dict[str, int]:
    """Total assigned weekly hours per instructor.

    Args:
        schedule: Finished schedule
        faculty_ids: Instructors of the run; those without entries get 0

    Returns:
        Mapping of faculty id to the sum of its entries' durations
    """
    hours: dict[str, int] = defaultdict(int)
    for faculty_id in faculty_ids:
        hours[faculty_id] = 0
    for entry in schedule:
        hours[entry.faculty_id] += entry.duration or 1
    return dict(hours)


class WorkloadStatus(str, Enum):
    """Load level of an instructor relative to their weekly cap."""

    NORMAL = "NORMAL"
    HIGH = "HIGH"
    OVERLOADED = "OVERLOADED"


@dataclass(frozen=True)
class WorkloadSummary:
    """Weekly load of one instructor."""

    faculty_id: str
    name: str
    department: str
    current_hours: int
    max_hours: int
    utilization: float
    status: WorkloadStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.faculty_id,
            "name": self.name,
            "department": self.department,
            "current_hours": self.current_hours,
            "max_hours": self.max_hours,
            "utilization": self.utilization,
            "status": self.status.value,
        }


def workload_status(current_hours: int, max_hours: int) -> WorkloadStatus:
    if current_hours >= max_hours:
        return WorkloadStatus.OVERLOADED
    if current_hours >= max_hours * HIGH_WORKLOAD_RATIO:
        return WorkloadStatus.HIGH
    return WorkloadStatus.NORMAL


def summarize_workload(
    faculty: Iterable[Faculty],
    hours: dict[str, int] | None = None,
    default_max_hours: int = MAX_FACULTY_HOURS_PER_WEEK,
) -> list[WorkloadSummary]:
    """Utilization and status of each instructor.

    Utilization is current / max * 100, rounded to one decimal. An
    instructor is OVERLOADED at or above the weekly cap and HIGH at or above
    80% of it.

    Args:
        faculty: Instructors to report on, in output order
        hours: Weekly hours that replace each instructor's stored
               ``current_hours_per_week`` (missing ids count as 0). When
               omitted the stored value is used.
        default_max_hours: Cap for instructors without their own

    Returns:
        One WorkloadSummary per instructor
    """
    summaries = []
    for member in faculty:
        current = (
            member.current_hours_per_week if hours is None else hours.get(member.id, 0)
        )
        max_hours = member.max_hours_per_week or default_max_hours
        utilization = round(current / max_hours * 100, 1) if max_hours > 0 else 0.0
        summaries.append(
            WorkloadSummary(
                faculty_id=member.id,
                name=member.name,
                department=member.department,
                current_hours=current,
                max_hours=max_hours,
                utilization=utilization,
                status=workload_status(current, max_hours),
            )
        )
    return summaries


class WorkloadStore(ABC):
    """Durable home of each instructor's weekly-hour baseline."""

    @abstractmethod
    def set_current_hours(self, hours: dict[str, int]) -> None:
        """Replace the stored weekly hours of the given instructors.

        Args:
            hours: Mapping of faculty id to absolute weekly hours
        """
        pass


class InMemoryWorkloadStore(WorkloadStore):
    """Workload store backed by a dictionary."""

    def __init__(self, initial: dict[str, int] | None = None):
        self.hours: dict[str, int] = dict(initial or {})

    def set_current_hours(self, hours: dict[str, int]) -> None:
        self.hours.update(hours)


class JsonWorkloadStore(WorkloadStore):
    """Writes weekly hours back into a ``faculty.json`` snapshot file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def set_current_hours(self, hours: dict[str, int]) -> None:
        if not self.path.exists():
            raise SnapshotFileNotFoundError(self.path)

        with open(self.path, encoding="utf-8") as f:
            records = json.load(f)

        if not isinstance(records, list):
            raise InvalidRecordError("expected a list of faculty records", str(self.path))

        for record in records:
            faculty_id = str(record.get("id", record.get("employeeId", "")))
            if faculty_id in hours:
                record["currentHoursPerWeek"] = hours[faculty_id]

        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)


class WorkloadUpdater:
    """Reports finished-run workload so the next run starts from it."""

    def __init__(self, store: WorkloadStore):
        self.store = store

    def update_faculty_workload(
        self, schedule: Iterable[ScheduleEntry], faculty_ids: Iterable[str] = ()
    ) -> dict[str, int]:
        """Aggregate hours from a schedule and replace the stored baseline.

        Args:
            schedule: Finished schedule
            faculty_ids: Instructors of the run. Those without entries are
                         written as 0; instructors outside the run keep
                         their stored value.

        Returns:
            The hours that were written
        """
        hours = aggregate_faculty_hours(schedule, faculty_ids)
        self.store.set_current_hours(hours)
        logger.info(f"Updated workload for {len(hours)} instructors")
        return hours
