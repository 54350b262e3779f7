"""Timetable Engine - weekly class timetable generation.

This module builds conflict-free weekly timetables for a department and
semester from course, faculty and room data. Each course's weekly hours are
split into lecture, tutorial and practical sessions, which are placed on a
day x time-slot grid with an eligible instructor and a suitable room.

Example usage:
    from timetable_engine import SnapshotLoader, TimetableGenerator

    loader = SnapshotLoader("data")
    snapshot = loader.load("CSE", 3)
    result = TimetableGenerator(loader.build_config(seed=42)).generate(snapshot)

    print(f"Placed: {result.total_assigned}, unplaced: {result.total_unplaced}")
    for entry in result.schedule:
        print(f"{entry.course_code} | {entry.day.value} {entry.start_time} | {entry.room_id}")

    # Export to JSON
    from timetable_engine.exporters import JSONExporter
    exporter = JSONExporter()
    exporter.export(result, "timetable.json")
"""

from .exceptions import (
    InvalidRecordError,
    SnapshotError,
    SnapshotFileNotFoundError,
    TimetableError,
    UnsupportedFormatError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .scheduler import (
    DomainSnapshot,
    GenerationResult,
    ScheduleEntry,
    SchedulingConfig,
    SnapshotLoader,
    TimetableGenerator,
    WorkloadUpdater,
    generate,
)

__version__ = "0.1.0"

__all__ = [
    # Main generator
    "TimetableGenerator",
    "generate",
    "SnapshotLoader",
    "WorkloadUpdater",
    # Models
    "DomainSnapshot",
    "GenerationResult",
    "ScheduleEntry",
    "SchedulingConfig",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "TimetableError",
    "SnapshotError",
    "SnapshotFileNotFoundError",
    "InvalidRecordError",
    "UnsupportedFormatError",
]
