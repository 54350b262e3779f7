"""Export functionality for timetable generation results."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from .exceptions import UnsupportedFormatError
from .scheduler.models import GenerationResult


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: GenerationResult, output_path: str | Path) -> None:
        """Export generation result to file.

        Args:
            result: GenerationResult to export
            output_path: Path to output file or directory
        """
        pass


def _schedule_rows(result: GenerationResult) -> list[dict]:
    return [
        {
            "course": entry.course_code,
            "session_type": entry.session_type.value,
            "faculty": entry.faculty_id,
            "room": entry.room_id,
            "day": entry.day.value,
            "time_slot_id": entry.time_slot_id,
            "start_time": entry.start_time,
            "end_time": entry.end_time,
            "duration": entry.duration,
            "department": entry.department,
            "semester": entry.semester,
        }
        for entry in result.schedule
    ]


def _summary_rows(result: GenerationResult) -> list[dict]:
    return [
        {"metric": "department", "value": result.department},
        {"metric": "semester", "value": result.semester},
        {"metric": "generated_at", "value": result.generated_at},
        {"metric": "algorithm", "value": result.algorithm},
        {"metric": "total_assigned", "value": result.total_assigned},
        {"metric": "total_unplaced", "value": result.total_unplaced},
        {"metric": "score", "value": result.score},
        {"metric": "hard_conflicts", "value": result.hard_conflicts},
        {"metric": "iterations", "value": result.iterations},
        {"metric": "conflicts_resolved", "value": result.conflicts_resolved},
        {"metric": "local_search_passes", "value": result.local_search_passes},
        {"metric": "fully_assigned", "value": result.fully_assigned},
        {"metric": "feasible", "value": result.feasible},
        {"metric": "duration_ms", "value": result.duration_ms},
    ]


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, result: GenerationResult, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                result.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, result: GenerationResult, output_path: str | Path) -> None:
        """Export generation result to CSV files.

        Creates three files:
        - schedule.csv: All schedule entries
        - workload.csv: Assigned hours per instructor
        - summary.csv: Run metadata

        Args:
            result: GenerationResult to export
            output_path: Path to output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(output_dir / "schedule.csv", _schedule_rows(result))
        self._write_csv(
            output_dir / "workload.csv",
            [
                {"faculty": faculty_id, "hours": hours}
                for faculty_id, hours in sorted(result.faculty_hours.items())
            ],
        )
        self._write_csv(output_dir / "summary.csv", _summary_rows(result))

    def _write_csv(self, output_path: Path, rows: list[dict]) -> None:
        """Write rows to CSV file."""
        if not rows:
            return

        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=rows[0].keys())
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    SCHEDULE_COLUMNS = [
        "Course", "Type", "Faculty", "Room", "Day", "Slot",
        "Start", "End", "Duration", "Department", "Semester",
    ]

    def export(self, result: GenerationResult, output_path: str | Path) -> None:
        """Export generation result to Excel file.

        Creates workbook with sheets:
        - Schedule: All schedule entries
        - Workload: Assigned hours per instructor
        - Unplaced: Sessions left out, with reasons
        - Summary: Run metadata

        Args:
            result: GenerationResult to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            self._export_schedule_sheet(result, writer)
            self._export_workload_sheet(result, writer)
            self._export_unplaced_sheet(result, writer)
            self._export_summary_sheet(result, writer)

    def _export_schedule_sheet(
        self, result: GenerationResult, writer: pd.ExcelWriter
    ) -> None:
        rows = [list(row.values()) for row in _schedule_rows(result)]
        df = pd.DataFrame(rows, columns=self.SCHEDULE_COLUMNS)
        df.to_excel(writer, sheet_name="Schedule", index=False)

    def _export_workload_sheet(
        self, result: GenerationResult, writer: pd.ExcelWriter
    ) -> None:
        rows = [
            {"Faculty": faculty_id, "Hours": hours}
            for faculty_id, hours in sorted(result.faculty_hours.items())
        ]
        df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=["Faculty", "Hours"])
        df.to_excel(writer, sheet_name="Workload", index=False)

    def _export_unplaced_sheet(
        self, result: GenerationResult, writer: pd.ExcelWriter
    ) -> None:
        columns = ["Course", "Type", "Duration", "Reason", "Details"]
        rows = [
            {
                "Course": item.course_code,
                "Type": item.session_type.value,
                "Duration": item.duration,
                "Reason": item.reason.value,
                "Details": item.details,
            }
            for item in result.unplaced
        ]
        df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=columns)
        df.to_excel(writer, sheet_name="Unplaced", index=False)

    def _export_summary_sheet(
        self, result: GenerationResult, writer: pd.ExcelWriter
    ) -> None:
        rows = [
            {"Metric": row["metric"].replace("_", " ").title(), "Value": row["value"]}
            for row in _summary_rows(result)
        ]
        df = pd.DataFrame(rows)
        df.to_excel(writer, sheet_name="Summary", index=False)


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        UnsupportedFormatError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise UnsupportedFormatError(format_type, list(exporters.keys()))

    return exporters[format_type]()
