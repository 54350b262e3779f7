"""Tests for result exporters."""

import csv
import json

import pytest
from openpyxl import load_workbook

from timetable_engine.exceptions import UnsupportedFormatError
from timetable_engine.exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from timetable_engine.scheduler.exporter import load_schedule
from timetable_engine.scheduler.models import (
    GenerationResult,
    SessionType,
    UnplacedSession,
    UnscheduledReason,
)


@pytest.fixture
def result(make_entry):
    return GenerationResult(
        schedule=(make_entry(), make_entry("CS102", "F2", "R102", time_slot_id=2)),
        unplaced=(
            UnplacedSession("CS103", SessionType.PRACTICAL, 2, UnscheduledReason.NO_ROOM_AVAILABLE, "no lab"),
        ),
        iterations=3,
        score=88,
        faculty_hours={"F1": 1, "F2": 1},
        department="CSE",
        semester=3,
    )


class TestJSONExporter:
    """Tests for JSONExporter."""

    def test_export(self, tmp_path, result):
        path = tmp_path / "result.json"
        JSONExporter().export(result, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert len(data["schedule"]) == 2
        assert data["unplaced"][0]["reason"] == "no_room_available"
        assert data["generation_meta"]["score"] == 88

    def test_load_schedule_round_trip(self, tmp_path, result):
        path = tmp_path / "nested" / "result.json"
        JSONExporter().export(result, path)
        assert load_schedule(path) == list(result.schedule)


class TestCSVExporter:
    """Tests for CSVExporter."""

    def test_creates_files(self, tmp_path, result):
        CSVExporter().export(result, tmp_path / "csv")

        with open(tmp_path / "csv" / "schedule.csv", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [r["course"] for r in rows] == ["CS101", "CS102"]
        assert rows[0]["day"] == "monday"

        with open(tmp_path / "csv" / "workload.csv", encoding="utf-8") as f:
            assert list(csv.DictReader(f)) == [
                {"faculty": "F1", "hours": "1"},
                {"faculty": "F2", "hours": "1"},
            ]
        assert (tmp_path / "csv" / "summary.csv").exists()


class TestExcelExporter:
    """Tests for ExcelExporter."""

    def test_sheets(self, tmp_path, result):
        path = tmp_path / "result.xlsx"
        ExcelExporter().export(result, path)

        wb = load_workbook(path)
        assert wb.sheetnames == ["Schedule", "Workload", "Unplaced", "Summary"]
        assert wb["Schedule"].cell(row=1, column=1).value == "Course"
        assert wb["Schedule"].cell(row=2, column=1).value == "CS101"
        assert wb["Unplaced"].cell(row=2, column=4).value == "no_room_available"

    def test_empty_result(self, tmp_path):
        path = tmp_path / "empty.xlsx"
        ExcelExporter().export(GenerationResult(feasible=False), path)
        assert load_workbook(path)["Workload"].cell(row=1, column=1).value == "Faculty"


class TestGetExporter:
    """Tests for get_exporter()."""

    def test_known_formats(self):
        assert isinstance(get_exporter("json"), JSONExporter)
        assert isinstance(get_exporter("csv"), CSVExporter)
        assert isinstance(get_exporter("excel"), ExcelExporter)

    def test_unknown_format(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            get_exporter("xml")
        assert exc_info.value.supported == ["json", "csv", "excel"]
