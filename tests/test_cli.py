"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from timetable_engine.cli import app
from timetable_engine.exporters import JSONExporter
from timetable_engine.scheduler.models import GenerationResult

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path):
    courses = [
        {"code": "CS301", "department": "CSE", "semester": 3, "theoryHours": 3},
        {"code": "CS302", "department": "CSE", "semester": 3, "practicalHours": 2, "requiresLab": True},
    ]
    faculty = [
        {"id": "F1", "department": "CSE", "currentHoursPerWeek": 2},
        {"id": "F2", "department": "CSE"},
    ]
    (tmp_path / "courses.json").write_text(json.dumps(courses), encoding="utf-8")
    (tmp_path / "faculty.json").write_text(json.dumps(faculty), encoding="utf-8")
    (tmp_path / "rooms.csv").write_text(
        "id,type,capacity\nR101,CLASSROOM,60\nL1,LAB,60\n", encoding="utf-8"
    )
    return tmp_path


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_generate_json(self, data_dir, tmp_path):
        output = tmp_path / "result.json"
        result = runner.invoke(
            app, ["generate", str(data_dir), "-d", "CSE", "-s", "3", "--seed", "1", "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["schedule"]) == 4
        assert data["generation_meta"]["hard_conflicts"] == 0

    def test_generate_grid_and_workload(self, data_dir, tmp_path):
        grid = tmp_path / "grid.xlsx"
        result = runner.invoke(
            app,
            ["generate", str(data_dir), "-d", "CSE", "-s", "3", "--grid", str(grid), "--update-workload"],
        )

        assert result.exit_code == 0, result.output
        assert grid.exists()
        records = json.loads((data_dir / "faculty.json").read_text(encoding="utf-8"))
        assert sum(r.get("currentHoursPerWeek", 0) for r in records) == 5
        assert all("currentHoursPerWeek" in r for r in records)

    def test_generate_prints_workload_status(self, data_dir):
        result = runner.invoke(app, ["generate", str(data_dir), "-d", "CSE", "-s", "3", "--seed", "1"])

        assert result.exit_code == 0, result.output
        assert "Faculty Hours" in result.output
        assert "Utilization" in result.output
        assert "NORMAL" in result.output
        assert "OVERLOADED" not in result.output

    def test_missing_data_file(self, tmp_path):
        result = runner.invoke(app, ["generate", str(tmp_path), "-d", "CSE", "-s", "3"])
        assert result.exit_code == 1
        assert "Snapshot file not found" in result.output


class TestOtherCommands:
    """Tests for analyze and show."""

    def test_analyze(self, data_dir):
        result = runner.invoke(app, ["analyze", str(data_dir), "-d", "CSE", "-s", "3"])
        assert result.exit_code == 0, result.output
        assert "Looks feasible" in result.output

    def test_show(self, data_dir, tmp_path):
        output = tmp_path / "result.json"
        runner.invoke(app, ["generate", str(data_dir), "-d", "CSE", "-s", "3", "-o", str(output)])

        result = runner.invoke(app, ["show", str(output)])
        assert result.exit_code == 0, result.output
        assert "CSE - Semester 3" in result.output

    def test_show_missing_file(self, tmp_path):
        result = runner.invoke(app, ["show", str(tmp_path / "nope.json")])
        assert result.exit_code == 1

    def test_show_single_instructor(self, tmp_path, make_entry):
        output = tmp_path / "result.json"
        schedule = (make_entry(), make_entry("CS102", "F2", "R102", time_slot_id=2))
        JSONExporter().export(GenerationResult(schedule=schedule, department="CSE", semester=3), output)

        result = runner.invoke(app, ["show", str(output), "--faculty", "F2"])

        assert result.exit_code == 0, result.output
        assert "CSE - Semester 3 - F2" in result.output
        assert "CS102" in result.output
        assert "CS101" not in result.output

    def test_show_unknown_instructor(self, tmp_path, make_entry):
        output = tmp_path / "result.json"
        JSONExporter().export(GenerationResult(schedule=(make_entry(),)), output)

        result = runner.invoke(app, ["show", str(output), "--faculty", "F9"])

        assert result.exit_code == 1
        assert "No sessions for instructor F9" in result.output
