"""Faculty configuration loader."""

import json
from pathlib import Path

from ...exceptions import InvalidRecordError
from ..models import Faculty


class FacultyConfig:
    """Loader for faculty records from faculty.json.

    Unavailable slots are given as ``{"day": "Monday", "timeSlotId": 3}``
    objects; ``currentHoursPerWeek`` is the baseline written by the previous
    run.
    """

    def __init__(self, faculty_path: Path | None = None):
        self.faculty: list[Faculty] = []

        if faculty_path and faculty_path.exists():
            self._load(faculty_path)

    def _load(self, path: Path) -> None:
        """Load faculty from JSON."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise InvalidRecordError("expected a list of faculty records", path.name)

        for index, record in enumerate(data):
            try:
                self.faculty.append(Faculty.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidRecordError(str(e), path.name, index) from e

    def get_faculty(self, department: str) -> list[Faculty]:
        """Active faculty of a department."""
        return [f for f in self.faculty if f.is_active and f.department == department]
