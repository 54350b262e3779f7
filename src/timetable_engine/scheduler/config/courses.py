"""Course configuration loader."""

import json
from pathlib import Path

from ...exceptions import InvalidRecordError
from ..models import Course


class CourseConfig:
    """Loader for course records from courses.json."""

    def __init__(self, courses_path: Path | None = None):
        self.courses: list[Course] = []

        if courses_path and courses_path.exists():
            self._load(courses_path)

    def _load(self, path: Path) -> None:
        """Load courses from JSON."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise InvalidRecordError("expected a list of course records", path.name)

        for index, record in enumerate(data):
            try:
                self.courses.append(Course.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidRecordError(str(e), path.name, index) from e

    def get_courses(self, department: str, semester: int) -> list[Course]:
        """Active courses of a department and semester."""
        return [
            c
            for c in self.courses
            if c.is_active and c.department == department and c.semester == semester
        ]
