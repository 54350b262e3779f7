"""Unified snapshot loader."""

import logging
from pathlib import Path

from ...exceptions import SnapshotFileNotFoundError
from ..models import DomainSnapshot, SchedulingConfig
from .courses import CourseConfig
from .faculty import FacultyConfig
from .rooms import RoomConfig
from .settings import SettingsConfig

logger = logging.getLogger(__name__)


class SnapshotLoader:
    """Unified loader for all snapshot files of a data directory."""

    REQUIRED_FILES = ("courses.json", "faculty.json", "rooms.csv")

    def __init__(self, data_dir: Path | str):
        """
        Initialize snapshot loader.

        Args:
            data_dir: Path to directory containing snapshot files.
                     Expected files:
                     - courses.json
                     - faculty.json
                     - rooms.csv
                     - settings.json (optional)

        Raises:
            SnapshotFileNotFoundError: If a required file is missing
        """
        self.data_dir = Path(data_dir)

        for filename in self.REQUIRED_FILES:
            path = self.data_dir / filename
            if not path.exists():
                raise SnapshotFileNotFoundError(path)

        self.courses = CourseConfig(self.data_dir / "courses.json")
        self.faculty = FacultyConfig(self.data_dir / "faculty.json")
        self.rooms = RoomConfig(self.data_dir / "rooms.csv")
        self.settings = SettingsConfig(self._get_path("settings.json"))

    def _get_path(self, filename: str) -> Path | None:
        """Get path to snapshot file if it exists."""
        path = self.data_dir / filename
        return path if path.exists() else None

    @property
    def faculty_path(self) -> Path:
        return self.data_dir / "faculty.json"

    def build_config(self, **overrides) -> SchedulingConfig:
        """Scheduling config from settings.json plus keyword overrides."""
        return self.settings.build(**overrides)

    def load(self, department: str, semester: int) -> DomainSnapshot:
        """Build the snapshot for one department and semester.

        Keeps active courses of the scope, active faculty of the department
        and every active room.
        """
        snapshot = DomainSnapshot(
            department=department,
            semester=semester,
            courses=tuple(self.courses.get_courses(department, semester)),
            faculty=tuple(self.faculty.get_faculty(department)),
            rooms=tuple(self.rooms.get_active_rooms()),
        )
        logger.info(
            f"Loaded snapshot for {department} sem {semester}: "
            f"{len(snapshot.courses)} courses, {len(snapshot.faculty)} faculty, "
            f"{len(snapshot.rooms)} rooms"
        )
        return snapshot
