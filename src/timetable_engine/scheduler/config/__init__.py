"""Snapshot and settings loaders for the scheduler."""

from .courses import CourseConfig
from .faculty import FacultyConfig
from .loader import SnapshotLoader
from .rooms import RoomConfig
from .settings import SettingsConfig

__all__ = [
    "SnapshotLoader",
    "CourseConfig",
    "FacultyConfig",
    "RoomConfig",
    "SettingsConfig",
]
