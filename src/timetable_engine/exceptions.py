"""Custom exceptions for the timetable engine."""

from pathlib import Path


class TimetableError(Exception):
    """Base exception for timetable engine errors."""

    pass


class SnapshotError(TimetableError):
    """Base exception for snapshot loading errors."""

    pass


class SnapshotFileNotFoundError(SnapshotError):
    """A required snapshot file is missing."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Snapshot file not found: {self.path}")


class InvalidRecordError(SnapshotError):
    """A snapshot record could not be read."""

    def __init__(self, message: str, source: str | None = None, index: int | None = None):
        self.source = source
        self.index = index
        location = ""
        if source:
            location += f" in '{source}'"
        if index is not None:
            location += f" at record {index}"
        super().__init__(f"Invalid record{location}: {message}")


class UnsupportedFormatError(TimetableError):
    """Requested export format is not supported."""

    def __init__(self, format_type: str, supported: list[str]):
        self.format_type = format_type
        self.supported = supported
        super().__init__(
            f"Unsupported format: {format_type}. Supported: {', '.join(supported)}"
        )
