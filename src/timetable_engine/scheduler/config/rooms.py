"""Room configuration loader."""

import csv
from pathlib import Path

from ...exceptions import InvalidRecordError
from ..models import Room, RoomType


class RoomConfig:
    """Loader for room configuration from rooms.csv.

    Columns: ``id,type,capacity,building,department,is_active``. Only ``id``,
    ``type`` and ``capacity`` are required.
    """

    def __init__(self, rooms_path: Path | None = None):
        self.rooms: list[Room] = []

        if rooms_path and rooms_path.exists():
            self._load(rooms_path)

    def _load(self, path: Path) -> None:
        """Load rooms from CSV file."""
        with open(path, encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for index, row in enumerate(reader):
                try:
                    room = Room(
                        id=row["id"].strip(),
                        room_type=RoomType(row["type"].strip().upper()),
                        capacity=int(row["capacity"]),
                        building=(row.get("building") or "").strip(),
                        department=(row.get("department") or "").strip() or None,
                        is_active=(row.get("is_active") or "true").strip().lower()
                        != "false",
                    )
                except (KeyError, ValueError) as e:
                    raise InvalidRecordError(str(e), path.name, index) from e
                self.rooms.append(room)

    def get_active_rooms(self) -> list[Room]:
        """Get all rooms that are in service."""
        return [r for r in self.rooms if r.is_active]
