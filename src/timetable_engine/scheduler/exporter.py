"""Loaders for exported generation results."""

import json
from pathlib import Path

from .models import ScheduleEntry


def load_result_json(input_path: Path | str) -> dict:
    """Load an exported generation result from JSON file.

    Args:
        input_path: Path to result JSON file

    Returns:
        Dictionary with result data
    """
    with open(input_path, encoding="utf-8") as f:
        return json.load(f)


def load_schedule(input_path: Path | str) -> list[ScheduleEntry]:
    """Load the schedule entries of an exported result."""
    data = load_result_json(input_path)
    return [ScheduleEntry.from_dict(item) for item in data.get("schedule", [])]
