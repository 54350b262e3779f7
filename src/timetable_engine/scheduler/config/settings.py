"""Scheduling settings loader."""

import json
from pathlib import Path

from ...exceptions import InvalidRecordError
from ..models import SchedulingConfig


class SettingsConfig:
    """Loader for optional ``settings.json`` overrides of SchedulingConfig."""

    def __init__(self, settings_path: Path | None = None):
        self._overrides: dict = {}

        if settings_path and settings_path.exists():
            self._load(settings_path)

    def _load(self, path: Path) -> None:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise InvalidRecordError("expected a settings object", path.name)
        self._overrides = data

    def build(self, **overrides) -> SchedulingConfig:
        """Build the run config; keyword overrides win over the file."""
        data = {**self._overrides, **{k: v for k, v in overrides.items() if v is not None}}
        try:
            return SchedulingConfig.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidRecordError(str(e), "settings") from e
