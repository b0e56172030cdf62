"""
Local Key-Value Store

JSON file holding the persisted ``settings`` and ``updateData`` records of a
single user session. The calculation engine never touches the store; the UI
loads plain records here and hands them to the engine.
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from dateutil import parser as dateutil_parser

from config import Config
from core.shift.models import ActualsState, ShiftConfig

logger = logging.getLogger(__name__)


class LocalStore:
    """
    File-backed key-value store.

    Each key maps to ``{"value": <record>, "savedAt": <ISO timestamp>}``.
    A missing or unreadable file behaves as an empty store.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or Config.STORE_PATH)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read store {self.path}: {e} - treating as empty")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Store {self.path} does not contain an object - treating as empty")
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]):
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write store {self.path}: {e}")
            raise

    def get(self, key: str) -> Optional[Any]:
        """Get the record stored under ``key`` (None if absent)"""
        entry = self._read_all().get(key)
        if isinstance(entry, dict) and "value" in entry:
            return entry["value"]
        return None

    def set(self, key: str, value: Any):
        """Store ``value`` under ``key``, stamping the save time"""
        data = self._read_all()
        data[key] = {"value": value, "savedAt": datetime.now().isoformat()}
        self._write_all(data)
        logger.debug(f"Stored '{key}' in {self.path}")

    def remove(self, key: str):
        """Delete ``key`` if present"""
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

    def saved_at(self, key: str) -> Optional[datetime]:
        """When ``key`` was last written (None if never or unparseable)"""
        entry = self._read_all().get(key)
        if not isinstance(entry, dict) or not entry.get("savedAt"):
            return None
        try:
            return dateutil_parser.isoparse(entry["savedAt"])
        except (ValueError, TypeError):
            logger.warning(f"Invalid savedAt for '{key}': {entry.get('savedAt')}")
            return None


def load_settings(store: LocalStore) -> Optional[ShiftConfig]:
    """Load the shift configuration, or None if nothing has been saved"""
    record = store.get(Config.SETTINGS_KEY)
    if record is None:
        return None
    return ShiftConfig.from_dict(record)


def save_settings(store: LocalStore, config: ShiftConfig):
    store.set(Config.SETTINGS_KEY, config.to_dict())
    logger.info(f"Settings saved: {config.shift_start}-{config.shift_end}, "
                f"{len(config.breaks)} breaks, {len(config.control_points)} control points")


def load_actuals(store: LocalStore) -> ActualsState:
    """Load actuals; an empty state when nothing has been saved"""
    return ActualsState.from_dict(store.get(Config.UPDATE_DATA_KEY))


def save_actuals(store: LocalStore, actuals: ActualsState):
    store.set(Config.UPDATE_DATA_KEY, actuals.to_dict())
