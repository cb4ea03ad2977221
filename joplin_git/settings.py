"""Persistent plugin settings backed by a small peewee key/value table."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from peewee import DatabaseError, Model, SqliteDatabase, TextField

logger = logging.getLogger(__name__)

TABLE_SETTINGS = "settings"

TARGET_DIR = "target_dir"
COMMIT_PREFIX = "commit_prefix"
NOTEBOOK_DIR_MAP = "notebook_dir_map"

DEFAULT_COMMIT_PREFIX = "Automatic Joplin commit: "

DEFAULTS: dict[str, str] = {
    TARGET_DIR: "",
    COMMIT_PREFIX: DEFAULT_COMMIT_PREFIX,
    NOTEBOOK_DIR_MAP: "{}",
}


class SettingsError(RuntimeError):
    """Raised when interacting with the settings store fails."""


class SettingsDatabase(SqliteDatabase):
    """SqliteDatabase configured for per-call connection lifetimes."""

    def __init__(self, path: Path) -> None:
        super().__init__(str(path), check_same_thread=False)


class SettingsModel(Model):
    class Meta:
        database = SqliteDatabase(None)


class Setting(SettingsModel):
    """A single opaque string setting."""

    key = TextField(primary_key=True)
    value = TextField(null=False)

    class Meta:
        table_name = TABLE_SETTINGS


def parse_dir_map(raw: str | None) -> dict[str, str]:
    """Decode the serialized folder-to-directory map.

    Malformed JSON or a non-object payload yields an empty map; entries whose
    key or value is not a string are dropped.
    """

    try:
        decoded = json.loads(raw or "{}")
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed notebook directory map")
        return {}
    if not isinstance(decoded, dict):
        return {}
    return {
        key: value
        for key, value in decoded.items()
        if isinstance(key, str) and isinstance(value, str)
    }


class SettingsStore:
    """String-keyed get/set of the export settings."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._database = SettingsDatabase(self.path)

    def initialize(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:  # pragma: no cover - filesystem failures are rare
            raise SettingsError(f"Failed to create settings directory: {exc}") from exc

        with self._binding() as setting_model:
            try:
                setting_model.create_table(safe=True)
            except DatabaseError as exc:  # pragma: no cover - defensive
                raise SettingsError(f"Failed to initialize settings: {exc}") from exc

    def get(self, key: str) -> str:
        with self._binding() as setting_model:
            try:
                row = setting_model.get_or_none(setting_model.key == key)
            except DatabaseError as exc:
                raise SettingsError(f"Failed to read setting '{key}': {exc}") from exc
        if row is None:
            return DEFAULTS.get(key, "")
        return row.value

    def set(self, key: str, value: str) -> None:
        with self._binding() as setting_model:
            try:
                setting_model.replace(key=key, value=str(value)).execute()
            except DatabaseError as exc:  # pragma: no cover - defensive
                raise SettingsError(f"Failed to store setting '{key}': {exc}") from exc

    @property
    def target_dir(self) -> str:
        return self.get(TARGET_DIR).strip()

    @property
    def commit_prefix(self) -> str:
        return self.get(COMMIT_PREFIX)

    def notebook_dir_map(self) -> dict[str, str]:
        return parse_dir_map(self.get(NOTEBOOK_DIR_MAP))

    def save_notebook_dir_map(self, dir_map: dict[str, str]) -> None:
        self.set(NOTEBOOK_DIR_MAP, json.dumps(dir_map))

    def set_notebook_dir(self, folder_id: str, directory: str) -> None:
        """Point ``folder_id`` at ``directory``, rewriting the whole map."""

        directory = directory.strip()
        if not directory:
            raise SettingsError("No directory provided.")
        dir_map = self.notebook_dir_map()
        dir_map[folder_id] = directory
        self.save_notebook_dir_map(dir_map)

    def clear_notebook_dir(self, folder_id: str) -> bool:
        """Drop the override for ``folder_id``; return False when none existed."""

        dir_map = self.notebook_dir_map()
        if folder_id not in dir_map:
            return False
        del dir_map[folder_id]
        self.save_notebook_dir_map(dir_map)
        return True

    @contextmanager
    def _binding(self) -> Iterator[type[Setting]]:
        with self._database.connection_context():
            with Setting.bind_ctx(self._database):
                yield Setting
