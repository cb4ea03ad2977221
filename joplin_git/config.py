"""Configuration management for joplin-git."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONFIG_DIR = Path("~/.config/joplin-git").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_JOPLIN_DATABASE = Path("~/.config/joplin-desktop/database.sqlite")
DEFAULT_SETTINGS_FILENAME = "settings.sqlite3"


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class MissingConfigError(ConfigError):
    """Raised when the configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found at {path}")
        self.path = path


class InvalidConfigError(ConfigError):
    """Raised when the configuration file contains malformed values."""


@dataclass(slots=True)
class JoplinGitConfig:
    """In-memory representation of the joplin-git configuration file."""

    joplin_database: Path
    settings_path: Path
    sync_command: tuple[str, ...] = field(default_factory=tuple)
    source_path: Path | None = None


def _resolve_path(raw: object, key: str, base_dir: Path, default: Path) -> Path:
    if raw is None:
        candidate = default
    elif isinstance(raw, str):
        text = raw.strip()
        candidate = Path(text) if text else default
    else:
        raise InvalidConfigError(f"'{key}' must be a string when provided")

    candidate = candidate.expanduser()
    return (candidate if candidate.is_absolute() else base_dir / candidate).resolve()


def load_config(path: Path | None = None) -> JoplinGitConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``~/.config/joplin-git/config.toml``) is used.

    Raises
    ------
    MissingConfigError
        If the file cannot be found.
    InvalidConfigError
        If settings are malformed.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        raise MissingConfigError(config_path)

    try:
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    section = raw.get("joplin_git", {})
    if not isinstance(section, dict):
        raise InvalidConfigError("'joplin_git' section must be a table")

    config_dir = config_path.parent.expanduser()

    joplin_database = _resolve_path(
        section.get("joplin_database"),
        "joplin_database",
        config_dir,
        DEFAULT_JOPLIN_DATABASE,
    )
    # Relative settings paths live next to the configuration file.
    settings_path = _resolve_path(
        section.get("settings_path"),
        "settings_path",
        config_dir,
        Path(DEFAULT_SETTINGS_FILENAME),
    )

    sync_command_raw = section.get("sync_command", [])
    if isinstance(sync_command_raw, str):
        sync_command = tuple(sync_command_raw.split())
    elif isinstance(sync_command_raw, list) and all(
        isinstance(item, str) for item in sync_command_raw
    ):
        sync_command = tuple(item for item in sync_command_raw if item.strip())
    else:
        raise InvalidConfigError("'sync_command' must be a list of strings")

    return JoplinGitConfig(
        joplin_database=joplin_database,
        settings_path=settings_path,
        sync_command=sync_command,
        source_path=config_path,
    )


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    config_dir = path.parent
    config_dir.mkdir(parents=True, exist_ok=True)
    default_content = (
        "[joplin_git]\n"
        f'joplin_database = "{DEFAULT_JOPLIN_DATABASE}"\n'
        f'settings_path = "{DEFAULT_SETTINGS_FILENAME}"\n'
        "# Command asking Joplin to synchronize after each export.\n"
        '# sync_command = ["joplin", "sync"]\n'
        "sync_command = []\n"
    )
    path.write_text(default_content, encoding="utf-8")
    return True
