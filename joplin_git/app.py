"""Application bootstrap and context container for joplin-git."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import JoplinGitConfig, load_config
from .git_sync import GitSync
from .host_sync import HostSync
from .joplin_db import JoplinDatabase
from .settings import SettingsStore


@dataclass(slots=True)
class AppContext:
    """Aggregates the host adapters and services used by the pipeline."""

    config: JoplinGitConfig
    joplin: JoplinDatabase
    settings: SettingsStore
    git_sync: GitSync
    host_sync: HostSync


def bootstrap(config_path: Path | None) -> AppContext:
    """Load configuration and initialize the settings store and services."""

    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(config_path)

    settings = SettingsStore(config.settings_path)
    settings.initialize()

    return AppContext(
        config=config,
        joplin=JoplinDatabase(config.joplin_database),
        settings=settings,
        git_sync=GitSync(),
        host_sync=HostSync(config.sync_command),
    )
