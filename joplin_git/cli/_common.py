"""Shared helpers for joplin-git CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from ..app import AppContext, bootstrap
from ..config import ConfigError, MissingConfigError
from ..settings import SettingsError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}

note_option = click.option(
    "-n",
    "--note",
    "note_id",
    type=str,
    default=None,
    help="Joplin note id (defaults to the most recently edited note).",
)


class JoplinGitCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""


def get_app(ctx: click.Context) -> AppContext:
    """Return a cached AppContext for the current CLI invocation."""

    app: AppContext | None = ctx.obj.get("app")
    if app is not None:
        return app

    config_path_opt: Path | None = ctx.obj.get("config_path")

    try:
        app = bootstrap(config_path_opt)
    except MissingConfigError as exc:
        raise JoplinGitCliError(
            "Configuration not found. Run 'jgit config' once to set up joplin-git."
        ) from exc
    except (ConfigError, SettingsError) as exc:
        raise JoplinGitCliError(str(exc)) from exc

    ctx.obj["app"] = app
    return app
