"""Settings commands for joplin-git CLI."""

from __future__ import annotations

import json

import click

from ..settings import (
    COMMIT_PREFIX,
    NOTEBOOK_DIR_MAP,
    TARGET_DIR,
    SettingsError,
)
from ._common import JoplinGitCliError, get_app

SETTING_KEYS = {
    "target-dir": TARGET_DIR,
    "commit-prefix": COMMIT_PREFIX,
    "notebook-dir-map": NOTEBOOK_DIR_MAP,
}


@click.group(name="settings")
def settings() -> None:
    """Inspect or change export settings."""


@settings.command(name="show")
@click.pass_context
def show(ctx: click.Context) -> None:
    """Print the current export settings."""

    app = get_app(ctx)
    for name, key in SETTING_KEYS.items():
        click.echo(f"{name}: {app.settings.get(key)!r}")


@settings.command(name="set")
@click.argument("name", type=click.Choice(sorted(SETTING_KEYS)))
@click.argument("value")
@click.pass_context
def set_(ctx: click.Context, name: str, value: str) -> None:
    """Set the export setting NAME to VALUE."""

    key = SETTING_KEYS[name]
    if key == NOTEBOOK_DIR_MAP:
        try:
            decoded = json.loads(value)
        except ValueError as exc:
            raise JoplinGitCliError(f"Invalid JSON for {name}: {exc}") from exc
        if not isinstance(decoded, dict):
            raise JoplinGitCliError(f"{name} must be a JSON object.")
    elif key == TARGET_DIR:
        value = value.strip()

    app = get_app(ctx)
    try:
        app.settings.set(key, value)
    except SettingsError as exc:  # pragma: no cover - pass-through
        raise JoplinGitCliError(str(exc)) from exc

    click.echo(f"Set {name}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(settings)
