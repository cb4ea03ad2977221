"""Commit command: export the current note and version it with git."""

from __future__ import annotations

import click

from ..git_sync import GitSyncError
from ..host_sync import HostSyncError
from ..joplin_db import HostDataError
from ..services.errors import ExportError
from ..services.pipeline import run_pipeline
from ..settings import SettingsError
from ._common import JoplinGitCliError, get_app, note_option


@click.command(name="commit")
@note_option
@click.pass_context
def commit(ctx: click.Context, note_id: str | None) -> None:
    """Export the current note, commit it and push when a remote exists."""

    app = get_app(ctx)

    try:
        report = run_pipeline(app, note_id)
    except (
        ExportError,
        GitSyncError,
        HostSyncError,
        HostDataError,
        SettingsError,
        OSError,
    ) as exc:
        raise JoplinGitCliError(str(exc)) from exc

    click.echo(f"Exported: {report.file_path}")
    click.echo(f"Git: {report.sync.summary}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(commit)
