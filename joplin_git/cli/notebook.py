"""Per-notebook export directory commands."""

from __future__ import annotations

import click

from ..app import AppContext
from ..joplin_db import HostDataError, Note
from ..services.errors import ExportError
from ..services.pipeline import export_dir_for, require_note
from ..settings import SettingsError
from ._common import JoplinGitCliError, get_app, note_option


def _current_notebook(app: AppContext, note_id: str | None) -> tuple[Note, str]:
    try:
        note = require_note(app, note_id)
        folder = app.joplin.get_folder(note.parent_id)
    except ExportError as exc:
        raise JoplinGitCliError("Select a note first.") from exc
    except HostDataError as exc:
        raise JoplinGitCliError(str(exc)) from exc
    title = folder.title if folder is not None else note.parent_id
    return note, title


@click.group(name="notebook")
def notebook() -> None:
    """Manage export directories for individual notebooks."""


@notebook.command(name="set-dir")
@note_option
@click.argument("directory", required=False)
@click.pass_context
def set_dir(ctx: click.Context, note_id: str | None, directory: str | None) -> None:
    """Set the export directory for the current note's notebook."""

    app = get_app(ctx)
    note, title = _current_notebook(app, note_id)

    if directory is None:
        click.echo(f"Notebook: {title}")
        directory = click.prompt(
            "Directory path (absolute)", default="", show_default=False
        )

    try:
        app.settings.set_notebook_dir(note.parent_id, directory or "")
    except SettingsError as exc:
        raise JoplinGitCliError(str(exc)) from exc

    click.echo(f'Export dir for "{title}" set to {directory.strip()}')


@notebook.command(name="clear-dir")
@note_option
@click.pass_context
def clear_dir(ctx: click.Context, note_id: str | None) -> None:
    """Clear the export directory of the current note's notebook."""

    app = get_app(ctx)
    note, title = _current_notebook(app, note_id)

    try:
        cleared = app.settings.clear_notebook_dir(note.parent_id)
    except SettingsError as exc:
        raise JoplinGitCliError(str(exc)) from exc

    if cleared:
        click.echo(f'Cleared export dir for "{title}".')
    else:
        click.echo(f'No per-notebook dir set for "{title}".')


@notebook.command(name="show")
@note_option
@click.pass_context
def show(ctx: click.Context, note_id: str | None) -> None:
    """Show where the current note would be exported."""

    app = get_app(ctx)
    note, title = _current_notebook(app, note_id)

    try:
        directory = export_dir_for(app, note)
    except (ExportError, HostDataError) as exc:
        raise JoplinGitCliError(str(exc)) from exc

    overridden = bool(app.settings.notebook_dir_map().get(note.parent_id))
    source = "notebook" if overridden else "global"
    click.echo(f"{title}: {directory} ({source})")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(notebook)
