"""Headless access to a propedit workspace from the command line."""

import asyncio
import contextlib
import logging
import sys
from pathlib import Path

import typer

from propedit.config import ConfigError, Settings, load_config
from propedit.errors import FilesystemError
from propedit.fs.capability import DirectoryCapability, LocalDirectory
from propedit.models import ConfigFile, Project
from propedit.workspace import Workspace

app = typer.Typer(
    help="Browse and switch a local opt configuration tree without the TUI",
    no_args_is_help=True,
)

# Module-level defaults for Typer arguments
_ROOT_HELP = "Path to the opt directory (defaults to the configured start path)"
_ROOT_NAME_HELP = "Name the root directory must have (defaults to the configured root name)"
_VERBOSE_HELP = "Log core activity to stderr"
_YES_HELP = "Do not ask for confirmation"


class CliHost:
    """Host that answers the directory prompt with a fixed path and talks on stdout."""

    def __init__(self, root: Path | None, assume_yes: bool = False) -> None:
        self._root = root
        self.assume_yes = assume_yes
        self.errors = 0

    async def prompt_directory(self, mode: str, start_hint: str) -> DirectoryCapability | None:
        path = self._root if self._root is not None else Path(start_hint)
        try:
            return LocalDirectory.open(path)
        except FilesystemError as exc:
            self.notify(str(exc), title="Error", severity="error")
            return None

    async def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        return typer.confirm(message, default=False)

    def notify(self, message: str, *, title: str = "", severity: str = "information") -> None:
        if severity == "error":
            self.errors += 1
        prefix = f"{title}: " if title else ""
        typer.echo(f"{prefix}{message}", err=severity in ("error", "warning"))


def _settings(root_name: str | None) -> Settings:
    settings = Settings()
    with contextlib.suppress(ConfigError):
        settings = load_config()
    if root_name:
        settings = settings.model_copy(update={"root_name": root_name})
    return settings


def _open_workspace(ctx: typer.Context) -> tuple[Workspace, CliHost]:
    """Authorize the root given on the command line, or exit 1."""
    host = CliHost(ctx.obj["root"], assume_yes=ctx.obj.get("yes", False))
    workspace = Workspace(host, ctx.obj["settings"])
    if not asyncio.run(workspace.authorize()):
        if host.errors == 0:
            typer.echo("Authorization cancelled", err=True)
        sys.exit(1)
    return workspace, host


def _find_project(workspace: Workspace, name: str) -> Project:
    for project in workspace.list_projects():
        if project.name == name:
            return project
    typer.echo(f"No project named '{name}'", err=True)
    sys.exit(1)


def _find_file(files: list[ConfigFile], name: str) -> ConfigFile:
    for file in files:
        if name in (file.name, file.display_name):
            return file
    typer.echo(f"No config file named '{name}'", err=True)
    sys.exit(1)


@app.callback()
def root_options(
    ctx: typer.Context,
    root: Path = typer.Option(  # noqa: B008
        None,
        "--root",
        "-r",
        help=_ROOT_HELP,
    ),
    root_name: str = typer.Option(  # noqa: B008
        None,
        "--root-name",
        help=_ROOT_NAME_HELP,
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help=_VERBOSE_HELP,
    ),
) -> None:
    """Browse and switch a local opt configuration tree."""
    settings = _settings(root_name)
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)
    ctx.obj = {"root": root, "settings": settings}


@app.command()
def projects(ctx: typer.Context) -> None:
    """List the projects under data/."""
    workspace, _ = _open_workspace(ctx)
    found = workspace.list_projects()
    if not found:
        typer.echo("No project folders")
        return
    for project in found:
        typer.echo(f"{project.name}\t{project.path}")


@app.command()
def files(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project folder name"),  # noqa: B008
) -> None:
    """List the .properties files of a project."""
    workspace, _ = _open_workspace(ctx)
    found = workspace.select_project(_find_project(workspace, project))
    if not found:
        typer.echo("No config files")
        return
    for file in found:
        typer.echo(f"{file.display_name}\t{file.name}")


@app.command()
def show(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project folder name"),  # noqa: B008
    file: str = typer.Argument(..., help="File name or display name"),  # noqa: B008
) -> None:
    """Print the decoded entries of a config file as key=value lines."""
    workspace, _ = _open_workspace(ctx)
    found = workspace.select_project(_find_project(workspace, project))
    if not workspace.open_file(_find_file(found, file)):
        sys.exit(1)
    for entry in workspace.session.entries:
        typer.echo(f"{entry.key}={entry.value}")


@app.command()
def env(ctx: typer.Context) -> None:
    """Print the current environment mode (Online or Local)."""
    workspace, _ = _open_workspace(ctx)
    typer.echo(workspace.environment_label)


@app.command("toggle-env")
def toggle_env(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help=_YES_HELP),  # noqa: B008
) -> None:
    """Switch between Online and Local mode."""
    ctx.obj["yes"] = yes
    workspace, host = _open_workspace(ctx)
    errors_before = host.errors
    asyncio.run(workspace.toggle_environment())
    if host.errors > errors_before:
        sys.exit(1)
    typer.echo(workspace.environment_label)
