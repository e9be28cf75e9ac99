"""monopub CLI application."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from monopub.commands import handle_list_command, handle_publish_command
from monopub.errors import MonopubError
from monopub.workspace import Workspace


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from monopub import __version__

        print(f"monopub {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="monopub",
    help="Bump and publish interdependent pnpm workspace packages",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def _app_callback(
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option("--version", "-V", help="Show version and exit", callback=version_callback),
    ] = False,
) -> None:
    """Bump and publish interdependent pnpm workspace packages."""
    pass


console = Console()
error_console = Console(stderr=True)


def get_workspace(path: Path | None = None) -> Workspace:
    """Load workspace from current directory or specified path."""
    try:
        return Workspace.discover(path)
    except MonopubError as e:
        error_console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e


@app.command()
def publish(
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the publish queue without publishing"),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Publish without asking for confirmation"),
    ] = False,
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Directory inside the workspace"),
    ] = None,
) -> None:
    """Bump and publish packages with unpublished changes, dependencies first."""
    workspace = get_workspace(path)
    asyncio.run(
        handle_publish_command(
            workspace,
            console=console,
            error_console=error_console,
            dry_run=dry_run,
            yes=yes,
        )
    )


@app.command("list")
def list_cmd(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
    graph: Annotated[
        bool,
        typer.Option("--graph", help="Show dependency graph"),
    ] = False,
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Directory inside the workspace"),
    ] = None,
) -> None:
    """List maintainable workspace packages."""
    workspace = get_workspace(path)
    asyncio.run(
        handle_list_command(
            workspace,
            console=console,
            error_console=error_console,
            json_output=json_output,
            graph=graph,
        )
    )


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
