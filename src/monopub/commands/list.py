"""List command implementation."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

from monopub.commands.base import Command, CommandContext
from monopub.errors import MonopubError

if TYPE_CHECKING:
    from monopub.workspace import Workspace


class ListFormat(Enum):
    """Output format for list command."""

    TABLE = "table"
    JSON = "json"
    GRAPH = "graph"


@dataclass
class PackageInfo:
    """Information about a package for display."""

    name: str
    version: str
    path: str
    dependencies: list[str]
    dependents: list[str]


@dataclass
class ListResult:
    """Result of list command."""

    packages: list[PackageInfo]


class ListCommand(Command[ListResult]):
    """List maintainable packages in the workspace."""

    async def execute(self) -> ListResult:
        """Execute the list command."""
        graph = await self.workspace.load_graph()

        return ListResult(
            packages=[
                PackageInfo(
                    name=pkg.name,
                    version=str(pkg.version),
                    path=self.workspace.relative_path(pkg.path),
                    dependencies=list(pkg.dependencies),
                    dependents=list(pkg.dependents),
                )
                for pkg in graph.values()
            ]
        )


async def list_packages(workspace: Workspace) -> ListResult:
    """Convenience function to list packages."""
    cmd = ListCommand(CommandContext(workspace=workspace))
    return await cmd.execute()


async def handle_list_command(
    workspace: Workspace,
    *,
    console: Console,
    error_console: Console,
    json_output: bool = False,
    graph: bool = False,
) -> None:
    """CLI handler for the list command."""
    try:
        fmt = ListFormat.TABLE
        if json_output:
            fmt = ListFormat.JSON
        elif graph:
            fmt = ListFormat.GRAPH

        result = await list_packages(workspace)

        if fmt is ListFormat.JSON:
            console.print_json(json.dumps([asdict(p) for p in result.packages]))
        elif fmt is ListFormat.GRAPH:
            for pkg in result.packages:
                if not pkg.dependencies:
                    console.print(f"[bold]{pkg.name}[/bold] v{pkg.version}")
                else:
                    deps_str = ", ".join(pkg.dependencies)
                    console.print(f"[bold]{pkg.name}[/bold] v{pkg.version} -> {deps_str}")
        else:
            table = Table(title="Packages")
            table.add_column("Name", style="bold")
            table.add_column("Version")
            table.add_column("Path")
            table.add_column("Dependencies")

            for pkg in result.packages:
                deps = ", ".join(pkg.dependencies) if pkg.dependencies else "-"
                table.add_row(pkg.name, pkg.version, pkg.path, deps)

            console.print(table)
    except MonopubError as e:
        error_console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e
    except Exception as e:
        error_console.print_exception()
        raise typer.Exit(1) from e
