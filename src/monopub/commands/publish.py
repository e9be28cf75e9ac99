"""Publish command implementation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

from monopub.analysis import (
    LookupProgress,
    PublishEntry,
    PublishPlan,
    VersionSource,
    detect_updates,
    plan_publish,
)
from monopub.commands.base import Command, CommandContext
from monopub.errors import MonopubError
from monopub.registry import NpmRegistry
from monopub.versioning import Severity
from monopub.workspace.manifest import write_package_version
from monopub.workspace.pnpm import publish_package

if TYPE_CHECKING:
    from monopub.workspace import Workspace


@dataclass
class PublishResult:
    """Result of publish command."""

    plan: PublishPlan
    updates: dict[str, Severity] = field(default_factory=dict)
    published: list[str] = field(default_factory=list)
    package_count: int = 0


@dataclass
class PublishOptions:
    """Options for publish command."""

    dry_run: bool = False
    on_lookup: Callable[[LookupProgress], None] | None = None
    on_publish: Callable[[PublishEntry, int, int], None] | None = None
    on_output: Callable[[str], None] | None = None


class PublishCommand(Command[PublishResult]):
    """Bump and publish packages with unpublished changes, dependencies first."""

    def __init__(
        self,
        context: CommandContext,
        options: PublishOptions | None = None,
        *,
        source: VersionSource | None = None,
    ) -> None:
        super().__init__(context)
        self.options = options or PublishOptions()
        self.source = source or NpmRegistry(
            self.workspace.root, url=self.workspace.config.registry.url
        )

    @property
    def is_dry_run(self) -> bool:
        """Check if this is a dry run."""
        return self.options.dry_run or self.context.dry_run

    async def plan(self) -> PublishResult:
        """Load the workspace, detect updates and plan the publish queue."""
        graph = await self.workspace.load_graph()
        if not graph:
            return PublishResult(plan=PublishPlan())

        updates = await detect_updates(
            graph,
            self.source,
            concurrency=self.workspace.config.registry.concurrency,
            on_progress=self.options.on_lookup,
        )
        if not updates:
            return PublishResult(plan=PublishPlan(), package_count=len(graph))

        return PublishResult(
            plan=plan_publish(graph, updates),
            updates=updates,
            package_count=len(graph),
        )

    async def publish(self, plan: PublishPlan) -> list[str]:
        """Write new versions and publish, one package at a time in plan order.

        Returns:
            Names of published packages.
        """
        publish_config = self.workspace.config.publish
        graph = self.workspace.graph
        published: list[str] = []

        for index, entry in enumerate(plan, start=1):
            if self.options.on_publish:
                self.options.on_publish(entry, index, len(plan))

            package_dir = self.workspace.root / graph[entry.name].path
            if entry.bumped:
                write_package_version(package_dir, entry.version)

            await publish_package(
                package_dir,
                publish_config.command,
                timeout=publish_config.timeout,
                on_output=self.options.on_output,
            )
            published.append(entry.name)

        return published

    async def execute(self) -> PublishResult:
        """Execute the publish command."""
        result = await self.plan()
        if self.is_dry_run or not result.plan:
            return result

        result.published = await self.publish(result.plan)
        return result


async def publish(
    workspace: Workspace,
    *,
    dry_run: bool = False,
    source: VersionSource | None = None,
) -> PublishResult:
    """Convenience function to publish updated packages."""
    context = CommandContext(workspace=workspace, dry_run=dry_run)
    cmd = PublishCommand(context, PublishOptions(dry_run=dry_run), source=source)
    return await cmd.execute()


def _plan_table(plan: PublishPlan) -> Table:
    table = Table()
    table.add_column("Package", style="cyan")
    table.add_column("Current", style="dim")
    table.add_column("Next", style="green")
    table.add_column("Bump", style="magenta")
    table.add_column("Reason")

    for entry in plan:
        table.add_row(
            entry.name,
            str(entry.current),
            str(entry.version),
            entry.severity.name.lower(),
            "dependency" if entry.propagated else "updated",
        )
    return table


async def handle_publish_command(
    workspace: Workspace,
    *,
    console: Console,
    error_console: Console,
    dry_run: bool = False,
    yes: bool = False,
) -> None:
    """Handle the publish command from the CLI with plan and confirmation."""
    try:
        console.log(f"workspace: {workspace.root}")

        with console.status("Loading workspace packages...") as status:

            def on_lookup(progress: LookupProgress) -> None:
                status.update(
                    f"Checking latest versions {progress.completed}/{progress.total}..."
                )

            cmd = PublishCommand(
                CommandContext(workspace=workspace, dry_run=dry_run),
                PublishOptions(
                    dry_run=dry_run,
                    on_lookup=on_lookup,
                    on_publish=lambda entry, index, total: console.log(
                        f"Publishing ({index}/{total}) {entry.name}@{entry.version}..."
                    ),
                    on_output=lambda line: console.print(line, markup=False, highlight=False),
                ),
            )
            # 1. Plan
            result = await cmd.plan()

        if not result.package_count:
            console.print("[yellow]No maintainable packages in workspace[/yellow]")
            return

        if not result.updates:
            console.print("[yellow]No packages to publish[/yellow]")
            return

        graph = workspace.graph
        console.log(
            "Updated packages:\n"
            + "\n".join(f"  {name}@{graph[name].version}" for name in result.updates)
        )

        if dry_run:
            console.print("[yellow]Dry run - no changes will be made[/yellow]\n")

        console.print("[bold]Publish queue:[/bold]")
        console.print(_plan_table(result.plan))

        if dry_run:
            return

        # 2. Confirmation
        if not yes and not typer.confirm("\nPublish these packages?", default=False):
            console.print("[yellow]Publish cancelled.[/yellow]")
            return

        # 3. Execution
        published = await cmd.publish(result.plan)
        console.print(f"\n[green]Published {len(published)} packages[/green]")

    except MonopubError as e:
        error_console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e
    except typer.Exit:
        raise
    except Exception as e:
        error_console.print_exception()
        raise typer.Exit(1) from e
