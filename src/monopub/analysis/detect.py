"""Detection of packages with unpublished changes."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from monopub.versioning import Severity, Version
from monopub.workspace.graph import PackageGraph


class VersionSource(Protocol):
    """Anything that knows the latest published version of a package."""

    async def latest(self, name: str) -> Version | None:
        """Latest published version, or None if never published."""
        ...


@dataclass(frozen=True, slots=True)
class LookupProgress:
    """Emitted once per finished lookup.

    Attributes:
        name: Package that was looked up.
        latest: Its latest published version, None if never published.
        completed: Lookups finished so far, including this one.
        total: Total number of lookups.
    """

    name: str
    latest: Version | None
    completed: int
    total: int


async def detect_updates(
    graph: PackageGraph,
    source: VersionSource,
    *,
    concurrency: int | None = None,
    on_progress: Callable[[LookupProgress], None] | None = None,
) -> dict[str, Severity]:
    """Find packages whose local version is ahead of the published one.

    All lookups run concurrently. Packages that were never published, or
    whose local version is equal to or behind the published one, are left
    out.

    Args:
        graph: Workspace package graph.
        source: Where latest versions come from.
        concurrency: Maximum lookups in flight, unbounded if None.
        on_progress: Called after each lookup finishes.

    Returns:
        Map of package name to detected severity, in graph order.

    Raises:
        Exception: The first lookup failure; remaining lookups are cancelled.
    """
    names = list(graph)
    semaphore = asyncio.Semaphore(concurrency) if concurrency else None
    completed = 0

    async def lookup(name: str) -> Version | None:
        nonlocal completed
        if semaphore is None:
            latest = await source.latest(name)
        else:
            async with semaphore:
                latest = await source.latest(name)

        completed += 1
        if on_progress:
            on_progress(LookupProgress(name, latest, completed, len(names)))
        return latest

    tasks = [asyncio.create_task(lookup(name)) for name in names]
    try:
        latest_versions = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    updates: dict[str, Severity] = {}
    for name, latest in zip(names, latest_versions):
        if latest is None:
            continue
        diff = graph[name].version.compare(latest)
        if diff.side == 1:
            updates[name] = diff.severity

    return updates
