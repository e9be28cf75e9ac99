"""Publish queue planning.

Detected updates are propagated to every package that depends on an
updated package, directly or transitively, and the resulting entries are
ordered so dependencies are published before their dependents.
"""

from __future__ import annotations

import heapq
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from monopub.errors import CyclicDependencyError
from monopub.versioning import Severity, Version
from monopub.workspace.graph import PackageGraph, name_order


@dataclass(frozen=True, slots=True)
class PublishEntry:
    """A package scheduled for publishing.

    Attributes:
        name: Package name.
        version: Version the package is published at.
        severity: Update severity.
        current: Local version before planning.
        propagated: True if the entry comes from a dependency update.
    """

    name: str
    version: Version
    severity: Severity
    current: Version
    propagated: bool = False

    @property
    def bumped(self) -> bool:
        """Whether the manifest version has to be rewritten."""
        return self.version != self.current


@dataclass
class PublishPlan:
    """Ordered publish queue with unique package names."""

    entries: list[PublishEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[PublishEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def names(self) -> list[str]:
        """Package names in publish order."""
        return [entry.name for entry in self.entries]

    def get(self, name: str) -> PublishEntry | None:
        """Get the entry for a package, if planned."""
        return next((entry for entry in self.entries if entry.name == name), None)


def effective_severity(severity: Severity) -> Severity:
    """Severity propagated to dependents.

    A label-only change cannot be expressed downstream, so it becomes a patch.
    """
    return Severity.PATCH if severity == Severity.EXTRA else severity


def order_for_publish(graph: PackageGraph, names: Iterable[str]) -> list[str]:
    """Order packages so every package comes after all of its dependencies.

    Unrelated packages are ordered by name.

    Raises:
        CyclicDependencyError: If the packages cannot be ordered.
    """
    pending = list(names)
    blockers = {name: set(graph[name].all_dependencies) & set(pending) for name in pending}

    ready = [(name_order(name), name) for name in pending if not blockers[name]]
    heapq.heapify(ready)

    order: list[str] = []
    while ready:
        _, name = heapq.heappop(ready)
        order.append(name)
        for dependent in graph[name].all_dependents:
            waiting = blockers.get(dependent)
            if waiting and name in waiting:
                waiting.discard(name)
                if not waiting:
                    heapq.heappush(ready, (name_order(dependent), dependent))

    if len(order) != len(pending):
        remaining = sorted(set(pending) - set(order))
        raise CyclicDependencyError(remaining)

    return order


def plan_publish(graph: PackageGraph, updates: Mapping[str, Severity]) -> PublishPlan:
    """Build the publish queue for detected updates.

    Updated packages keep their local version. Each of their dependents is
    bumped from its own local version at the strongest severity propagated
    to it.

    Args:
        graph: Workspace package graph.
        updates: Detected severity per updated package.

    Returns:
        Publish plan in dependency order.

    Raises:
        VersionError: If a dependent with a non-standard version must be bumped.
    """
    entries: dict[str, PublishEntry] = {}
    for name, severity in updates.items():
        pkg = graph.get_package(name)
        entries[name] = PublishEntry(name, pkg.version, severity, pkg.version)

    for name, severity in updates.items():
        level = effective_severity(severity)
        for dependent in sorted(graph.get_package(name).all_dependents):
            existing = entries.get(dependent)
            if existing is not None and existing.severity >= level:
                continue
            # Always bump from the local version so stronger levels replace weaker ones
            current = graph[dependent].version
            entries[dependent] = PublishEntry(
                dependent, current.bump(level), level, current, propagated=True
            )

    return PublishPlan([entries[name] for name in order_for_publish(graph, entries)])
