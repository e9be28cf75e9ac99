"""Workspace dependency graph."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path

from monopub.errors import CyclicDependencyError, PackageNotFoundError
from monopub.filters import filter_by_ignore
from monopub.versioning import Version
from monopub.workspace.package import Package, RawPackage


class PackageGraph(Mapping[str, Package]):
    """Read-only mapping of package name to Package.

    Iteration follows name order. Graph algorithms use the precomputed
    closures and only rely on that order to break ties.
    """

    def __init__(self, packages: Iterable[Package]) -> None:
        self._packages: dict[str, Package] = {pkg.name: pkg for pkg in packages}

    def __getitem__(self, name: str) -> Package:
        return self._packages[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __repr__(self) -> str:
        return f"PackageGraph({list(self._packages)})"

    def get_package(self, name: str) -> Package:
        """Get a package by name.

        Raises:
            PackageNotFoundError: If the package is not in the graph.
        """
        try:
            return self._packages[name]
        except KeyError as e:
            raise PackageNotFoundError(name) from e

    def get_dependencies(self, name: str) -> list[Package]:
        """Get direct dependencies of a package."""
        return [self._packages[dep] for dep in self.get_package(name).dependencies]

    def get_dependents(self, name: str) -> list[Package]:
        """Get direct dependents of a package."""
        return [self._packages[dep] for dep in self.get_package(name).dependents]


def collect_related(edges: Mapping[str, Sequence[str]], name: str) -> list[str]:
    """Collect every name reachable from ``name`` by following ``edges``.

    Breadth-first; each name is visited once so cycles terminate.

    Args:
        edges: Adjacency lists (dependencies or dependents).
        name: Starting package.

    Returns:
        Reachable names in discovery order, excluding ``name`` itself.
    """
    seen = {name}
    related: list[str] = []
    queue = deque([name])

    while queue:
        current = queue.popleft()
        for neighbour in edges[current]:
            if neighbour not in seen:
                seen.add(neighbour)
                related.append(neighbour)
                queue.append(neighbour)

    return related


def find_cycle(edges: Mapping[str, Sequence[str]]) -> list[str] | None:
    """Find one dependency cycle.

    Returns:
        Names along the cycle with the first name repeated at the end,
        or None if the graph is acyclic.
    """
    done: set[str] = set()

    for start in edges:
        if start in done:
            continue

        # Depth-first with an explicit stack so deep chains do not recurse
        path: list[str] = [start]
        on_path: set[str] = {start}
        pending: list[Iterator[str]] = [iter(edges[start])]

        while pending:
            dep = next(pending[-1], None)
            if dep is None:
                pending.pop()
                finished = path.pop()
                on_path.discard(finished)
                done.add(finished)
                continue
            if dep in on_path:
                return path[path.index(dep) :] + [dep]
            if dep not in done:
                path.append(dep)
                on_path.add(dep)
                pending.append(iter(edges[dep]))

    return None


def name_order(name: str) -> tuple[str, str]:
    """Sort key for package names.

    Case-insensitive first, so ``alpha`` precedes ``Zeta``, with the exact
    name breaking ties. Does not depend on the process locale.
    """
    return name.casefold(), name


def build_graph(
    raw_packages: Iterable[RawPackage],
    *,
    link_prefix: str = "link:",
    ignore: list[str] | None = None,
    root: Path | None = None,
) -> PackageGraph:
    """Build the dependency graph of maintainable workspace packages.

    Private and ignored packages are dropped, as are dependencies on them.
    Only dependencies resolved through ``link_prefix`` become edges.

    Args:
        raw_packages: Records from the workspace listing.
        link_prefix: Resolution prefix marking local workspace links.
        ignore: fnmatch patterns on package name or path to exclude.
        root: Workspace root; path patterns also match paths relative to it.

    Returns:
        Graph keyed by package name, in name order.

    Raises:
        CyclicDependencyError: If linked packages form a cycle.
    """
    public = [raw for raw in raw_packages if not raw.private]
    maintained = sorted(
        filter_by_ignore(public, ignore, root),
        key=lambda raw: name_order(raw.name),
    )
    names = {raw.name for raw in maintained}

    dependencies: dict[str, list[str]] = {raw.name: [] for raw in maintained}
    dependents: dict[str, list[str]] = {raw.name: [] for raw in maintained}

    for raw in maintained:
        # Merged declarations hold each name once
        for dep_name, dep in raw.declared_dependencies().items():
            if dep_name == raw.name or dep_name not in names or not dep.is_link(link_prefix):
                continue
            dependencies[raw.name].append(dep_name)
            if raw.name not in dependents[dep_name]:
                dependents[dep_name].append(raw.name)

    if (cycle := find_cycle(dependencies)) is not None:
        raise CyclicDependencyError(cycle)

    return PackageGraph(
        Package(
            name=raw.name,
            version=Version.parse(raw.version),
            path=Path(raw.path),
            dependencies=tuple(dependencies[raw.name]),
            dependents=tuple(dependents[raw.name]),
            all_dependencies=frozenset(collect_related(dependencies, raw.name)),
            all_dependents=frozenset(collect_related(dependents, raw.name)),
        )
        for raw in maintained
    )
