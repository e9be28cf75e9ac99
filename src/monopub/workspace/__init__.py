"""Workspace discovery, package records and dependency graph."""

from monopub.workspace.graph import (
    PackageGraph,
    build_graph,
    collect_related,
    find_cycle,
    name_order,
)
from monopub.workspace.package import Package, RawDependency, RawPackage
from monopub.workspace.workspace import Workspace, find_workspace_root

__all__ = [
    "Package",
    "PackageGraph",
    "RawDependency",
    "RawPackage",
    "Workspace",
    "build_graph",
    "collect_related",
    "find_cycle",
    "find_workspace_root",
    "name_order",
]
