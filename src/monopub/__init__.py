"""monopub - publish interdependent pnpm workspace packages.

Provides:
- Workspace package discovery through pnpm
- Dependency graph with transitive closures
- Detection of packages ahead of their published version
- Bump propagation to dependents and dependency-first publish order
"""

from monopub.analysis import (
    LookupProgress,
    PublishEntry,
    PublishPlan,
    VersionSource,
    detect_updates,
    plan_publish,
)
from monopub.config import MonopubConfig, load_config
from monopub.errors import (
    ConfigurationError,
    CyclicDependencyError,
    ExecutionError,
    MonopubError,
    PackageNotFoundError,
    PublishError,
    RegistryError,
    VersionError,
    WorkspaceNotFoundError,
)
from monopub.versioning import Severity, Version, VersionDiff
from monopub.workspace import Package, PackageGraph, RawPackage, Workspace, build_graph

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core
    "Workspace",
    "Package",
    "PackageGraph",
    "RawPackage",
    "build_graph",
    "MonopubConfig",
    "load_config",
    # Versioning
    "Severity",
    "Version",
    "VersionDiff",
    # Analysis
    "LookupProgress",
    "PublishEntry",
    "PublishPlan",
    "VersionSource",
    "detect_updates",
    "plan_publish",
    # Errors
    "MonopubError",
    "ConfigurationError",
    "WorkspaceNotFoundError",
    "PackageNotFoundError",
    "CyclicDependencyError",
    "VersionError",
    "ExecutionError",
    "RegistryError",
    "PublishError",
]
